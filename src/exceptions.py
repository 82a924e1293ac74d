# src/exceptions.py

class SayonaraException(Exception):
    """기본 예외 클래스"""
    def __init__(self, message):
        super().__init__(message)
        self.message = message

# 클라이언트 측 예외 (4xx)
class ClientException(SayonaraException):
    """클라이언트 측 오류"""

class InvalidRequestException(ClientException):
    """클라이언트로부터 잘못된 요청이 왔을 때 (필수 필드 누락 등)"""

class NotFoundException(ClientException):
    """데이터를 찾지 못했을 때"""

class SessionNotFoundException(NotFoundException):
    """세션을 찾을 수 없을 때"""

# 서버 측 오류 (5xx)
class ServerException(SayonaraException):
    """서버 측 오류"""

class ConfigurationException(ServerException):
    """API 키 누락 등 설정 오류 - 데모 모드가 아니면 기동 중단"""

class UpstreamException(ServerException):
    """LLM API 호출 실패 (인증, 네트워크, 잘못된 응답)"""
