# src/streaming/__init__.py
from .domains import StreamEvent, StreamState, RealStream, SimulatedStream, StreamSource
from .emitter import StreamEmitter

__all__ = [
    "StreamEvent",
    "StreamState",
    "RealStream",
    "SimulatedStream",
    "StreamSource",
    "StreamEmitter"
]
