# src/knowledge/repository.py
from typing import Dict, List, Optional
from .domains import KnowledgeEntry

class KnowledgeRepository:
    """지식 베이스 저장소 - Sayonara 프로젝트 자료 기반 정적 데이터"""

    def __init__(self, entries: Optional[List[KnowledgeEntry]] = None):
        # dict는 삽입 순서를 유지하므로 동점 정렬 기준으로 그대로 사용
        self._entries: Dict[str, KnowledgeEntry] = {}
        for entry in entries if entries is not None else _reference_entries():
            self._entries[entry.topic] = entry

    def find_all(self) -> List[KnowledgeEntry]:
        """전체 항목 조회 (삽입 순서)"""
        return list(self._entries.values())

    def find_by_topic(self, topic: str) -> Optional[KnowledgeEntry]:
        """토픽명으로 조회"""
        return self._entries.get(topic)

    def count(self) -> int:
        return len(self._entries)


def _reference_entries() -> List[KnowledgeEntry]:
    return [
        KnowledgeEntry(
            topic="Secure Data Wiping",
            content=(
                "Sayonara auto-selects the right sanitization method per device "
                "(HDD, SSD, NVMe, Android) and runs a dual-phase erasure: crypto-erase "
                "followed by firmware sanitize, aligned with NIST 800-88 and IEEE 2883."
            ),
            keywords=frozenset({
                "wipe", "wiping", "erase", "erasure", "sanitiz", "nist", "800-88",
                "ssd", "hdd", "nvme", "firmware",
            }),
        ),
        KnowledgeEntry(
            topic="Blockchain Verification",
            content=(
                "Every wipe produces a signed JSON/PDF certificate with a QR code whose "
                "hash is anchored on the Ethereum Sepolia testnet. This gives buyers and "
                "auditors tamper-proof, immutable proof of erasure; when offline, "
                "certificates are signed locally and anchoring is deferred."
            ),
            keywords=frozenset({
                "blockchain", "certificate", "tamper", "ethereum", "sepolia",
                "anchor", "immutable", "audit",
            }),
        ),
        KnowledgeEntry(
            topic="Forensic Recovery Validation",
            content=(
                "After erasure Sayonara runs a built-in forensic recovery test (the proof "
                "loop). If any data is recoverable the device is automatically re-wiped "
                "before a certificate is issued, removing the 'did it really wipe?' doubt."
            ),
            keywords=frozenset({
                "forensic", "recovery", "recoverable", "validation", "proof loop",
                "re-wipe",
            }),
        ),
        KnowledgeEntry(
            topic="Technical Stack",
            content=(
                "Core engine: Rust on an Alpine Linux ISO/USB with Axum. Frontends: React, "
                "Tauri (Windows/Linux), React Native (Android), Next.js + Supabase "
                "dashboards. Blockchain: Solidity, Ethers.js and an anchoring gateway. "
                "AI: Gemini + LangChain. Security: HSM/Vault, TLS 1.3. Monitoring: "
                "Prometheus + Grafana, ELK/OpenSearch."
            ),
            keywords=frozenset({
                "rust", "tauri", "react", "axum", "alpine", "supabase", "next.js",
                "langchain", "technolog", "architecture", "stack",
            }),
        ),
        KnowledgeEntry(
            topic="Feasibility",
            content=(
                "Sayonara relies on industry-standard methods and works offline for "
                "air-gapped enterprises via a bootable USB image. Challenges include SSD "
                "vendor lock-in, Android bootloader restrictions and SME adoption; these "
                "are addressed with vendor tool integration (NVMe CLI, PSID Revert, "
                "Android FBE key shred), one-click UX and an offline-first design."
            ),
            keywords=frozenset({
                "feasib", "challenge", "risk", "adoption", "offline", "air-gapped",
                "vendor", "bootloader", "regulation",
            }),
        ),
        KnowledgeEntry(
            topic="CSR Dashboard",
            content=(
                "SMEs get a dashboard quantifying their ESG impact: devices recycled, "
                "kilograms of CO2 saved and landfill waste avoided, supporting CSR "
                "reporting and compliance goals."
            ),
            keywords=frozenset({
                "csr", "esg", "dashboard", "co2", "landfill", "recycl", "e-waste",
                "environment",
            }),
        ),
        KnowledgeEntry(
            topic="Resale Valuation",
            content=(
                "A health scan runs alongside the wipe and an AI estimator ties the "
                "device's health data to a resale valuation, protecting resale value "
                "that is otherwise lost for lack of proof."
            ),
            keywords=frozenset({
                "resale", "valuation", "health", "value", "estimator", "price",
            }),
        ),
        KnowledgeEntry(
            topic="RAG System",
            content=(
                "The assistant grounds its answers with retrieval-augmented generation: "
                "relevant entries from the Sayonara knowledge base are looked up and "
                "prepended to the prompt before the model answers."
            ),
            keywords=frozenset({
                "rag", "retrieval", "knowledge base", "augmented", "grounding",
            }),
        ),
    ]
