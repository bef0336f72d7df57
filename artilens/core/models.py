from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple


class FileType(str, Enum):
    PREFETCH = "prefetch"
    EVTX = "evtx"
    REGISTRY = "registry"
    MEMORY = "memory"
    NETWORK = "network"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ArtifactClassification:
    file_type: FileType
    mime_type: str
    size: int
    hash: str
    entropy: float
    suspicious_indicators: Tuple[str, ...] = field(default_factory=tuple)
    summary: str = ""
    blake3: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fileType": self.file_type.value,
            "mimeType": self.mime_type,
            "size": self.size,
            "hash": self.hash,
            "blake3": self.blake3,
            "entropy": self.entropy,
            "suspiciousIndicators": list(self.suspicious_indicators),
            "summary": self.summary,
        }


@dataclass(frozen=True)
class StagedArtifactRecord:
    model: str
    timestamp: str
    raw_content: str
    summary: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "model": self.model,
            "timestamp": self.timestamp,
            "rawContent": self.raw_content,
            "summary": self.summary,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "StagedArtifactRecord":
        return cls(
            model=str(payload["model"]),
            timestamp=str(payload["timestamp"]),
            raw_content=str(payload["rawContent"]),
            summary=str(payload["summary"]),
        )


@dataclass(frozen=True)
class SummaryUpdate:
    case_id: str
    summary: str


@dataclass
class ParsedArtifact:
    filename: str
    content: str
    size: int
    mime_type: str
    encoding: str = "utf-8"
