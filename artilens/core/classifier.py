from __future__ import annotations

from typing import List, Tuple

from artilens.core.errors import ClassificationError
from artilens.core.models import ArtifactClassification, FileType
from artilens.core.signatures import detect_file_type, mime_type_for
from artilens.infra.filesystem import calculate_entropy, compute_blake3_hash, compute_sha256
from artilens.infra.logging_utils import LOGGER

TEXT_SCAN_LIMIT = 10000
HIGH_ENTROPY_THRESHOLD = 7.5
MEDIUM_ENTROPY_THRESHOLD = 5.0

# (label, tokens); each family yields at most one label.
INDICATOR_FAMILIES: List[Tuple[str, Tuple[str, ...]]] = [
    ("Command execution indicators", ("cmd.exe", "powershell")),
    ("Network activity indicators", ("http://", "https://")),
    ("Privilege escalation indicators", ("admin", "administrator")),
]


def entropy_level(entropy: float) -> str:
    if entropy > HIGH_ENTROPY_THRESHOLD:
        return "high"
    if entropy >= MEDIUM_ENTROPY_THRESHOLD:
        return "medium"
    return "low"


def find_suspicious_indicators(data: bytes) -> Tuple[str, ...]:
    # latin-1 maps every byte to one code point, so decoding cannot fail and
    # ASCII tokens match exactly where their bytes occur.
    text = bytes(data[:TEXT_SCAN_LIMIT]).decode("latin-1")
    return tuple(label for label, tokens in INDICATOR_FAMILIES if any(token in text for token in tokens))


def build_summary(file_type: FileType, size: int, entropy: float, indicators: Tuple[str, ...]) -> str:
    size_mb = size / 1024 / 1024
    return (
        f"File type: {file_type.value}, Size: {size_mb:.2f}MB, "
        f"Entropy: {entropy_level(entropy)} ({entropy:.2f}), Indicators: {len(indicators)}"
    )


def classify(data: bytes) -> ArtifactClassification:
    """Fingerprint an in-memory artifact.

    Every field is a pure function of ``data``: the file type comes from the
    first 512 bytes, entropy and hashes from the whole buffer, indicators from
    the first 10000 bytes.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise ClassificationError(f"expected a byte buffer, got {type(data).__name__}")
    data = bytes(data)
    file_type = detect_file_type(data)
    entropy = calculate_entropy(data)
    indicators = find_suspicious_indicators(data)
    result = ArtifactClassification(
        file_type=file_type,
        mime_type=mime_type_for(file_type),
        size=len(data),
        hash=compute_sha256(data),
        entropy=entropy,
        suspicious_indicators=indicators,
        summary=build_summary(file_type, len(data), entropy, indicators),
        blake3=compute_blake3_hash(data),
    )
    LOGGER.debug(
        "Artifact classified",
        extra={"extra_data": {"file_type": file_type.value, "size": result.size, "indicators": len(indicators)}},
    )
    return result
