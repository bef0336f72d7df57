from __future__ import annotations

import hashlib
import json
import re
from pathlib import Path
from typing import Any, Dict

import blake3
import numpy as np

_ILLEGAL_FILENAME_CHARS = re.compile(r'[:<>"|?*]')


def compute_sha256(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def compute_blake3_hash(data: bytes) -> str:
    return blake3.blake3(data).hexdigest()


def calculate_entropy(data: bytes) -> float:
    """Shannon entropy of the whole buffer in bits per byte."""
    if not data:
        return 0.0
    counts = np.bincount(np.frombuffer(data, dtype=np.uint8), minlength=256)
    probabilities = counts[counts > 0] / len(data)
    entropy = float(-(probabilities * np.log2(probabilities)).sum())
    return max(0.0, min(8.0, entropy))


def sanitize_model_name(name: str) -> str:
    return name.replace("/", "_").replace("\\", "_")


def sanitize_timestamp(timestamp: str) -> str:
    return _ILLEGAL_FILENAME_CHARS.sub("-", timestamp)


def read_json(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def write_json(path: Path, payload: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
