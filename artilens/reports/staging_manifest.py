from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Sequence

from artilens.core.models import StagedArtifactRecord
from artilens.infra.filesystem import compute_sha256, write_json
from artilens.infra.logging_utils import LOGGER
from artilens.infra.staging import StagingWriter

EMPTY_DIGEST = "No analysis results available yet."
JSON_BLOCK = re.compile(r"```json\s*([\s\S]*?)\s*```")


def extract_findings(raw_content: str) -> List[Dict[str, Any]]:
    """Findings listed in the first fenced ```json block of a model output."""
    match = JSON_BLOCK.search(raw_content)
    if not match:
        return []
    try:
        parsed = json.loads(match.group(1))
    except ValueError:
        return []
    if not isinstance(parsed, dict) or not isinstance(parsed.get("findings"), list):
        return []
    return [item for item in parsed["findings"] if isinstance(item, dict)]


def calculate_confidence(raw_content: str) -> int:
    score = 50
    if "```json" in raw_content:
        score += 20
    if "findings" in raw_content:
        score += 15
    if "evidence" in raw_content:
        score += 10
    if "critical" in raw_content or "high" in raw_content:
        score += 5
    return min(100, score)


def _count_severity(findings: Sequence[Dict[str, Any]], severity: str) -> int:
    return sum(1 for finding in findings if finding.get("severity") == severity)


def high_level_summary(records: Sequence[StagedArtifactRecord]) -> str:
    """One-line digest over staged records; ``records`` must be newest first."""
    if not records:
        return EMPTY_DIGEST
    latest = records[0]
    model_count = len({r.model for r in records})
    average = sum(calculate_confidence(r.raw_content) for r in records) / len(records)
    findings = [finding for r in records for finding in extract_findings(r.raw_content)]
    critical = _count_severity(findings, "critical")
    high = _count_severity(findings, "high")

    summary = f"Analysis Summary: {model_count} models analyzed. Confidence: {int(average + 0.5)}%. "
    if critical:
        summary += f"{critical} critical findings detected. "
    if high:
        summary += f"{high} high-severity findings detected. "
    return summary + f"Latest: {latest.summary[:150]}..."


def generate_staging_manifest(writer: StagingWriter, output_path: Path) -> Path:
    records = writer.list_records()
    entries: List[Dict[str, Any]] = []
    for record in records:
        findings = extract_findings(record.raw_content)
        entries.append(
            {
                "model": record.model,
                "timestamp": record.timestamp,
                "raw_sha256": compute_sha256(record.raw_content.encode("utf-8")),
                "raw_length": len(record.raw_content),
                "summary_preview": record.summary[:150],
                "confidence": calculate_confidence(record.raw_content),
                "findings": len(findings),
                "critical_findings": _count_severity(findings, "critical"),
                "high_findings": _count_severity(findings, "high"),
            }
        )
    payload: Dict[str, Any] = {
        "staging_dir": str(writer.staging_dir),
        "digest": high_level_summary(records),
        "records": entries,
    }
    write_json(output_path, payload)
    LOGGER.info("Staging manifest generated", extra={"extra_data": {"output": str(output_path), "records": len(records)}})
    return output_path
