from __future__ import annotations

import asyncio
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional

from cryptography.exceptions import InvalidTag

from artilens.core.errors import StagingIOError
from artilens.core.models import StagedArtifactRecord
from artilens.infra.config import Settings
from artilens.infra.crypto import seal, unseal
from artilens.infra.filesystem import sanitize_model_name, sanitize_timestamp
from artilens.infra.logging_utils import LOGGER

ENCRYPTED_SUFFIX = ".enc"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


class StagingWriter:
    """Best-effort sink for complete model outputs and their summaries.

    Each call writes one new file; existing files are never touched.
    """

    def __init__(
        self,
        staging_dir: Path,
        passphrase: Optional[str] = None,
        clock: Callable[[], str] = utc_timestamp,
    ) -> None:
        self.staging_dir = Path(staging_dir)
        self.passphrase = passphrase
        self.clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "StagingWriter":
        return cls(settings.staging_dir, passphrase=settings.staging_passphrase)

    async def stage_data(self, model_name: str, raw_content: str, summary: str) -> Optional[Path]:
        LOGGER.info(
            "Staging data",
            extra={"extra_data": {"model": model_name, "summary_preview": summary[:50]}},
        )
        record = StagedArtifactRecord(
            model=model_name,
            timestamp=self.clock(),
            raw_content=raw_content,
            summary=summary,
        )
        try:
            path = await asyncio.to_thread(self._write_record, record)
        except StagingIOError as exc:
            LOGGER.error(
                "Staging failed",
                extra={"extra_data": {"model": model_name, "staging_dir": str(self.staging_dir), "error": str(exc)}},
            )
            return None
        LOGGER.info("Staged data", extra={"extra_data": {"model": model_name, "output": str(path)}})
        return path

    def _file_stem(self, record: StagedArtifactRecord) -> str:
        return f"{sanitize_model_name(record.model)}-{sanitize_timestamp(record.timestamp)}"

    def _write_record(self, record: StagedArtifactRecord) -> Path:
        # Path operations raise ValueError for embedded NUL bytes.
        try:
            payload = json.dumps(record.to_dict(), indent=2).encode("utf-8")
            suffix = ".json"
            if self.passphrase:
                payload = seal(payload, self.passphrase)
                suffix += ENCRYPTED_SUFFIX
            stem = self._file_stem(record)
            self.staging_dir.mkdir(parents=True, exist_ok=True)
            attempt = 0
            while True:
                name = f"{stem}{suffix}" if attempt == 0 else f"{stem}-{attempt}{suffix}"
                path = self.staging_dir / name
                try:
                    with path.open("xb") as f:
                        f.write(payload)
                    return path
                except FileExistsError:
                    attempt += 1
        except (OSError, ValueError) as exc:
            raise StagingIOError(f"could not stage {record.model}: {exc}") from exc

    def load_record(self, path: Path) -> StagedArtifactRecord:
        data = Path(path).read_bytes()
        if path.name.endswith(ENCRYPTED_SUFFIX):
            if not self.passphrase:
                raise ValueError("Passphrase required for encrypted staged record")
            data = unseal(data, self.passphrase)
        return StagedArtifactRecord.from_dict(json.loads(data.decode("utf-8")))

    def list_records(self) -> List[StagedArtifactRecord]:
        if not self.staging_dir.is_dir():
            return []
        paths = sorted(self.staging_dir.glob("*.json")) + sorted(self.staging_dir.glob(f"*.json{ENCRYPTED_SUFFIX}"))
        records: List[StagedArtifactRecord] = []
        for path in paths:
            try:
                records.append(self.load_record(path))
            except (OSError, ValueError, KeyError, InvalidTag) as exc:
                LOGGER.warning("Skipping unreadable staged record", extra={"extra_data": {"path": str(path), "error": str(exc)}})
        records.sort(key=lambda r: r.timestamp, reverse=True)
        return records
