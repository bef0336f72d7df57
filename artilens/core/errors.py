from __future__ import annotations


class ClassificationError(TypeError):
    """Raised when classify() is handed something that is not a byte buffer."""


class StagingIOError(OSError):
    """Staged record could not be persisted. Never escapes StagingWriter.stage_data."""
