from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from artilens.core.summary import SummaryAccumulator, SummaryFinalizer, SummaryListener
from artilens.infra.logging_utils import LOGGER
from artilens.infra.staging import StagingWriter


class StreamProcessor:
    """Routes raw model output into live summaries and the staging sink."""

    def __init__(
        self,
        writer: StagingWriter,
        accumulator: Optional[SummaryAccumulator] = None,
        finalizer: Optional[SummaryFinalizer] = None,
    ) -> None:
        self.writer = writer
        self.accumulator = accumulator or SummaryAccumulator()
        self.finalizer = finalizer or SummaryFinalizer(self.accumulator.listeners)

    @classmethod
    def with_listeners(cls, writer: StagingWriter, listeners: Iterable[SummaryListener]) -> "StreamProcessor":
        listeners = tuple(listeners)
        return cls(writer, SummaryAccumulator(listeners), SummaryFinalizer(listeners))

    def process_stream_chunk(self, model_name: str, chunk: str, case_id: str) -> str:
        LOGGER.debug(
            "Processing stream chunk",
            extra={"extra_data": {"model": model_name, "case_id": case_id, "chunk_preview": chunk[:50]}},
        )
        return self.accumulator.process_stream_chunk(case_id, model_name, chunk)

    async def process_static_output(self, model_name: str, raw_content: str, case_id: str) -> Optional[Path]:
        LOGGER.info(
            "Processing static output",
            extra={"extra_data": {"model": model_name, "case_id": case_id, "length": len(raw_content)}},
        )
        summary = self.finalizer.finalize(case_id, raw_content)
        return await self.writer.stage_data(model_name, raw_content, summary)

    def current_summary(self, case_id: str) -> str:
        return self.accumulator.get_current_summary(case_id)

    def reset_case(self, case_id: str) -> None:
        self.accumulator.reset_summary(case_id)
