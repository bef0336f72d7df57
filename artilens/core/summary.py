"""Live per-case summaries for streamed model output.

A ``SummaryAccumulator`` keeps one bounded text per case id and notifies its
listeners after every chunk. Callers must serialize chunk submissions for the
same case id; different case ids are independent.
"""
from __future__ import annotations

import queue
from abc import ABC, abstractmethod
from typing import Callable, Dict, Iterable, Tuple

from artilens.core.models import SummaryUpdate
from artilens.infra.logging_utils import LOGGER

INITIAL_SUMMARY = "Initiating analysis..."
MAX_SUMMARY_LENGTH = 1000
TRUNCATION_MARKER = "..."
FINAL_SUMMARY_PREFIX = "Final Summary: "
FINAL_SUMMARY_LIMIT = 500


class SummaryListener(ABC):
    @abstractmethod
    def on_summary_update(self, update: SummaryUpdate) -> None:
        raise NotImplementedError


class CallbackListener(SummaryListener):
    def __init__(self, callback: Callable[[str, str], None]) -> None:
        self.callback = callback

    def on_summary_update(self, update: SummaryUpdate) -> None:
        self.callback(update.case_id, update.summary)


class QueueSummaryListener(SummaryListener):
    """Publishes updates to a queue so a UI thread can drain them."""

    def __init__(self, channel: "queue.Queue[SummaryUpdate] | None" = None) -> None:
        self.channel: "queue.Queue[SummaryUpdate]" = channel if channel is not None else queue.Queue()

    def on_summary_update(self, update: SummaryUpdate) -> None:
        self.channel.put(update)


def extract_summary(full_content: str) -> str:
    return f"{FINAL_SUMMARY_PREFIX}{full_content[:FINAL_SUMMARY_LIMIT]}..."


def _notify(listeners: Tuple[SummaryListener, ...], update: SummaryUpdate) -> None:
    for listener in listeners:
        try:
            listener.on_summary_update(update)
        except Exception as exc:
            LOGGER.error(
                "Summary listener failed",
                extra={"extra_data": {"listener": type(listener).__name__, "case_id": update.case_id, "error": str(exc)}},
            )


class SummaryAccumulator:
    def __init__(self, listeners: Iterable[SummaryListener] = ()) -> None:
        self.listeners: Tuple[SummaryListener, ...] = tuple(listeners)
        self._summaries: Dict[str, str] = {}

    def process_stream_chunk(self, case_id: str, model_name: str, chunk: str) -> str:
        text = self._summaries.get(case_id, INITIAL_SUMMARY) + f" {model_name}: {chunk}"
        if len(text) > MAX_SUMMARY_LENGTH:
            keep = MAX_SUMMARY_LENGTH - len(TRUNCATION_MARKER)
            text = TRUNCATION_MARKER + text[-keep:]
        self._summaries[case_id] = text
        _notify(self.listeners, SummaryUpdate(case_id=case_id, summary=text))
        return text

    def get_current_summary(self, case_id: str) -> str:
        return self._summaries.get(case_id, INITIAL_SUMMARY)

    def reset_summary(self, case_id: str) -> None:
        self._summaries[case_id] = INITIAL_SUMMARY

    def case_ids(self) -> Tuple[str, ...]:
        return tuple(self._summaries)


class SummaryFinalizer:
    """Summarizes one complete model output and announces it for its case."""

    def __init__(self, listeners: Iterable[SummaryListener] = ()) -> None:
        self.listeners: Tuple[SummaryListener, ...] = tuple(listeners)

    def finalize(self, case_id: str, full_content: str) -> str:
        summary = extract_summary(full_content)
        _notify(self.listeners, SummaryUpdate(case_id=case_id, summary=summary))
        return summary
