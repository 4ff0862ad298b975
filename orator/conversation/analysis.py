"""Speech analysis records and their accumulation over a session.

The speech analyzer emits one AnalysisData per completed user turn. The
engine only relies on the transcription and the human-readable summary
produced by ``str()``; the scoring fields are carried through for the
final feedback request.
"""
from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from orator.exceptions import InvalidStateError

logger = logging.getLogger("analysis")


class AnalysisData(BaseModel):
    """Analyzer output for a single spoken turn."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    transcription: str
    filler_words_count: int | None = None
    average_pause_duration: float | None = None
    talk_time_seconds: float | None = None
    talk_time_percentage: float | None = None
    pace_wpm: float | None = None
    sentiment_score: float | None = None
    accuracy: float | None = None

    def __str__(self) -> str:
        parts = [f'transcription="{self.transcription}"']
        if self.filler_words_count is not None:
            parts.append(f"filler words: {self.filler_words_count}")
        if self.average_pause_duration is not None:
            parts.append(f"average pause: {self.average_pause_duration:.2f}s")
        if self.talk_time_seconds is not None:
            parts.append(f"talk time: {self.talk_time_seconds:.1f}s")
        if self.talk_time_percentage is not None:
            parts.append(f"talk time share: {self.talk_time_percentage:.0f}%")
        if self.pace_wpm is not None:
            parts.append(f"pace: {self.pace_wpm:.0f} wpm")
        if self.sentiment_score is not None:
            parts.append(f"sentiment: {self.sentiment_score:+.2f}")
        if self.accuracy is not None:
            parts.append(f"accuracy: {self.accuracy:.0%}")
        return "AnalysisData(" + ", ".join(parts) + ")"


class AnalysisAccumulator:
    """Ordered, append-only collection of per-turn analysis records.

    Cleared at the start of each conversation and frozen once feedback
    synthesis begins.
    """

    def __init__(self) -> None:
        self._records: list[AnalysisData] = []
        self._frozen = False

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> tuple[AnalysisData, ...]:
        return tuple(self._records)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def reset(self) -> None:
        self._records.clear()
        self._frozen = False

    def freeze(self) -> None:
        self._frozen = True

    def record(self, data: AnalysisData) -> None:
        """Append a record.

        Raises:
            InvalidStateError: If the accumulator is frozen
        """
        if self._frozen:
            raise InvalidStateError(
                operation="record analysis",
                phase="frozen",
                reason="feedback synthesis has already begun",
            )
        self._records.append(data)
        logger.debug(
            "Analysis recorded",
            extra={"service": "analysis", "analysis_count": len(self._records)},
        )

    def summarize(self) -> str:
        """Render every record on its own line, in recording order."""
        return "\n".join(str(record) for record in self._records)


__all__ = ["AnalysisData", "AnalysisAccumulator"]
