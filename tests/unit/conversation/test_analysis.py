"""Tests for analysis accumulation."""

from __future__ import annotations

import pytest

from orator.conversation.analysis import AnalysisAccumulator, AnalysisData
from orator.exceptions import InvalidStateError


class TestAnalysisData:
    def test_from_camel_case_payload(self):
        data = AnalysisData.model_validate(
            {"transcription": "hello there", "fillerWordsCount": 2, "paceWpm": 151.4}
        )

        assert data.filler_words_count == 2
        assert data.pace_wpm == 151.4

    def test_str_includes_present_metrics(self):
        data = AnalysisData(
            transcription="hello there",
            filler_words_count=2,
            average_pause_duration=0.456,
            pace_wpm=151.4,
            accuracy=0.92,
        )

        text = str(data)

        assert text.startswith('AnalysisData(transcription="hello there"')
        assert "filler words: 2" in text
        assert "average pause: 0.46s" in text
        assert "pace: 151 wpm" in text
        assert "accuracy: 92%" in text
        assert "sentiment" not in text
        assert "\n" not in text

    def test_str_transcription_only(self):
        assert str(AnalysisData(transcription="hi")) == 'AnalysisData(transcription="hi")'


class TestAnalysisAccumulator:
    def test_summarize_in_recording_order(self):
        accumulator = AnalysisAccumulator()
        a1 = AnalysisData(transcription="first", filler_words_count=1)
        a2 = AnalysisData(transcription="second", sentiment_score=-0.25)

        accumulator.record(a1)
        accumulator.record(a2)

        assert len(accumulator) == 2
        assert accumulator.summarize() == f"{a1}\n{a2}"
        assert accumulator.summarize().splitlines() == [str(a1), str(a2)]

    def test_empty_summary(self):
        assert AnalysisAccumulator().summarize() == ""

    def test_reset_clears(self):
        accumulator = AnalysisAccumulator()
        accumulator.record(AnalysisData(transcription="first"))
        accumulator.freeze()

        accumulator.reset()

        assert len(accumulator) == 0
        assert accumulator.summarize() == ""
        assert accumulator.frozen is False

    def test_frozen_rejects_records(self):
        accumulator = AnalysisAccumulator()
        accumulator.record(AnalysisData(transcription="first"))
        accumulator.freeze()

        with pytest.raises(InvalidStateError):
            accumulator.record(AnalysisData(transcription="second"))

        assert len(accumulator) == 1

    def test_records_is_a_copy(self):
        accumulator = AnalysisAccumulator()
        records = accumulator.records
        accumulator.record(AnalysisData(transcription="first"))

        assert records == ()
        assert len(accumulator.records) == 1
