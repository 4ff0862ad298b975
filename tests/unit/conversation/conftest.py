"""Fixtures for conversation tests."""

from __future__ import annotations

import pytest

from orator.conversation.analysis import AnalysisData
from orator.conversation.context import InterviewContext, PublicSpeakingContext, SalesPitchContext


@pytest.fixture
def interview_context() -> InterviewContext:
    return InterviewContext(
        interview_type="behavioral interview",
        role="Consultant",
        company="McKinsey",
        focus_areas=["Leadership"],
    )


@pytest.fixture
def speech_context() -> PublicSpeakingContext:
    return PublicSpeakingContext(
        occasion="wedding toast",
        audience_demographic="family and friends",
        main_points=["How we met", "A funny story", "Wishes for the couple"],
    )


@pytest.fixture
def pitch_context() -> SalesPitchContext:
    return SalesPitchContext(
        product="SolarKit 3000",
        target_audience="suburban homeowners",
        key_features=["Easy installation", "25-year warranty"],
    )


@pytest.fixture
def analysis_factory():
    def _make(transcription: str, **scores) -> AnalysisData:
        return AnalysisData(transcription=transcription, **scores)

    return _make
