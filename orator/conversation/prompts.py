"""Prompt templates for practice conversations."""
from __future__ import annotations

from typing import assert_never

from orator.ai.providers.base import LLMMessage
from orator.conversation.context import (
    InterviewContext,
    PracticeContext,
    PublicSpeakingContext,
    SalesPitchContext,
)

READY_TO_BEGIN = "I'm ready to begin the interview."

FEEDBACK_REQUEST_PREAMBLE = (
    "The interview is now over. Please provide feedback on my performance, "
    "considering the following analysis of my responses:"
)


def _system_instructions(context: PracticeContext) -> str:
    if isinstance(context, InterviewContext):
        return (
            f"You are simulating a {context.interview_type} for the position of "
            f"{context.role} at {context.company}.\n"
            f"Focus on the following areas: {', '.join(context.focus_areas)}.\n"
            "Ask questions one at a time and wait for the user's response before proceeding.\n"
            "Do not provide feedback until the end."
        )
    if isinstance(context, PublicSpeakingContext):
        return (
            f"You are helping the user prepare a speech for a {context.occasion}.\n"
            f"The audience is {context.audience_demographic}.\n"
            f"The main points of the speech are: {', '.join(context.main_points)}.\n"
            "Please guide the user through practicing their speech, "
            "asking for their input on each point."
        )
    if isinstance(context, SalesPitchContext):
        return (
            f"You are helping the user prepare a sales pitch for the product {context.product}.\n"
            f"The target audience is {context.target_audience}.\n"
            f"The key features of the product are: {', '.join(context.key_features)}.\n"
            "Please guide the user through practicing their sales pitch, "
            "asking for their input on each feature."
        )
    assert_never(context)


def build_opening(context: PracticeContext) -> list[LLMMessage]:
    """Build the two-message seed of a conversation.

    Returns the scenario's system instructions followed by the user's
    readiness message.
    """
    return [
        LLMMessage(role="system", content=_system_instructions(context)),
        LLMMessage(role="user", content=READY_TO_BEGIN),
    ]


def build_feedback_request(analysis_summary: str) -> LLMMessage:
    """Build the end-of-session request for performance feedback."""
    return LLMMessage(
        role="user",
        content=f"{FEEDBACK_REQUEST_PREAMBLE}\n\n{analysis_summary}",
    )


__all__ = [
    "READY_TO_BEGIN",
    "FEEDBACK_REQUEST_PREAMBLE",
    "build_opening",
    "build_feedback_request",
]
