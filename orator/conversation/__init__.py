"""Practice conversation orchestration.

This package turns a practice scenario into a conversation with a chat
backend, folds per-turn speech analysis into it and produces the final
feedback request.
"""

from orator.conversation.analysis import AnalysisAccumulator, AnalysisData
from orator.conversation.backend import ChatBackendClient, LLMChatBackend
from orator.conversation.context import (
    InterviewContext,
    PracticeContext,
    PublicSpeakingContext,
    SalesPitchContext,
    parse_practice_context,
)
from orator.conversation.engine import (
    ConversationEngine,
    ConversationPhase,
    ConversationState,
    ScenarioSelection,
)
from orator.conversation.prompts import build_feedback_request, build_opening

__all__ = [
    "AnalysisAccumulator",
    "AnalysisData",
    "ChatBackendClient",
    "LLMChatBackend",
    "InterviewContext",
    "PracticeContext",
    "PublicSpeakingContext",
    "SalesPitchContext",
    "parse_practice_context",
    "ConversationEngine",
    "ConversationPhase",
    "ConversationState",
    "ScenarioSelection",
    "build_feedback_request",
    "build_opening",
]
