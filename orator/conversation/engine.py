"""Conversation engine for practice sessions.

The engine owns the transcript exchanged with the chat backend, the
per-turn analysis records and the request/error state a presentation
layer renders. It is driven from a single asyncio event loop.

Lifecycle:
    IDLE -> AWAITING_REPLY -> IDLE   (once per backend call)
    any phase -> ENDED               (terminal)

Single-flight: at most one backend call is outstanding. Operations that
arrive while a call is in flight append their messages immediately but
wait for the previous outcome to be applied before dispatching.

Usage:
    engine = ConversationEngine(context, LLMChatBackend.from_settings())
    await engine.start()
    engine.subscribe(analyzer.events())
    ...
    feedback = await engine.request_feedback()
    engine.end()
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol
from uuid import uuid4

from orator.ai.providers.base import LLMMessage
from orator.conversation.analysis import AnalysisAccumulator, AnalysisData
from orator.conversation.backend import ChatBackendClient
from orator.conversation.context import PracticeContext
from orator.conversation.prompts import build_feedback_request, build_opening
from orator.exceptions import (
    BackendError,
    EmptyContextError,
    EngineEndedError,
    InvalidStateError,
)
from orator.services.events import (
    CONVERSATION_ENDED,
    CONVERSATION_STARTED,
    FEEDBACK_REQUESTED,
    MESSAGE_APPENDED,
    REQUEST_SETTLED,
    REQUEST_STARTED,
    TURN_SUBMITTED,
    EventBus,
    NullEventBus,
)
from orator.telemetry.metrics import (
    record_conversation_ended,
    record_conversation_started,
    record_feedback_request,
    record_turn,
)

logger = logging.getLogger("conversation")


class ConversationPhase(str, Enum):
    """Observable phases of a conversation."""

    IDLE = "idle"
    AWAITING_REPLY = "awaiting_reply"
    ENDED = "ended"


@dataclass(frozen=True)
class ConversationState:
    """Snapshot of the state a presentation layer renders."""

    messages: tuple[LLMMessage, ...]
    is_request_in_flight: bool
    last_error: str | None


class ScenarioSelection(Protocol):
    """Collaborator that holds the selected practice scenario."""

    def reset_practice_data(self) -> None:
        ...


class ConversationEngine:
    """Drives one practice conversation against a chat backend.

    Attributes:
        session_id: Identifier used in logs and events
        context: The scenario being rehearsed (None if none was selected)
    """

    def __init__(
        self,
        context: PracticeContext | None,
        backend: ChatBackendClient,
        scenario_selection: ScenarioSelection | None = None,
        event_bus: EventBus | None = None,
        accumulator: AnalysisAccumulator | None = None,
    ) -> None:
        self.session_id = str(uuid4())
        self.context = context
        self._backend = backend
        self._scenario_selection = scenario_selection
        self._event_bus = event_bus or NullEventBus()
        self._analysis = accumulator or AnalysisAccumulator()

        self._messages: list[LLMMessage] = []
        self._in_flight = False
        self._last_error: str | None = None
        self._ended = False
        self._feedback_requested = False
        self._dispatch_lock = asyncio.Lock()
        self._subscription: asyncio.Task[int] | None = None

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def messages(self) -> tuple[LLMMessage, ...]:
        return tuple(self._messages)

    @property
    def is_request_in_flight(self) -> bool:
        return self._in_flight

    @property
    def last_error(self) -> str | None:
        return self._last_error

    @property
    def analysis(self) -> AnalysisAccumulator:
        """Analysis records collected this session (read-only use)."""
        return self._analysis

    @property
    def phase(self) -> ConversationPhase:
        if self._ended:
            return ConversationPhase.ENDED
        if self._in_flight:
            return ConversationPhase.AWAITING_REPLY
        return ConversationPhase.IDLE

    @property
    def state(self) -> ConversationState:
        return ConversationState(
            messages=self.messages,
            is_request_in_flight=self._in_flight,
            last_error=self._last_error,
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def start(self) -> LLMMessage | None:
        """Seed the transcript from the practice context and fetch the first reply.

        Returns:
            The assistant's opening reply, or None if the call failed or
            produced no message

        Raises:
            EngineEndedError: If the engine has ended
            EmptyContextError: If no practice context is bound
            InvalidStateError: If the conversation was already started
        """
        self._ensure_not_ended("start")
        if self.context is None:
            raise EmptyContextError()
        if self._messages:
            raise InvalidStateError(
                operation="start",
                phase=self.phase.value,
                reason="conversation already started",
            )

        self._analysis.reset()
        for message in build_opening(self.context):
            self._append(message)
        record_conversation_started(self.context.scenario)

        logger.info(
            "Conversation started",
            extra={
                "service": "conversation",
                "session_id": self.session_id,
                "scenario": self.context.scenario,
            },
        )
        self._emit(CONVERSATION_STARTED, {"scenario": self.context.scenario})
        return await self._dispatch("start")

    async def submit_turn(self, transcript: str, analysis: AnalysisData) -> LLMMessage | None:
        """Add a spoken user turn and fetch the partner's reply.

        The user message and analysis record are stored before this
        coroutine first suspends, so concurrent calls keep their order.

        Returns:
            The assistant reply, or None if the call failed, produced no
            message or the engine ended while waiting

        Raises:
            EngineEndedError: If the engine has ended
            InvalidStateError: If the conversation was not started or
                feedback was already requested
        """
        self._ensure_not_ended("submit_turn")
        self._ensure_started("submit_turn")
        if self._feedback_requested:
            raise InvalidStateError(
                operation="submit_turn",
                phase=self.phase.value,
                reason="feedback has already been requested",
            )

        self._append(LLMMessage(role="user", content=transcript))
        self._analysis.record(analysis)
        record_turn(self.context.scenario)
        self._emit(TURN_SUBMITTED, {"analysis_count": len(self._analysis)})
        return await self._dispatch("submit_turn")

    async def request_feedback(self) -> str | None:
        """Ask the partner for end-of-session feedback.

        Freezes the analysis records, appends a feedback request carrying
        their summary and returns the reply content unmodified. The reply
        is not added to the transcript.

        Returns:
            Feedback text, or None if the call failed (see ``last_error``)
            or produced no message

        Raises:
            EngineEndedError: If the engine has ended
            InvalidStateError: If the conversation was not started or
                feedback was already requested
        """
        self._ensure_not_ended("request_feedback")
        self._ensure_started("request_feedback")
        if self._feedback_requested:
            raise InvalidStateError(
                operation="request_feedback",
                phase=self.phase.value,
                reason="feedback has already been requested",
            )

        self._feedback_requested = True
        self._analysis.freeze()
        request = build_feedback_request(self._analysis.summarize())
        record_feedback_request(self.context.scenario)
        self._emit(FEEDBACK_REQUESTED, {"analysis_count": len(self._analysis)})

        reply = await self._dispatch("request_feedback", pending=request, append_reply=False)
        return reply.content if reply is not None else None

    def end(self) -> None:
        """End the session.

        Stops consuming analysis events and tells the scenario selection
        collaborator its practice data can be reset. A backend call that
        is still in flight is left to finish and its result is discarded.

        Raises:
            EngineEndedError: If the engine has already ended
        """
        self._ensure_not_ended("end")
        self._ended = True

        if self._subscription is not None and not self._subscription.done():
            self._subscription.cancel()

        if self._messages:
            record_conversation_ended()

        if self._scenario_selection is not None:
            self._scenario_selection.reset_practice_data()

        logger.info(
            "Conversation ended",
            extra={
                "service": "conversation",
                "session_id": self.session_id,
                "message_count": len(self._messages),
                "analysis_count": len(self._analysis),
            },
        )
        self._emit(CONVERSATION_ENDED, {"message_count": len(self._messages)})

    # ------------------------------------------------------------------
    # Analysis stream
    # ------------------------------------------------------------------

    async def consume_analysis(self, stream: AsyncIterable[AnalysisData]) -> int:
        """Submit a turn for every analysis event, in arrival order.

        Each turn is fully settled before the next event is read. Stops
        when the stream is exhausted or the engine ends.

        Returns:
            Number of events submitted
        """
        processed = 0
        async for data in stream:
            if self._ended:
                break
            # Shielded so end() cancelling the subscription leaves an in-flight call running
            await asyncio.shield(self.submit_turn(data.transcription, data))
            processed += 1
        return processed

    def subscribe(self, stream: AsyncIterable[AnalysisData]) -> asyncio.Task[int]:
        """Consume an analysis stream in the background for this session.

        Raises:
            EngineEndedError: If the engine has ended
            InvalidStateError: If the conversation was not started or a
                stream is already subscribed
        """
        self._ensure_not_ended("subscribe")
        self._ensure_started("subscribe")
        if self._subscription is not None:
            raise InvalidStateError(
                operation="subscribe",
                phase=self.phase.value,
                reason="an analysis stream is already subscribed",
            )
        self._subscription = asyncio.create_task(
            self.consume_analysis(stream), name=f"analysis-{self.session_id}"
        )
        self._subscription.add_done_callback(self._on_subscription_done)
        return self._subscription

    async def wait_for_turns(self) -> int:
        """Wait until the subscribed analysis stream is exhausted.

        Returns:
            Number of turns the subscription submitted (0 if none)
        """
        if self._subscription is None:
            return 0
        return await self._subscription

    def _on_subscription_done(self, task: asyncio.Task[int]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Analysis stream consumer failed",
                extra={
                    "service": "conversation",
                    "session_id": self.session_id,
                    "error": str(exc),
                },
                exc_info=exc,
            )

    # ------------------------------------------------------------------
    # Backend call lifecycle
    # ------------------------------------------------------------------

    async def _dispatch(
        self,
        operation: str,
        pending: LLMMessage | None = None,
        append_reply: bool = True,
    ) -> LLMMessage | None:
        async with self._dispatch_lock:
            if self._ended:
                logger.info(
                    "Skipping backend call, conversation ended",
                    extra={
                        "service": "conversation",
                        "session_id": self.session_id,
                        "operation": operation,
                    },
                )
                return None

            if pending is not None:
                self._append(pending)

            self._in_flight = True
            self._last_error = None
            outgoing = list(self._messages)
            self._emit(REQUEST_STARTED, {"operation": operation, "message_count": len(outgoing)})

            reply: LLMMessage | None = None
            try:
                reply = await self._backend.send(outgoing)
            except BackendError as e:
                self._record_failure(operation, e)
                reply = None
            except Exception as e:
                logger.error(
                    "Chat backend raised an unexpected error",
                    extra={
                        "service": "conversation",
                        "session_id": self.session_id,
                        "operation": operation,
                    },
                    exc_info=True,
                )
                self._record_failure(operation, BackendError.from_exception(e))
                reply = None
            else:
                if self._ended:
                    logger.info(
                        "Discarding backend reply, conversation ended",
                        extra={
                            "service": "conversation",
                            "session_id": self.session_id,
                            "operation": operation,
                        },
                    )
                    reply = None
                elif reply is None:
                    logger.info(
                        "Backend returned no message",
                        extra={
                            "service": "conversation",
                            "session_id": self.session_id,
                            "operation": operation,
                        },
                    )
                elif append_reply:
                    self._append(reply)
            finally:
                self._in_flight = False
                self._emit(
                    REQUEST_SETTLED,
                    {"operation": operation, "error": self._last_error},
                )

            return reply

    def _record_failure(self, operation: str, error: BackendError) -> None:
        if self._ended:
            return
        self._last_error = f"Failed to get a reply: {error.message}"
        logger.warning(
            "Backend call failed",
            extra={
                "service": "conversation",
                "session_id": self.session_id,
                "operation": operation,
                "provider": error.provider,
                "error": error.message,
                "error_code": error.code,
            },
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _append(self, message: LLMMessage) -> None:
        self._messages.append(message)
        self._emit(
            MESSAGE_APPENDED,
            {
                "index": len(self._messages) - 1,
                "role": message.role,
                "content": message.content,
            },
        )

    def _emit(self, event_type: str, data: dict[str, Any]) -> None:
        self._event_bus.try_emit(event_type, {"session_id": self.session_id, **data})

    def _ensure_not_ended(self, operation: str) -> None:
        if self._ended:
            raise EngineEndedError(operation)

    def _ensure_started(self, operation: str) -> None:
        if not self._messages:
            raise InvalidStateError(
                operation=operation,
                phase=self.phase.value,
                reason="conversation has not been started",
            )


__all__ = [
    "ConversationEngine",
    "ConversationPhase",
    "ConversationState",
    "ScenarioSelection",
]
