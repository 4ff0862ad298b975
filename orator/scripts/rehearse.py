#!/usr/bin/env python3
"""
Rehearse a practice scenario from the terminal.

Reads a scenario JSON file (tagged with "type": "InterviewContext",
"PublicSpeakingContext" or "SalesPitchContext"), starts a conversation
with the configured chat backend and feeds each typed line in as a turn.

Commands:
  /feedback   ask for end-of-session feedback and exit
  /quit       end without feedback

Exit code 0 on a normal session; non-zero if the scenario is invalid.
"""
from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

from orator import __version__
from orator.config import get_settings
from orator.conversation import (
    AnalysisData,
    ConversationEngine,
    ConversationPhase,
    LLMChatBackend,
    parse_practice_context,
)
from orator.exceptions import InvalidPracticeContextError
from orator.logging_config import (
    clear_conversation_context,
    set_conversation_context,
    setup_logging,
)
from orator.services.events import MESSAGE_APPENDED, REQUEST_SETTLED, EventBus
from orator.telemetry import (
    configure_tracing,
    instrument_httpx,
    set_service_info,
    shutdown_tracing,
)

FEEDBACK_COMMAND = "/feedback"
QUIT_COMMAND = "/quit"


def _load_scenario(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        raise SystemExit(f"Missing file: {path}")


async def _typed_turns(queue: asyncio.Queue[AnalysisData | None]) -> AsyncIterator[AnalysisData]:
    while (item := await queue.get()) is not None:
        yield item


async def run(scenario_path: Path, provider: str | None) -> int:
    settings = get_settings()
    if provider:
        settings = settings.model_copy(update={"llm_provider": provider})
    setup_logging(settings.log_level, settings.debug_namespaces)
    settings.log_config_summary()
    set_service_info(version=__version__, environment=settings.environment)
    if settings.otel_enabled:
        configure_tracing(
            service_name=settings.otel_service_name,
            service_version=__version__,
            environment=settings.environment,
            otlp_endpoint=settings.otlp_endpoint or None,
        )
        instrument_httpx()

    try:
        context = parse_practice_context(_load_scenario(scenario_path))
    except InvalidPracticeContextError as e:
        print(e, file=sys.stderr)
        return 2

    bus = EventBus()

    @bus.on(MESSAGE_APPENDED)
    async def _print_reply(_event_type: str, data: dict[str, Any]) -> None:
        if data["role"] == "assistant":
            print(f"\npartner> {data['content']}\n")

    @bus.on(REQUEST_SETTLED)
    async def _print_error(_event_type: str, data: dict[str, Any]) -> None:
        if data.get("error"):
            print(f"\n[error] {data['error']}\n", file=sys.stderr)

    backend = LLMChatBackend.from_settings(settings)
    engine = ConversationEngine(context, backend, event_bus=bus)
    set_conversation_context(session_id=engine.session_id, scenario=context.scenario)

    turns: asyncio.Queue[AnalysisData | None] = asyncio.Queue()
    try:
        await engine.start()
        engine.subscribe(_typed_turns(turns))

        while True:
            line = (await asyncio.to_thread(input, "you> ")).strip()
            if not line:
                continue
            if line == QUIT_COMMAND:
                break
            if line == FEEDBACK_COMMAND:
                await turns.put(None)
                await engine.wait_for_turns()
                feedback = await engine.request_feedback()
                print(f"\nfeedback> {feedback or engine.last_error or '(no feedback)'}\n")
                break
            await turns.put(AnalysisData(transcription=line))
    except (EOFError, KeyboardInterrupt):
        pass
    finally:
        if engine.phase is not ConversationPhase.ENDED:
            engine.end()
        await bus.wait_for_pending()
        await backend.aclose()
        shutdown_tracing()
        clear_conversation_context()
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Rehearse a practice scenario in the terminal")
    parser.add_argument("scenario", type=Path, help="Path to a scenario JSON file")
    parser.add_argument(
        "--provider",
        choices=["openai", "openrouter", "groq", "stub"],
        default=None,
        help="Override the configured LLM provider",
    )
    args = parser.parse_args(argv)
    return asyncio.run(run(args.scenario, args.provider))


if __name__ == "__main__":
    sys.exit(main())
