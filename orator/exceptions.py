"""Custom exceptions for the conversation engine.

This module defines engine-specific exceptions with structured error
codes and metadata so callers and presentation layers can react to them
consistently.

Exception Hierarchy:
- AppError (base)
  ├── BackendError
  ├── ValidationError
  │   ├── InvalidStateError
  │   │   └── EngineEndedError
  │   └── InvalidPracticeContextError
  └── ConfigurationError
      └── EmptyContextError

Usage:
    try:
        await engine.submit_turn(transcript, analysis)
    except EngineEndedError:
        # Session is over, drop the turn
        pass
    except InvalidStateError as e:
        log.error(f"{e.operation} rejected in phase {e.phase}")
        raise

Attributes:
    code: Machine-readable error code (e.g., "CONVERSATION_ENDED")
    message: Human-readable error message
    details: Additional context for debugging
    retryable: Whether the operation can be retried
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any


class AppError(Exception):
    """Base exception for engine errors.

    Attributes:
        code: Machine-readable error code
        message: Human-readable error message
        details: Additional context for debugging
        retryable: Whether the operation can be retried
        timestamp: When the error occurred
    """

    code: str = "APP_ERROR"
    message: str = "An unexpected error occurred"
    retryable: bool = False

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool | None = None,
    ) -> None:
        """Initialize error with optional message and details."""
        self.message = message or self.message
        self.details = details or {}
        if retryable is not None:
            self.retryable = retryable
        self.timestamp = datetime.now(UTC)
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "retryable": self.retryable,
                "timestamp": self.timestamp.isoformat(),
            }
        }

    def __str__(self) -> str:
        """String representation with code."""
        return f"[{self.code}] {self.message}"


class BackendError(AppError):
    """Raised when a chat backend call fails.

    Covers network failures, rate limits, timeouts and malformed
    responses. The transcript stays valid, so the same operation can be
    retried.
    """

    code = "BACKEND_ERROR"
    message = "Chat backend request failed"
    retryable = True

    def __init__(
        self,
        message: str | None = None,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize backend error."""
        self.provider = provider
        full_details: dict[str, Any] = {}
        if provider:
            full_details["provider"] = provider
        if details:
            full_details.update(details)
        super().__init__(message=message, details=full_details)

    @classmethod
    def from_exception(cls, exc: BaseException, provider: str | None = None) -> BackendError:
        """Wrap an arbitrary provider failure."""
        text = str(exc) or type(exc).__name__
        return cls(
            message=text,
            provider=provider,
            details={"exception_type": type(exc).__name__},
        )


class ValidationError(AppError):
    """Base exception for validation errors."""

    code = "VALIDATION_ERROR"
    message = "Validation failed"


class InvalidStateError(ValidationError):
    """Raised when an operation is invoked in the wrong engine phase.

    Attributes:
        operation: The rejected operation (e.g., "start", "submit_turn")
        phase: The engine phase at the time of the call
    """

    code = "INVALID_CONVERSATION_STATE"
    message = "Operation not allowed in the current conversation state"

    def __init__(
        self,
        operation: str,
        phase: str,
        reason: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid state error."""
        self.operation = operation
        self.phase = phase
        self.reason = reason
        full_details: dict[str, Any] = {"operation": operation, "phase": phase}
        if reason:
            full_details["reason"] = reason
        if details:
            full_details.update(details)
        text = f"Cannot {operation} while conversation is {phase}"
        if reason:
            text = f"{text}: {reason}"
        super().__init__(message=text, details=full_details)


class EngineEndedError(InvalidStateError):
    """Raised for any operation attempted after the engine has ended."""

    code = "CONVERSATION_ENDED"
    message = "Conversation engine has ended"

    def __init__(self, operation: str) -> None:
        """Initialize engine ended error."""
        super().__init__(operation=operation, phase="ended", reason="engine ended")


class InvalidPracticeContextError(ValidationError):
    """Raised when a practice scenario payload cannot be parsed."""

    code = "INVALID_PRACTICE_CONTEXT"
    message = "Invalid practice context"


class ConfigurationError(AppError):
    """Base exception for configuration errors."""

    code = "CONFIGURATION_ERROR"
    message = "Invalid configuration"


class EmptyContextError(ConfigurationError):
    """Raised when a conversation is started without a practice context.

    The engine cannot proceed without a scenario, so this is fatal for the
    session.
    """

    code = "EMPTY_PRACTICE_CONTEXT"
    message = "No practice context is bound to this conversation"


__all__ = [
    "AppError",
    "BackendError",
    "ValidationError",
    "InvalidStateError",
    "EngineEndedError",
    "InvalidPracticeContextError",
    "ConfigurationError",
    "EmptyContextError",
]
