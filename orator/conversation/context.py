"""Practice scenarios a user can rehearse.

A practice context is chosen before a conversation starts and never
changes afterwards. The three variants form a closed set discriminated by
their ``type`` tag, which is also the tag used on the wire by the scenario
selection screens.
"""
from __future__ import annotations

import json
from typing import Annotated, Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from orator.exceptions import InvalidPracticeContextError


class _PracticeContextBase(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    # Short scenario name for logs and metrics
    scenario: ClassVar[str]

    def to_payload(self) -> dict[str, Any]:
        """Serialize using the wire (camelCase) field names."""
        return self.model_dump(mode="json", by_alias=True)


class InterviewContext(_PracticeContextBase):
    type: Literal["InterviewContext"] = "InterviewContext"
    interview_type: str
    role: str
    company: str
    focus_areas: tuple[str, ...] = ()

    scenario: ClassVar[str] = "interview"


class PublicSpeakingContext(_PracticeContextBase):
    type: Literal["PublicSpeakingContext"] = "PublicSpeakingContext"
    occasion: str
    audience_demographic: str
    main_points: tuple[str, ...] = ()

    scenario: ClassVar[str] = "public_speaking"


class SalesPitchContext(_PracticeContextBase):
    type: Literal["SalesPitchContext"] = "SalesPitchContext"
    product: str
    target_audience: str
    key_features: tuple[str, ...] = ()

    scenario: ClassVar[str] = "sales_pitch"


PracticeContext = Annotated[
    InterviewContext | PublicSpeakingContext | SalesPitchContext,
    Field(discriminator="type"),
]

_practice_context_adapter: TypeAdapter[PracticeContext] = TypeAdapter(PracticeContext)


def parse_practice_context(payload: str | bytes | dict[str, Any]) -> PracticeContext:
    """Parse a tagged scenario payload into its PracticeContext variant.

    Args:
        payload: JSON text or an already-decoded mapping with a ``type`` tag

    Raises:
        InvalidPracticeContextError: unknown tag, missing fields or bad JSON
    """
    try:
        if isinstance(payload, (str, bytes)):
            payload = json.loads(payload)
        return _practice_context_adapter.validate_python(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidPracticeContextError(
            message=f"Practice context is not valid JSON: {e}",
        ) from e
    except PydanticValidationError as e:
        raise InvalidPracticeContextError(
            message=f"Invalid practice context: {e.error_count()} validation error(s)",
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e


__all__ = [
    "InterviewContext",
    "PublicSpeakingContext",
    "SalesPitchContext",
    "PracticeContext",
    "parse_practice_context",
]
