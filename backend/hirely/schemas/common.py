"""Shared result wrappers and the camelCase base for AI payload shapes."""

from typing import Any, Generic, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")

ErrorKind = Literal["validation", "provider", "shape"]


class CamelModel(BaseModel):
    """AI result shapes travel camelCase, matching the JSON the model is asked for."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FeatureResult(BaseModel, Generic[T]):
    """Outcome of a feature builder call: a value, or why there is none.

    error_kind tells callers whether the input was rejected before any
    model call ("validation"), the provider call failed ("provider"), or
    the model answered with an unusable shape ("shape").
    """

    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    @classmethod
    def success(cls, value: T) -> "FeatureResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str, kind: ErrorKind = "provider") -> "FeatureResult[T]":
        return cls(ok=False, error=error, error_kind=kind)


class OperationResult(BaseModel):
    """Outcome of a persisted-record accessor."""

    success: bool
    data: Any = None
    error: Optional[str] = None


def clamp_number(value: Any, low: float, high: float, default: float) -> float:
    """Coerce a provider-supplied number into [low, high], default when unusable."""
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if number != number:  # NaN
        return default
    return max(low, min(high, number))
