"""Session configuration value object.

Numeric inputs are coerced and clamped here; address text is only stripped.
Address validity is checked when a session starts so an invalid address
always surfaces as a single error line.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_COUNT = 4
MIN_COUNT, MAX_COUNT = 1, 20
DEFAULT_SIZE = 56
MIN_SIZE, MAX_SIZE = 8, 1500


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _coerce_int(value: Any, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


class SessionConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str = Field(..., description="Source IPv4 address, dotted decimal")
    destination: str = Field(..., description="Destination IPv4 address, dotted decimal")
    count: int = Field(DEFAULT_COUNT, description="Echo requests to send (1-20)")
    size: int = Field(DEFAULT_SIZE, description="ICMP payload bytes (8-1500)")
    trace: bool = False
    stable: bool = Field(True, description="Seed from the address pair only")

    @field_validator("source", "destination", mode="before")
    @classmethod
    def _strip(cls, v: Any) -> str:
        return "" if v is None else str(v).strip()

    @field_validator("count", mode="before")
    @classmethod
    def _clamp_count(cls, v: Any) -> int:
        return _clamp(_coerce_int(v, DEFAULT_COUNT), MIN_COUNT, MAX_COUNT)

    @field_validator("size", mode="before")
    @classmethod
    def _clamp_size(cls, v: Any) -> int:
        return _clamp(_coerce_int(v, DEFAULT_SIZE), MIN_SIZE, MAX_SIZE)


__all__ = [
    "SessionConfig",
    "DEFAULT_COUNT",
    "DEFAULT_SIZE",
    "MIN_COUNT",
    "MAX_COUNT",
    "MIN_SIZE",
    "MAX_SIZE",
]
