"""Exception types raised by the simulator."""

from __future__ import annotations

INVALID_ADDRESS_MESSAGE = "error: please enter valid IPv4 addresses for Source and Destination."


class InvalidAddressError(ValueError):
    """Source or destination is not a dotted-decimal IPv4 address."""

    def __init__(self, value: str) -> None:
        super().__init__(f"invalid IPv4 address: {value!r}")
        self.value = value


class SessionStateError(RuntimeError):
    """A session was asked to run more than once."""


class SettingsError(RuntimeError):
    """Settings file is missing, unreadable or does not validate."""


__all__ = [
    "INVALID_ADDRESS_MESSAGE",
    "InvalidAddressError",
    "SessionStateError",
    "SettingsError",
]
