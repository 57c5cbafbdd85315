"""IPv4 address parsing and synthetic address generation."""

from __future__ import annotations

import re
from typing import NamedTuple, Protocol

from .errors import InvalidAddressError

_OCTET = r"(25[0-5]|2[0-4][0-9]|1?[0-9]?[0-9])"
IPV4_RE = re.compile(r"\.".join([_OCTET] * 4))


class RandomSource(Protocol):
    def random(self) -> float: ...


class Address(NamedTuple):
    a: int
    b: int
    c: int
    d: int

    def __str__(self) -> str:
        return f"{self.a}.{self.b}.{self.c}.{self.d}"


def is_ipv4(text: str) -> bool:
    return IPV4_RE.fullmatch(text) is not None


def parse_address(text: str) -> Address:
    """Parse strict dotted-decimal IPv4 text, raising InvalidAddressError."""
    m = IPV4_RE.fullmatch(text)
    if m is None:
        raise InvalidAddressError(text)
    return Address(*(int(g) for g in m.groups()))


def _draw(rng: RandomSource, n: int) -> int:
    return int(rng.random() * n)


def random_address(rng: RandomSource) -> Address:
    # first octet 1..223 keeps clear of class D/E; last octet avoids .0/.255
    a = _draw(rng, 223) + 1
    b = _draw(rng, 255)
    c = _draw(rng, 255)
    d = _draw(rng, 254) + 1
    return Address(a, b, c, d)


def octet_distance(src: Address, dst: Address) -> float:
    """Weighted per-octet distance; high octets dominate."""
    return (
        abs(src.a - dst.a) * 0.8
        + abs(src.b - dst.b) * 0.2
        + abs(src.c - dst.c) * 0.05
        + abs(src.d - dst.d) * 0.02
    )


__all__ = [
    "Address",
    "IPV4_RE",
    "RandomSource",
    "is_ipv4",
    "parse_address",
    "random_address",
    "octet_distance",
]
