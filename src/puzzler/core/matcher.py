"""Move matcher: equality of a played move and a solution entry."""

from __future__ import annotations

from puzzler.core.models import MoveSpec
from puzzler.core.notation import canonical_keys


def matches(played: MoveSpec | None, expected: MoveSpec | None) -> bool:
    """True if *played* and *expected* share a canonical key.

    Empty or malformed operands have no keys and therefore never match.
    """
    played_keys = canonical_keys(played)
    if not played_keys:
        return False
    return not played_keys.isdisjoint(canonical_keys(expected))
