"""Session timing configuration."""

from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class SessionTimings:
    """Delays (milliseconds) of every deferred action in an attempt."""

    # Ignore residual input from the previously displayed board
    init_grace_ms: int = 100
    input_enable_ms: int = 1000

    auto_play_ms: int = 500
    error_clear_ms: int = 1500
    hint_clear_ms: int = 3000
    hint_error_clear_ms: int = 2000

    def __post_init__(self) -> None:
        for f in fields(self):
            if getattr(self, f.name) < 0:
                raise ValueError(f"{f.name} must be non-negative")

    @classmethod
    def immediate(cls) -> SessionTimings:
        """All delays zero (fire on the next event-loop turn)."""
        return cls(0, 0, 0, 0, 0, 0)
