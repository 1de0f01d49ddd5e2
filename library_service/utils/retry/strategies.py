"""Delay schedules between retry attempts."""

from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Backoff:
    """``initial * factor**n`` seconds before retry ``n``, capped at ``maximum``.

    ``factor=1.0`` gives a fixed delay. When ``jitter`` is set, each delay is
    scaled by a random factor drawn from that range.
    """

    initial: float = 1.0
    maximum: float = 60.0
    factor: float = 2.0
    jitter: tuple[float, float] | None = (0.5, 1.5)

    @classmethod
    def fixed(cls, delay: float) -> Backoff:
        return cls(initial=delay, maximum=delay, factor=1.0, jitter=None)

    def delay(self, retry_number: int) -> float:
        seconds = min(self.initial * self.factor**retry_number, self.maximum)
        if self.jitter is not None:
            seconds *= random.uniform(*self.jitter)
        return seconds
