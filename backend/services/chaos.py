from __future__ import annotations

import random
from typing import Protocol


class FailureStrategy(Protocol):
    """Decides whether an injected failure fires for a single attempt."""

    def should_fail(self) -> bool: ...


class RandomFailure:
    def __init__(self, probability: float = 0.5, rng: random.Random | None = None):
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"Failure probability must be within [0, 1], got {probability!r}")
        self.probability = probability
        self._rng = rng or random.Random()

    def should_fail(self) -> bool:
        return self._rng.random() < self.probability


class AlwaysFail:
    def should_fail(self) -> bool:
        return True


class NeverFail:
    def should_fail(self) -> bool:
        return False
