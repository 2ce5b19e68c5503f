"""Roulette-wheel (fitness-proportional) sampling."""

from __future__ import annotations

import math
import sys
from typing import Iterable

from evocosm.exceptions import ValidationError
from evocosm.utils.prng import KissRandom

__all__ = ["RouletteWheel"]


class RouletteWheel:
    """A simulated roulette wheel for weighted selection.

    Each index is a slot whose width is its weight. A draw throws a "marble"
    uniformly into ``[0, total_weight)`` and walks the slots, subtracting each
    width until the marble comes to rest. Larger weights cover more of the
    wheel and are proportionally more likely.

    Weights are absolute-valued and clamped into ``[min_weight, max_weight]``.

    Args:
        weights: Slot weights; must not be empty.
        min_weight: Lower clamp bound (>= 0).
        max_weight: Upper clamp bound (> ``min_weight``).
        rng: Random source; a freshly seeded generator when omitted.

    Raises:
        ValidationError: On empty weights, invalid bounds, or a total weight
            that is not strictly positive.
    """

    def __init__(
        self,
        weights: Iterable[float],
        min_weight: float = sys.float_info.epsilon,
        max_weight: float = sys.float_info.max,
        rng: KissRandom | None = None,
    ):
        values = list(weights)
        if not values:
            raise ValidationError("Roulette wheel can not have zero size")
        if min_weight < 0.0:
            raise ValidationError(f"Minimum weight must be >= 0, got {min_weight}")
        if min_weight >= max_weight:
            raise ValidationError(
                f"Minimum weight must be less than maximum ({min_weight} >= {max_weight})"
            )

        self._min_weight = float(min_weight)
        self._max_weight = float(max_weight)
        self._weights = [self._clamp(w) for w in values]
        self._total_weight = sum(self._weights)

        if not (self._total_weight > 0.0 and math.isfinite(self._total_weight)):
            raise ValidationError(
                f"Roulette wheel must have a finite total weight > zero, got {self._total_weight}"
            )

        self._rng = rng if rng is not None else KissRandom()

    def _clamp(self, weight: float) -> float:
        weight = abs(float(weight))
        if weight < self._min_weight:
            return self._min_weight
        if weight > self._max_weight:
            return self._max_weight
        return weight

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._weights):
            raise ValidationError(
                f"Invalid roulette wheel index {index} (size {len(self._weights)})"
            )

    @property
    def size(self) -> int:
        return len(self._weights)

    def __len__(self) -> int:
        return len(self._weights)

    @property
    def total_weight(self) -> float:
        return self._total_weight

    @property
    def min_weight(self) -> float:
        return self._min_weight

    @property
    def max_weight(self) -> float:
        return self._max_weight

    @property
    def weights(self) -> tuple[float, ...]:
        return tuple(self._weights)

    def get_weight(self, index: int) -> float:
        self._check_index(index)
        return self._weights[index]

    def set_weight(self, index: int, weight: float) -> float:
        """Change the weight of one slot.

        Args:
            index: Slot to change.
            weight: New weight, clamped like construction weights.

        Returns:
            The previous (clamped) weight of the slot.
        """
        self._check_index(index)
        weight = self._clamp(weight)
        previous = self._weights[index]
        total = self._total_weight + weight - previous
        if not (total > 0.0 and math.isfinite(total)):
            raise ValidationError(
                f"Roulette wheel must keep a finite total weight > zero, got {total}"
            )
        self._total_weight = total
        self._weights[index] = weight
        return previous

    def get_index(self) -> int:
        """Draw a slot index with probability proportional to its weight."""
        choice = self._rng.get_real() * self._total_weight

        i = 0
        size = len(self._weights)
        while i < size and choice > self._weights[i]:
            choice -= self._weights[i]
            i += 1

        # accumulated rounding error can run the marble off the end
        return min(i, size - 1)
