"""Mutation and crossover of IEEE-754 floating-point genes.

Most genetic algorithms evolve bit strings and decode them into numbers for
fitness testing. The operators here skip the decoding step and work directly on
the bit pattern of a ``binary32`` or ``binary64`` value: the sign bit, the
exponent field and the mantissa field are independent mutation targets, and
crossover splices the bit patterns of two parents at a random position.

Bits are reinterpreted through numpy views (``float32 <-> uint32`` and
``float64 <-> uint64``), which match the IEEE-754 layout exactly. No operator
ever produces NaN or Infinity: a result whose exponent field would be all ones
is redrawn.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np
from pydantic import BaseModel, Field

from evocosm.exceptions import ValidationError
from evocosm.utils.prng import KissRandom

__all__ = ["GeneWeights", "Precision", "RealGeneOps"]


class Precision(Enum):
    """Floating-point formats supported by :class:`RealGeneOps`."""

    SINGLE = "single"  # binary32
    DOUBLE = "double"  # binary64


@dataclass(frozen=True)
class _Layout:
    width: int
    exponent_bits: int
    mantissa_bits: int
    float_dtype: Any
    uint_dtype: Any

    @property
    def sign_mask(self) -> int:
        return 1 << (self.width - 1)

    @property
    def exponent_mask(self) -> int:
        return ((1 << self.exponent_bits) - 1) << self.mantissa_bits

    @property
    def full_mask(self) -> int:
        return (1 << self.width) - 1


_LAYOUTS = {
    Precision.SINGLE: _Layout(32, 8, 23, np.float32, np.uint32),
    Precision.DOUBLE: _Layout(64, 11, 52, np.float64, np.uint64),
}


class GeneWeights(BaseModel):
    """Relative chances of mutating each field of a floating-point value."""

    sign: float = Field(default=5.0, ge=0, description="Weight of sign-bit flips")
    exponent: float = Field(default=5.0, ge=0, description="Weight of exponent-bit flips")
    mantissa: float = Field(default=90.0, ge=0, description="Weight of mantissa-bit flips")

    @property
    def total(self) -> float:
        return self.sign + self.exponent + self.mantissa


class RealGeneOps:
    """Bit-level mutation and crossover for real-valued genes.

    Each weight is a share of the total of all three. With the defaults
    (5/5/90) a mutation flips the sign 5% of the time, an exponent bit 5% of
    the time and a mantissa bit 90% of the time. Mantissa flips act like a
    fine local search; exponent flips are large jumps.

    Args:
        sign_weight: Weight assigned to changes in sign.
        exponent_weight: Weight assigned to changes in the exponent.
        mantissa_weight: Weight assigned to changes in the mantissa.
        rng: Random source; a freshly seeded generator when omitted.

    Raises:
        ValidationError: If a weight is negative or the total is not positive.
    """

    def __init__(
        self,
        sign_weight: float = 5.0,
        exponent_weight: float = 5.0,
        mantissa_weight: float = 90.0,
        rng: KissRandom | None = None,
    ):
        if min(sign_weight, exponent_weight, mantissa_weight) < 0.0:
            raise ValidationError(
                "Mutation weights must be non-negative, got "
                f"sign={sign_weight}, exponent={exponent_weight}, mantissa={mantissa_weight}"
            )
        total = sign_weight + exponent_weight + mantissa_weight
        if not total > 0.0:
            raise ValidationError("Mutation weights must have a total > zero")

        self.sign_weight = float(sign_weight)
        self.exponent_weight = float(exponent_weight)
        self.mantissa_weight = float(mantissa_weight)
        self.total_weight = float(total)
        self._rng = rng if rng is not None else KissRandom()

    @classmethod
    def from_weights(cls, weights: GeneWeights, rng: KissRandom | None = None) -> RealGeneOps:
        return cls(weights.sign, weights.exponent, weights.mantissa, rng=rng)

    # ------------------------------------------------------------------
    # Bit reinterpretation
    # ------------------------------------------------------------------

    @staticmethod
    def _resolve(value: Any, precision: Precision | None) -> Precision:
        if precision is not None:
            return precision
        return Precision.SINGLE if isinstance(value, np.float32) else Precision.DOUBLE

    @staticmethod
    def _to_bits(value: Any, layout: _Layout) -> int:
        return int(np.array(value, dtype=layout.float_dtype).view(layout.uint_dtype))

    @staticmethod
    def _from_bits(bits: int, layout: _Layout) -> Any:
        result = np.array(bits, dtype=layout.uint_dtype).view(layout.float_dtype)[()]
        if layout.float_dtype is np.float64:
            return float(result)
        return np.float32(result)

    @staticmethod
    def _is_special(bits: int, layout: _Layout) -> bool:
        mask = layout.exponent_mask
        return (bits & mask) == mask

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def mutate(self, value: Any, precision: Precision | None = None) -> Any:
        """Return a mutated copy of ``value``.

        NaN and Infinity inputs are returned unchanged.

        Args:
            value: Number to clone and mutate.
            precision: Format to operate in; ``numpy.float32`` inputs default
                to single precision, everything else to double.

        Returns:
            ``numpy.float32`` for single precision, ``float`` for double.
        """
        layout = _LAYOUTS[self._resolve(value, precision)]

        # choose the region before looking at the value
        pick = self._rng.get_real() * self.total_weight

        bits = self._to_bits(value, layout)
        if self._is_special(bits, layout):
            return self._from_bits(bits, layout)

        if pick < self.sign_weight:
            bits ^= layout.sign_mask
        else:
            pick -= self.sign_weight
            if pick < self.exponent_weight:
                while True:
                    bit = layout.mantissa_bits + self._rng.get_index(layout.exponent_bits)
                    flipped = bits ^ (1 << bit)
                    if not self._is_special(flipped, layout):
                        break
                bits = flipped
            else:
                bits ^= 1 << self._rng.get_index(layout.mantissa_bits)

        return self._from_bits(bits, layout)

    def crossover(self, first: Any, second: Any, precision: Precision | None = None) -> Any:
        """Splice two parents at a random bit position.

        Bits at and above the cut come from ``first``, bits below it from
        ``second``. Cuts that would yield NaN or Infinity are redrawn. When
        both parents are non-finite no finite child exists and ``first`` is
        returned unchanged.

        Args:
            first: First parent number.
            second: Second parent number.
            precision: Format to operate in (see :meth:`mutate`).

        Returns:
            A new value combining both parents.
        """
        layout = _LAYOUTS[self._resolve(first, precision)]

        bits1 = self._to_bits(first, layout)
        bits2 = self._to_bits(second, layout)
        if self._is_special(bits1, layout) and self._is_special(bits2, layout):
            return self._from_bits(bits1, layout)

        full = layout.full_mask
        while True:
            cut = self._rng.get_index(layout.width)
            mask = (full << cut) & full
            child = (bits1 & mask) | (bits2 & ~mask & full)
            if not self._is_special(child, layout):
                break

        return self._from_bits(child, layout)

    def __repr__(self) -> str:
        return (
            f"RealGeneOps(sign={self.sign_weight}, exponent={self.exponent_weight}, "
            f"mantissa={self.mantissa_weight})"
        )
