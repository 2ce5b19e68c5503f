"""Utility helpers shared across the evocosm codebase."""

from evocosm.utils.prng import KissRandom

__all__ = ["KissRandom"]
