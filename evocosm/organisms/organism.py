from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

G = TypeVar("G")


class Organism(BaseModel, Generic[G]):
    """A candidate solution: caller-defined genes plus a fitness score.

    Fitness is written by a landscape (or cleared by :meth:`reset`); scalers
    may rewrite it afterwards. Organisms behave as values: anything that moves
    an organism into a new generation does so through :meth:`clone`.
    """

    genes: G = Field(..., description="Genetic material, interpreted by the caller")
    fitness: float = Field(default=0.0, description="Fitness assigned by a landscape")

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def clone(self) -> Organism[G]:
        """Return an independent deep copy."""
        return self.model_copy(deep=True)

    def reset(self) -> None:
        """Clear evaluation state before re-testing."""
        self.fitness = 0.0

    def __lt__(self, other: Organism[Any]) -> bool:
        # fittest first when sorted
        return self.fitness > other.fitness


Population = list[Organism]
