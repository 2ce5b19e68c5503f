from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class EngineMetrics(BaseModel):
    """Counters describing an engine's progress."""

    total_generations: int = Field(
        default=0, description="Total number of generations run"
    )
    organisms_evaluated: int = Field(
        default=0, description="Total number of organisms tested by the landscape"
    )
    survivors_selected: int = Field(
        default=0, description="Total survivors carried into later generations"
    )
    children_bred: int = Field(
        default=0, description="Total number of children bred"
    )
    last_aggregate_fitness: float | None = Field(
        default=None, description="Aggregate fitness reported by the last landscape test"
    )
    last_generation_time: datetime | None = Field(
        default=None, description="Timestamp of last generation"
    )

    def record_evaluation(self, evaluated: int, aggregate: float) -> None:
        """Record metrics from fitness testing."""
        self.organisms_evaluated += evaluated
        self.last_aggregate_fitness = aggregate

    def record_replacement(self, survivors: int, children: int) -> None:
        """Record metrics from population replacement."""
        self.survivors_selected += survivors
        self.children_bred += children

    def to_dict(self) -> dict[str, int | float | str | datetime | None]:
        return {
            "total_generations": self.total_generations,
            "organisms_evaluated": self.organisms_evaluated,
            "survivors_selected": self.survivors_selected,
            "children_bred": self.children_bred,
            "last_aggregate_fitness": self.last_aggregate_fitness,
            "last_generation_time": self.last_generation_time,
        }

    model_config = {"arbitrary_types_allowed": True, "extra": "allow"}
