from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class EngineConfig(BaseModel):
    """Configuration options controlling Engine behaviour."""

    sleep_time: float = Field(
        default=0.0,
        ge=0,
        description="Seconds to pause at each yield point between phases (0 = no pause)",
    )
    log_interval: int = Field(
        default=1, gt=0, description="Log engine metrics every N generations"
    )
    model_config = ConfigDict(validate_assignment=True)
