from __future__ import annotations

from pydantic import BaseModel, Field


class BaselineConfig(BaseModel):
    """Parameters shared by the rolling-baseline anomaly rules."""

    baseline_samples: int = Field(default=10, ge=1)
    spike_multiplier: float = Field(default=2.0, gt=0.0)
    leak_growth_factor: float = Field(default=1.2, gt=0.0)
    spike_floor: float = 5.0  # minimum CPU baseline (percent) for spike logic

    model_config = {"frozen": True}
