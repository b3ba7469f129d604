from __future__ import annotations

from pydantic_settings import BaseSettings

from heartbeat.models.baseline import BaselineConfig
from heartbeat.models.severity import SeverityThresholds


class Settings(BaseSettings):
    # --- app ---
    app_name: str = "Heartbeat"
    log_level: str = "INFO"

    # --- scheduling ---
    tick_interval: float = 1.0  # seconds between snapshots
    warmup_delay: float = 0.5  # pause after the first raw refresh

    # --- baseline detection ---
    history_capacity: int = 30
    baseline_samples: int = 10
    spike_multiplier: float = 2.0
    leak_growth_factor: float = 1.2  # 20% growth over baseline
    spike_floor: float = 5.0

    # --- snapshot ---
    top_process_count: int = 10

    # --- severity ---
    cpu_warning_percent: float = 60.0
    cpu_critical_percent: float = 80.0
    memory_warning_percent: float = 70.0
    memory_critical_percent: float = 85.0

    model_config = {"env_prefix": "HEARTBEAT_"}

    def baseline_config(self) -> BaselineConfig:
        return BaselineConfig(
            baseline_samples=self.baseline_samples,
            spike_multiplier=self.spike_multiplier,
            leak_growth_factor=self.leak_growth_factor,
            spike_floor=self.spike_floor,
        )

    def severity_thresholds(self) -> SeverityThresholds:
        return SeverityThresholds(
            cpu_warning=self.cpu_warning_percent,
            cpu_critical=self.cpu_critical_percent,
            memory_warning=self.memory_warning_percent,
            memory_critical=self.memory_critical_percent,
        )


settings = Settings()
