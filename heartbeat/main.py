from __future__ import annotations

import asyncio
import logging
import sys

from heartbeat.collectors import MetricsSource, PsutilSource
from heartbeat.config import Settings, settings
from heartbeat.engine import JsonLinesEmitter, Scheduler, SnapshotAggregator

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def build_scheduler(
    source: MetricsSource,
    config: Settings,
    emitter: JsonLinesEmitter | None = None,
    max_ticks: int | None = None,
) -> Scheduler:
    """Wire source → aggregator → emitter behind a scheduler."""
    aggregator = SnapshotAggregator(
        source,
        baseline=config.baseline_config(),
        history_capacity=config.history_capacity,
        top_process_count=config.top_process_count,
        thresholds=config.severity_thresholds(),
    )
    emitter = emitter or JsonLinesEmitter()

    async def on_tick() -> None:
        emitter.emit(aggregator.aggregate(source))

    return Scheduler(
        on_tick,
        interval=config.tick_interval,
        warmup_delay=config.warmup_delay,
        prime=source.refresh,
        max_ticks=max_ticks,
    )


async def run(config: Settings = settings) -> None:
    scheduler = build_scheduler(PsutilSource(), config)
    logger.info("%s starting, emitting snapshots every %.1fs", config.app_name, config.tick_interval)
    await scheduler.run()


def main() -> None:
    configure_logging(settings.log_level)
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("%s stopped", settings.app_name)
