"""
Live sensor snapshot with threshold classification.

Generates a single cycle for an engine and classifies the headline
channels against fixed warning / critical limits.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, List, Tuple
import logging

import numpy as np

from cmapss_twin.fleet.registry import EngineRegistry
from cmapss_twin.simulation.sensor_generator import SensorSeriesGenerator
from cmapss_twin.utils.config import SimulationConfig


logger = logging.getLogger(__name__)


class SensorStatus(str, Enum):
    NORMAL = 'normal'
    WARNING = 'warning'
    CRITICAL = 'critical'


@dataclass(frozen=True)
class SensorLimit:
    """Warning / critical limits for one channel (exceeded when strictly above)."""
    sensor_type: str
    attribute: str
    unit: str
    warning: float
    critical: float

    def classify(self, value: float) -> SensorStatus:
        if value > self.critical:
            return SensorStatus.CRITICAL
        if value > self.warning:
            return SensorStatus.WARNING
        return SensorStatus.NORMAL


SENSOR_LIMITS: Tuple[SensorLimit, ...] = (
    SensorLimit('EGT', 'EGT', '°C', 650, 700),
    SensorLimit('N1_Speed', 'N1', '%', 100, 105),
    SensorLimit('N2_Speed', 'N2', '%', 105, 110),
    SensorLimit('Fuel_Flow', 'fuel_flow', 'kg/hr', 3500, 4000),
    SensorLimit('Vibration', 'vibration', 'mm/s', 4, 6),
)


@dataclass(frozen=True)
class SensorStatusReading:
    """One classified channel of a snapshot."""
    reading_id: str
    engine_id: str
    sensor_type: str
    value: float
    unit: str
    timestamp: str
    status: SensorStatus


class SensorSnapshot:
    """Classified single-cycle view of an engine's headline sensors."""

    def __init__(
        self,
        registry: Optional[EngineRegistry] = None,
        config: Optional[SimulationConfig] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        limits: Tuple[SensorLimit, ...] = SENSOR_LIMITS,
    ):
        self.generator = SensorSeriesGenerator(
            registry=registry,
            config=config,
            rng=rng,
            seed=seed,
        )
        self.limits = limits

    def snapshot(self, engine_id: str) -> List[SensorStatusReading]:
        """Classify the first simulated cycle.

        Args:
            engine_id: Engine identifier

        Returns:
            One entry per configured limit; empty for unknown engines
        """
        readings = self.generator.generate(engine_id, 1)
        if not readings:
            return []

        reading = readings[0]
        statuses = []
        for limit in self.limits:
            value = getattr(reading, limit.attribute)
            statuses.append(SensorStatusReading(
                reading_id=f"{engine_id}-{limit.sensor_type.lower()}-{reading.cycle}",
                engine_id=engine_id,
                sensor_type=limit.sensor_type,
                value=value,
                unit=limit.unit,
                timestamp=reading.timestamp,
                status=limit.classify(value),
            ))

        flagged = [s.sensor_type for s in statuses if s.status != SensorStatus.NORMAL]
        if flagged:
            logger.info(f"Sensor limits exceeded on {engine_id}: {', '.join(flagged)}")

        return statuses
