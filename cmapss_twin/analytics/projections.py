"""
Historical and per-component health projections for charting.

The historical health curve is a separate synthetic decay from ~95 towards
~85 over the requested window with uniform jitter. It is paired with, but
not derived from, the sensor readings of the same window.
"""

from dataclasses import dataclass, asdict
from datetime import date, datetime
from enum import Enum
from typing import Optional, Dict, Any, List, Callable, Tuple
import logging

import numpy as np

from cmapss_twin.decision.health import HealthAssessment, HealthAssessor
from cmapss_twin.fleet.registry import EngineRegistry, default_registry
from cmapss_twin.simulation.sensor_generator import SensorSeriesGenerator
from cmapss_twin.utils.config import HealthConfig, SimulationConfig
from cmapss_twin.utils.rounding import round_half_up


logger = logging.getLogger(__name__)


# Normalization for the historical fuel-efficiency channel (kg/hr)
HISTORY_FUEL_SCALE = 3000.0


class ComponentStatus(str, Enum):
    """Display status for a component."""
    NORMAL = 'normal'
    WARNING = 'warning'


@dataclass(frozen=True)
class HistoricalPoint:
    """One simulated day of history."""
    date: str
    health_score: int
    fuel_efficiency: float
    temperature: float
    vibration: float
    cycles: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ComponentHealth:
    """Health of one engine component.

    Attributes:
        component_id: Short identifier ('fan', 'compressor', ...)
        name: Display name
        health: Health in percent
        status: Thresholded status flag
        last_inspection: Date of last inspection
        next_inspection: Date of next inspection
    """
    component_id: str
    name: str
    health: int
    status: ComponentStatus
    last_inspection: date
    next_inspection: date

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d['status'] = self.status.value
        d['last_inspection'] = self.last_inspection.isoformat()
        d['next_inspection'] = self.next_inspection.isoformat()
        return d


@dataclass(frozen=True)
class ComponentSpec:
    """How a component's health and status follow from an assessment.

    Attributes:
        component_id: Short identifier
        name: Display name
        health: (assessment, uniform) -> health percent before rounding
        warning: assessment -> whether the component is in warning
        last_inspection: Date of last inspection
        next_inspection: Date of next inspection
    """
    component_id: str
    name: str
    health: Callable[[HealthAssessment, Callable[[float, float], float]], float]
    warning: Callable[[HealthAssessment], bool]
    last_inspection: date
    next_inspection: date


def _fan_health(a: HealthAssessment, uniform) -> float:
    if a.fault_probability > 0.3:
        return 85 - a.fault_probability * 20
    return 90 + uniform(0, 8)


COMPONENT_SPECS: Tuple[ComponentSpec, ...] = (
    ComponentSpec(
        'fan', 'Fan Assembly',
        _fan_health,
        lambda a: False,
        date(2024, 1, 15), date(2024, 7, 15),
    ),
    ComponentSpec(
        'compressor', 'High Pressure Compressor',
        lambda a, u: a.health_score - 5 + u(0, 10),
        lambda a: 'High Pressure Compressor' in a.critical_components,
        date(2024, 2, 1), date(2024, 8, 1),
    ),
    ComponentSpec(
        'combustor', 'Combustor',
        lambda a, u: a.health_score + u(0, 5),
        lambda a: False,
        date(2024, 1, 20), date(2024, 7, 20),
    ),
    ComponentSpec(
        'turbine', 'Turbine Assembly',
        lambda a, u: a.health_score - 3 + u(0, 6),
        lambda a: a.health_score < 75,
        date(2024, 3, 1), date(2024, 9, 1),
    ),
    ComponentSpec(
        'nozzle', 'Exhaust Nozzle',
        lambda a, u: 92 + u(0, 6),
        lambda a: False,
        date(2024, 2, 15), date(2024, 8, 15),
    ),
)


class ProjectionBuilder:
    """Builds historical trends and component breakdowns for one engine.

    Usage:
        builder = ProjectionBuilder(seed=3)
        history = builder.history('CMAPSS-FD002-001', 30)
        components = builder.component_health('CMAPSS-FD002-001')
    """

    def __init__(
        self,
        registry: Optional[EngineRegistry] = None,
        simulation_config: Optional[SimulationConfig] = None,
        health_config: Optional[HealthConfig] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        """Initialize projection builder.

        Args:
            registry: Engine registry; defaults to the built-in fleet
            simulation_config: Configuration for the sensor generator
            health_config: Configuration for the health assessor
            rng: Random generator (takes precedence over seed)
            seed: Random seed
        """
        self.registry = registry if registry is not None else default_registry()
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.generator = SensorSeriesGenerator(
            registry=self.registry,
            config=simulation_config,
            rng=self.rng,
        )
        self.assessor = HealthAssessor(self.registry, health_config)

    def history(self, engine_id: str, days: int) -> List[HistoricalPoint]:
        """Daily history over a window.

        Args:
            engine_id: Engine identifier
            days: Number of simulated days

        Returns:
            One point per day, oldest first. Empty for unknown engines.

        Raises:
            ValueError: If days is negative
        """
        if days < 0:
            raise ValueError(f"days must be non-negative, got {days}")

        readings = self.generator.generate(engine_id, days)

        points = []
        for index, reading in enumerate(readings):
            health = 95 - (index / days) * 10 + self.rng.uniform(0, 5)
            points.append(HistoricalPoint(
                date=datetime.fromisoformat(reading.timestamp).date().isoformat(),
                health_score=round_half_up(health),
                fuel_efficiency=reading.fuel_flow / HISTORY_FUEL_SCALE,
                temperature=reading.EGT,
                vibration=reading.vibration,
                cycles=reading.cycle,
            ))

        return points

    def component_health(self, engine_id: str) -> List[ComponentHealth]:
        """Per-component health derived from one assessment.

        Args:
            engine_id: Engine identifier

        Returns:
            Five records: fan, compressor, combustor, turbine, nozzle

        Raises:
            EngineNotFoundError: If the engine is not registered
        """
        assessment = self.assessor.assess(engine_id)

        return [
            ComponentHealth(
                component_id=spec.component_id,
                name=spec.name,
                health=round_half_up(spec.health(assessment, self.rng.uniform)),
                status=ComponentStatus.WARNING if spec.warning(assessment) else ComponentStatus.NORMAL,
                last_inspection=spec.last_inspection,
                next_inspection=spec.next_inspection,
            )
            for spec in COMPONENT_SPECS
        ]
