"""
Performance metrics derived from a short sensor series.

A 10-cycle series is generated for the engine and only its last reading
is used:

    fuel efficiency    = max(0.7,  1 - (fuel_flow - 2500) / 2500)
    thermal efficiency = max(0.75, 1 - (EGT - 650) / 650)
    thrust output      = round_half_up(24000 * health / 100)
"""

from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any, Tuple
import logging

import numpy as np

from cmapss_twin.fleet.registry import EngineRegistry, DatasetClass, default_registry
from cmapss_twin.simulation.sensor_generator import SensorSeriesGenerator
from cmapss_twin.utils.config import PerformanceConfig, SimulationConfig
from cmapss_twin.utils.rounding import round_half_up


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PerformanceMetrics:
    """Summary performance of one engine.

    Attributes:
        engine_id: Engine identifier
        fuel_efficiency: Fuel efficiency, floor-clamped
        thermal_efficiency: Thermal efficiency, floor-clamped
        thrust_output: Thrust (lbf)
        operating_temperature: Latest EGT (°C)
        vibration_level: Latest vibration (mm/s)
        pressure_ratio: Latest EPR
        fan_speed: Latest N1 (%)
        core_speed: Latest N2 (%)
        dataset: Dataset class
        operational_conditions: Operating envelope description
        fault_modes: Fault tags
    """
    engine_id: str
    fuel_efficiency: float
    thermal_efficiency: float
    thrust_output: int
    operating_temperature: float
    vibration_level: float
    pressure_ratio: float
    fan_speed: float
    core_speed: float
    dataset: DatasetClass
    operational_conditions: str
    fault_modes: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        d = asdict(self)
        d['dataset'] = self.dataset.value
        d['fault_modes'] = list(self.fault_modes)
        return d


class PerformanceAnalyzer:
    """Derives summary performance metrics for registered engines."""

    def __init__(
        self,
        registry: Optional[EngineRegistry] = None,
        config: Optional[PerformanceConfig] = None,
        simulation_config: Optional[SimulationConfig] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        """Initialize analyzer.

        Args:
            registry: Engine registry; defaults to the built-in fleet
            config: Performance configuration
            simulation_config: Configuration for the internal sensor generator
            rng: Random generator (takes precedence over seed)
            seed: Random seed
        """
        self.registry = registry if registry is not None else default_registry()
        self.config = config or PerformanceConfig()
        self.generator = SensorSeriesGenerator(
            registry=self.registry,
            config=simulation_config,
            rng=rng,
            seed=seed,
        )

    def fuel_efficiency(self, fuel_flow: float) -> float:
        baseline = self.config.baseline_fuel_flow
        return max(self.config.min_fuel_efficiency, 1 - (fuel_flow - baseline) / baseline)

    def thermal_efficiency(self, egt: float) -> float:
        baseline = self.config.baseline_egt
        return max(self.config.min_thermal_efficiency, 1 - (egt - baseline) / baseline)

    def derive(self, engine_id: str) -> Optional[PerformanceMetrics]:
        """Derive performance metrics for an engine.

        Args:
            engine_id: Engine identifier

        Returns:
            PerformanceMetrics, or None for unknown engines
        """
        record = self.registry.lookup(engine_id)
        if record is None:
            logger.debug(f"Unknown engine {engine_id}: no performance metrics")
            return None

        readings = self.generator.generate(engine_id, self.config.window_cycles)
        if not readings:
            return None

        latest = readings[-1]

        return PerformanceMetrics(
            engine_id=engine_id,
            fuel_efficiency=round(self.fuel_efficiency(latest.fuel_flow), 3),
            thermal_efficiency=round(self.thermal_efficiency(latest.EGT), 3),
            thrust_output=round_half_up(self.config.rated_thrust * record.health_score / 100),
            operating_temperature=latest.EGT,
            vibration_level=latest.vibration,
            pressure_ratio=latest.epr,
            fan_speed=latest.N1,
            core_speed=latest.N2,
            dataset=record.dataset,
            operational_conditions=record.operational_conditions,
            fault_modes=record.fault_modes,
        )
