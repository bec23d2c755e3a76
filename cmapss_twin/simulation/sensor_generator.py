"""
Sensor Series Generation for the CMAPSS digital twin.

This module produces per-cycle turbofan sensor readings for a registered
engine. Field names and magnitudes follow the C-MAPSS schema; values are
closed-form functions of a bounded linear degradation curve plus uniform
jitter, not the output of a thermodynamic model.

Per cycle c of an engine with N recorded cycles:

    degradation = 1 - c / (N * horizon)
    health      = max(floor, degradation)

Temperatures and pressures rise with (1 - health); physical fan and core
speeds scale with health. Secondary channels (EGT, N1/N2, EPR, corrected
speeds, fuel flow, ...) are derived algebraically from the rounded primary
channels so the published relations hold to each channel's precision.

References:
    - Frederick et al., "User's Guide for the Commercial Modular
      Aero-Propulsion System Simulation (C-MAPSS)" (2007)
"""

import math
from dataclasses import dataclass, asdict
from datetime import timedelta
from typing import Optional, Dict, Any, List, Callable
import logging

import numpy as np
import pandas as pd

from cmapss_twin.fleet.registry import (
    EngineRecord,
    EngineRegistry,
    DatasetParameters,
    dataset_parameters,
    default_registry,
)
from cmapss_twin.utils.config import SimulationConfig
from cmapss_twin.utils.rounding import round_half_up


logger = logging.getLogger(__name__)


# Sea-level standard temperature (°R), reference for corrected speeds
T_REF_RANKINE = 518.67
RANKINE_OFFSET = 459.67

# Rated physical speeds (rpm) used for percent-speed channels
RATED_FAN_SPEED = 2400.0
RATED_CORE_SPEED = 9100.0

# Healthy baselines (C-MAPSS magnitudes)
NOMINAL_FAN_SPEED = 2388.0
NOMINAL_CORE_SPEED = 9046.0


READING_COLUMNS = [
    'timestamp', 'engine_id', 'cycle',
    # Core engine parameters
    'EGT', 'N1', 'N2', 'fuel_flow', 'oil_pressure', 'oil_temperature', 'vibration',
    # Operating conditions
    'altitude', 'mach_number', 'ambient_temp',
    # C-MAPSS channels
    'T2', 'T24', 'T30', 'P2', 'P15', 'P24', 'Ps30', 'Nf', 'Nc', 'epr', 'phi',
    'NRf', 'NRc', 'BPR', 'farB', 'htBleed', 'Nf_dmd', 'PCNfR_dmd', 'W31',
]


@dataclass(frozen=True)
class SensorReading:
    """One simulated cycle of sensor data.

    Units: temperatures T* in °R, EGT / oil / ambient in °C, pressures in
    psia, Nf/Nc/NRf/NRc in rpm, N1/N2 in % of rated, fuel flow in kg/hr,
    vibration in mm/s, altitude in ft.
    """
    timestamp: str
    engine_id: str
    cycle: int

    EGT: float
    N1: float
    N2: float
    fuel_flow: int
    oil_pressure: float
    oil_temperature: float
    vibration: float

    altitude: float
    mach_number: float
    ambient_temp: float

    T2: float
    T24: float
    T30: float
    P2: float
    P15: float
    P24: float
    Ps30: float
    Nf: float
    Nc: float
    epr: float
    phi: float
    NRf: float
    NRc: float
    BPR: float
    farB: float
    htBleed: float
    Nf_dmd: float
    PCNfR_dmd: float
    W31: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)


def _r(value: float, digits: int) -> float:
    return round(float(value), digits)


def health_factor(
    cycle: int,
    total_cycles: int,
    horizon: float = 1.2,
    floor: float = 0.6,
) -> float:
    """Bounded linear health factor for a cycle.

    Args:
        cycle: Cycle number (1-indexed)
        total_cycles: Recorded cycles of the engine
        horizon: Multiple of total_cycles at which degradation reaches zero
        floor: Minimum returned health

    Returns:
        Health factor in [floor, 1)
    """
    degradation = 1.0 - cycle / (total_cycles * horizon)
    return max(floor, degradation)


class SensorSeriesGenerator:
    """Generator for per-cycle C-MAPSS style sensor series.

    Each call recomputes the series from scratch; two calls with the same
    arguments share the degradation trend but carry independent jitter.
    Pass a seeded ``numpy.random.Generator`` for reproducible output.

    Usage:
        generator = SensorSeriesGenerator(seed=42)
        readings = generator.generate('CMAPSS-FD001-001', 50)
        frame = readings_to_dataframe(readings)
    """

    def __init__(
        self,
        registry: Optional[EngineRegistry] = None,
        config: Optional[SimulationConfig] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        """Initialize sensor generator.

        Args:
            registry: Engine registry; defaults to the built-in fleet
            config: Simulation configuration
            rng: Random generator (takes precedence over seed)
            seed: Random seed
        """
        self.registry = registry if registry is not None else default_registry()
        self.config = config or SimulationConfig()
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def generate(
        self,
        engine_id: str,
        cycle_count: Optional[int] = None,
    ) -> List[SensorReading]:
        """Generate readings for cycles 1..cycle_count.

        Args:
            engine_id: Engine identifier
            cycle_count: Number of cycles; defaults to the configured length

        Returns:
            Readings in ascending cycle order. Empty for unknown engines.
        """
        if cycle_count is None:
            cycle_count = self.config.default_cycles

        record = self.registry.lookup(engine_id)
        if record is None:
            logger.debug(f"Unknown engine {engine_id}: returning empty series")
            return []

        params = dataset_parameters(record.dataset)

        return [
            self._generate_reading(record, params, cycle)
            for cycle in range(1, cycle_count + 1)
        ]

    def _pressure_noise(self) -> float:
        bound = self.config.pressure_noise
        return self.rng.uniform(-bound, bound)

    def _cycle_noise_source(self, params: DatasetParameters) -> Callable[[], float]:
        half = params.temp_variation / 2
        return lambda: self.rng.uniform(-half, half)

    def _generate_reading(
        self,
        record: EngineRecord,
        params: DatasetParameters,
        cycle: int,
    ) -> SensorReading:
        """Compute one cycle of readings.

        Derived channels (EGT, epr, N1/N2, NRf/NRc, fuel flow, oil,
        vibration) are computed from the rounded primaries, not from the
        unrounded draws. epr can therefore differ in the third decimal
        from P24 / P2 taken before rounding, but it matches the published
        P24 and P2 to its own precision.

        Args:
            record: Engine record
            params: Dataset operating-envelope parameters
            cycle: Cycle number (1-indexed)

        Returns:
            SensorReading for the cycle
        """
        hf = health_factor(
            cycle,
            record.cycles,
            self.config.degradation_horizon,
            self.config.health_floor,
        )
        wear = 1.0 - hf

        noise = self._pressure_noise
        cycle_noise = self._cycle_noise_source(params)

        # Primary channels
        T2 = _r(T_REF_RANKINE + cycle_noise(), 2)
        T24 = _r(1580.0 + cycle_noise() * 10 + wear * 20, 2)
        T30 = _r(1350.0 + cycle_noise() * 15 + wear * 30, 2)

        P2 = _r(14.62 + noise(), 2)
        P15 = _r(8.44 + noise() * 0.5, 2)
        P24 = _r(593.0 + cycle_noise() * 20 + wear * 50, 2)
        Ps30 = _r(1400.0 + cycle_noise() * 30 + wear * 60, 2)

        Nf = _r(NOMINAL_FAN_SPEED * hf + cycle_noise() * 10, 2)
        Nc = _r(NOMINAL_CORE_SPEED * hf + cycle_noise() * 50, 2)

        phi = _r(0.03 + noise() * 0.002 + wear * 0.005, 4)

        # Derived channels
        EGT = _r((T30 - RANKINE_OFFSET) * 5 / 9, 1)
        epr = _r(P24 / P2, 3)

        timestamp = self.config.start_time + timedelta(days=cycle)

        return SensorReading(
            timestamp=timestamp.isoformat(),
            engine_id=record.engine_id,
            cycle=cycle,

            EGT=EGT,
            N1=_r(Nf / RATED_FAN_SPEED * 100, 1),
            N2=_r(Nc / RATED_CORE_SPEED * 100, 1),
            fuel_flow=round_half_up(phi * Ps30 * 0.1),
            oil_pressure=_r(P24 * 0.025, 1),
            oil_temperature=_r(EGT * 0.6, 1),
            vibration=_r(abs(Nf - NOMINAL_FAN_SPEED) * 0.001, 2),

            altitude=_r(params.altitude_base + cycle_noise() * 1000, 1),
            mach_number=_r(params.mach_base + noise() * 0.1, 2),
            ambient_temp=_r(15 - params.altitude_base * 0.0065, 1),

            T2=T2,
            T24=T24,
            T30=T30,
            P2=P2,
            P15=P15,
            P24=P24,
            Ps30=Ps30,
            Nf=Nf,
            Nc=Nc,
            epr=epr,
            phi=phi,
            NRf=_r(Nf / math.sqrt(T2 / T_REF_RANKINE), 2),
            NRc=_r(Nc / math.sqrt(T24 / T_REF_RANKINE), 2),
            BPR=_r(5.1 + noise() * 0.1, 2),
            farB=_r(0.024 + noise() * 0.001, 4),
            htBleed=_r(394.0 + noise() * 5, 2),
            Nf_dmd=_r(Nf + cycle_noise(), 2),
            PCNfR_dmd=_r(47.47 + noise(), 2),
            W31=_r(39.06 + noise() * 2, 2),
        )


def generate_sensor_series(
    engine_id: str,
    cycle_count: int = 50,
    registry: Optional[EngineRegistry] = None,
    config: Optional[SimulationConfig] = None,
    seed: Optional[int] = None,
) -> List[SensorReading]:
    """Generate a sensor series for one engine.

    Args:
        engine_id: Engine identifier
        cycle_count: Number of cycles
        registry: Engine registry
        config: Simulation configuration
        seed: Random seed

    Returns:
        List of readings (empty for unknown engines)
    """
    generator = SensorSeriesGenerator(registry=registry, config=config, seed=seed)
    return generator.generate(engine_id, cycle_count)


def readings_to_dataframe(readings: List[SensorReading]) -> pd.DataFrame:
    """Convert readings to a DataFrame, one row per cycle.

    Args:
        readings: Sensor readings

    Returns:
        DataFrame with READING_COLUMNS as columns
    """
    return pd.DataFrame(
        [reading.to_dict() for reading in readings],
        columns=READING_COLUMNS,
    )
