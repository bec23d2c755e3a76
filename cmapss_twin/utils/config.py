"""
Configuration management for the CMAPSS digital twin.

This module provides dataclass-based configuration for every generator
with validation and default values matching the C-MAPSS dashboard model.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
import yaml


@dataclass
class SimulationConfig:
    """Configuration for the sensor series generator.

    Attributes:
        base_date: ISO date that cycle 0 maps to; cycle c is c days later
        default_cycles: Series length when the caller does not give one
        degradation_horizon: Multiplier on recorded cycles at which the
            linear degradation factor reaches zero
        health_floor: Lower bound on the health factor
        pressure_noise: Half-width of the uniform jitter for pressure/ratio channels
    """
    base_date: str = "2024-01-01"
    default_cycles: int = 50
    degradation_horizon: float = 1.2
    health_floor: float = 0.6
    pressure_noise: float = 0.01

    def __post_init__(self):
        # Unquoted YAML dates load as datetime.date
        self.base_date = str(self.base_date)

    @property
    def start_time(self) -> datetime:
        """Base date as a UTC datetime."""
        return datetime.fromisoformat(self.base_date).replace(tzinfo=timezone.utc)

    def validate(self) -> None:
        """Validate configuration parameters."""
        assert self.default_cycles > 0, "Default cycle count must be positive"
        assert self.degradation_horizon > 0, "Degradation horizon must be positive"
        assert 0 <= self.health_floor <= 1, "Health floor must be in [0, 1]"
        assert self.pressure_noise >= 0, "Pressure noise must be non-negative"


@dataclass
class HealthConfig:
    """Configuration for the health assessment generator.

    Attributes:
        life_multiplier: Estimated total life as a multiple of recorded cycles
        base_degradation_rate: Degradation rate in %/100 cycles for HPC-only wear
        fan_degradation_penalty: Added rate when fan degradation is present
        variable_conditions_penalty: Added rate for FD002/FD004 flight envelopes
        fault_probability_scale: Fault probability at zero health (the cap)
        critical_health: Health below which combustor and turbine become critical
        inspection_health: Below this, recommend a borescope inspection
        maintenance_health: Below this, plan maintenance
        urgent_health: Below this, recommend immediate maintenance
    """
    life_multiplier: float = 1.3
    base_degradation_rate: float = 0.15
    fan_degradation_penalty: float = 0.05
    variable_conditions_penalty: float = 0.03
    fault_probability_scale: float = 0.8
    critical_health: float = 80.0
    inspection_health: float = 85.0
    maintenance_health: float = 75.0
    urgent_health: float = 70.0

    def validate(self) -> None:
        """Validate configuration parameters."""
        assert self.life_multiplier >= 1.0, "Life multiplier must be at least 1"
        assert self.base_degradation_rate >= 0, "Degradation rate must be non-negative"
        assert 0 < self.fault_probability_scale <= 1, "Fault probability scale must be in (0, 1]"
        assert self.inspection_health > self.maintenance_health > self.urgent_health, \
            "Recommendation thresholds must be strictly descending"


@dataclass
class PerformanceConfig:
    """Configuration for performance metric derivation.

    Attributes:
        window_cycles: Length of the series generated per derivation
        baseline_fuel_flow: Fuel flow (kg/hr) with nominal efficiency
        baseline_egt: EGT (°C) with nominal thermal efficiency
        rated_thrust: Thrust (lbf) at 100% health
        min_fuel_efficiency: Floor for fuel efficiency
        min_thermal_efficiency: Floor for thermal efficiency
    """
    window_cycles: int = 10
    baseline_fuel_flow: float = 2500.0
    baseline_egt: float = 650.0
    rated_thrust: float = 24000.0
    min_fuel_efficiency: float = 0.7
    min_thermal_efficiency: float = 0.75

    def validate(self) -> None:
        """Validate configuration parameters."""
        assert self.window_cycles > 0, "Window must contain at least one cycle"
        assert self.baseline_fuel_flow > 0, "Baseline fuel flow must be positive"
        assert self.baseline_egt > 0, "Baseline EGT must be positive"
        assert self.rated_thrust > 0, "Rated thrust must be positive"


@dataclass
class AlertConfig:
    """Configuration for fleet maintenance alerts.

    Attributes:
        engine_alert_health: Health below which an engine-level alert is raised
        critical_alert_health: Health below which that alert is CRITICAL
        engine_confidence: Confidence attached to engine-level alerts
        component_confidence: Confidence attached to component alerts
        component_horizon_days: Days until predicted failure for component alerts
    """
    engine_alert_health: float = 75.0
    critical_alert_health: float = 60.0
    engine_confidence: float = 0.85
    component_confidence: float = 0.75
    component_horizon_days: int = 30

    def validate(self) -> None:
        """Validate configuration parameters."""
        assert self.critical_alert_health <= self.engine_alert_health, \
            "Critical threshold must not exceed alert threshold"
        assert 0 < self.engine_confidence <= 1, "Confidence must be in (0, 1]"
        assert 0 < self.component_confidence <= 1, "Confidence must be in (0, 1]"
        assert self.component_horizon_days > 0, "Horizon must be positive"


@dataclass
class TwinConfig:
    """Master configuration for the digital twin.

    Aggregates all component configurations and provides methods for
    saving/loading from YAML files.
    """
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    health: HealthConfig = field(default_factory=HealthConfig)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)
    alerts: AlertConfig = field(default_factory=AlertConfig)

    log_dir: Optional[Path] = None
    random_seed: Optional[int] = None

    def __post_init__(self):
        """Ensure paths are Path objects."""
        if self.log_dir is not None:
            self.log_dir = Path(self.log_dir)

    def validate(self) -> None:
        """Validate all configurations."""
        self.simulation.validate()
        self.health.validate()
        self.performance.validate()
        self.alerts.validate()

    def save(self, path: Path) -> None:
        """Save configuration to YAML file.

        Args:
            path: Path to save configuration
        """
        path = Path(path)

        with open(path, 'w') as f:
            yaml.dump(self._to_dict(), f, default_flow_style=False, sort_keys=False)

    @classmethod
    def load(cls, path: Path) -> 'TwinConfig':
        """Load configuration from YAML file.

        Args:
            path: Path to configuration file

        Returns:
            TwinConfig instance
        """
        path = Path(path)

        with open(path, 'r') as f:
            config_dict = yaml.safe_load(f) or {}

        return cls._from_dict(config_dict)

    def _to_dict(self) -> dict:
        """Convert configuration to dictionary."""
        def section(obj) -> dict:
            return {f.name: getattr(obj, f.name) for f in fields(obj)}

        return {
            'simulation': section(self.simulation),
            'health': section(self.health),
            'performance': section(self.performance),
            'alerts': section(self.alerts),
            'global': {
                'log_dir': str(self.log_dir) if self.log_dir is not None else None,
                'random_seed': self.random_seed,
            },
        }

    @classmethod
    def _from_dict(cls, d: dict) -> 'TwinConfig':
        """Create configuration from dictionary."""
        global_cfg = d.get('global') or {}

        return cls(
            simulation=SimulationConfig(**(d.get('simulation') or {})),
            health=HealthConfig(**(d.get('health') or {})),
            performance=PerformanceConfig(**(d.get('performance') or {})),
            alerts=AlertConfig(**(d.get('alerts') or {})),
            log_dir=global_cfg.get('log_dir'),
            random_seed=global_cfg.get('random_seed'),
        )
