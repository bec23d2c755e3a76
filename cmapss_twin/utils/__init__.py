"""Utility modules for the CMAPSS digital twin."""

from cmapss_twin.utils.config import (
    TwinConfig,
    SimulationConfig,
    HealthConfig,
    PerformanceConfig,
    AlertConfig,
)
from cmapss_twin.utils.logging_config import setup_logging, get_logger, LogContext
from cmapss_twin.utils.rounding import round_half_up

__all__ = [
    "TwinConfig",
    "SimulationConfig",
    "HealthConfig",
    "PerformanceConfig",
    "AlertConfig",
    "setup_logging",
    "get_logger",
    "LogContext",
    "round_half_up",
]
