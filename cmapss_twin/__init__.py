"""
CMAPSS Twin: synthetic turbofan digital-twin data generator

Produces C-MAPSS style sensor series and closed-form health, performance
and maintenance metrics for a static engine fleet:
1. Fleet: read-only engine registry and dataset catalogue
2. Simulation: per-cycle sensor series with bounded degradation
3. Decision: health assessment and maintenance alerts
4. Analytics: performance metrics, history and component projections
"""

__version__ = "1.0.0"

from cmapss_twin.utils.config import TwinConfig
from cmapss_twin.fleet.registry import EngineRegistry, EngineNotFoundError
from cmapss_twin.simulation.sensor_generator import SensorSeriesGenerator
from cmapss_twin.decision.health import HealthAssessor
from cmapss_twin.twin import DigitalTwin

__all__ = [
    "TwinConfig",
    "EngineRegistry",
    "EngineNotFoundError",
    "SensorSeriesGenerator",
    "HealthAssessor",
    "DigitalTwin",
]
