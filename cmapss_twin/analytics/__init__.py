"""
Analytics Package for the CMAPSS digital twin.

Reductions of generated sensor series and health assessments into
chart- and card-ready summaries.

Modules:
- performance.py: Efficiency and thrust metrics from a short series
- projections.py: Daily history and per-component health breakdowns
- sensor_status.py: Threshold-classified single-cycle sensor snapshot
"""

from cmapss_twin.analytics.performance import (
    PerformanceMetrics,
    PerformanceAnalyzer,
)
from cmapss_twin.analytics.projections import (
    HistoricalPoint,
    ComponentHealth,
    ComponentStatus,
    ComponentSpec,
    COMPONENT_SPECS,
    ProjectionBuilder,
)
from cmapss_twin.analytics.sensor_status import (
    SensorStatus,
    SensorLimit,
    SensorStatusReading,
    SensorSnapshot,
    SENSOR_LIMITS,
)

__all__ = [
    'PerformanceMetrics',
    'PerformanceAnalyzer',
    'HistoricalPoint',
    'ComponentHealth',
    'ComponentStatus',
    'ComponentSpec',
    'COMPONENT_SPECS',
    'ProjectionBuilder',
    'SensorStatus',
    'SensorLimit',
    'SensorStatusReading',
    'SensorSnapshot',
    'SENSOR_LIMITS',
]
