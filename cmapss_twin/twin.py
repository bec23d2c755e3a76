"""
Digital twin facade.

Bundles the registry, configuration and a single random source behind the
operations a dashboard polls: sensor series, health assessment,
performance metrics, history, component health, sensor snapshot and
fleet maintenance alerts.
"""

from datetime import datetime
from typing import Optional, Dict, Any, List
import logging

import numpy as np
import pandas as pd

from cmapss_twin.analytics.performance import PerformanceAnalyzer, PerformanceMetrics
from cmapss_twin.analytics.projections import ComponentHealth, HistoricalPoint, ProjectionBuilder
from cmapss_twin.analytics.sensor_status import SensorSnapshot, SensorStatusReading
from cmapss_twin.decision.alerts import MaintenanceAlert, MaintenanceAlertGenerator
from cmapss_twin.decision.health import HealthAssessment, HealthAssessor
from cmapss_twin.fleet.registry import EngineRecord, EngineRegistry, default_registry
from cmapss_twin.simulation.sensor_generator import (
    SensorReading,
    SensorSeriesGenerator,
    readings_to_dataframe,
)
from cmapss_twin.utils.config import TwinConfig
from cmapss_twin.utils.logging_config import setup_logging


logger = logging.getLogger(__name__)


class DigitalTwin:
    """Fleet digital twin over a read-only engine registry.

    No call retains state between invocations except the shared random
    generator; pass a seed for reproducible sequences of calls.

    Usage:
        twin = DigitalTwin(seed=42)
        readings = twin.sensor_series('CMAPSS-FD001-001', 50)
        health = twin.assess('CMAPSS-FD001-001')
        alerts = twin.maintenance_alerts()
    """

    def __init__(
        self,
        registry: Optional[EngineRegistry] = None,
        config: Optional[TwinConfig] = None,
        seed: Optional[int] = None,
    ):
        """Initialize digital twin.

        Args:
            registry: Engine registry; defaults to the built-in fleet
            config: Twin configuration (validated on construction). When
                config.log_dir is set, package logs are written there.
            seed: Random seed; overrides config.random_seed when given
        """
        self.registry = registry if registry is not None else default_registry()
        self.config = config or TwinConfig()
        self.config.validate()

        if self.config.log_dir is not None:
            setup_logging(log_dir=self.config.log_dir, console=False)

        if seed is None:
            seed = self.config.random_seed
        self.rng = np.random.default_rng(seed)

        self.generator = SensorSeriesGenerator(
            self.registry, self.config.simulation, rng=self.rng,
        )
        self.assessor = HealthAssessor(self.registry, self.config.health)
        self.performance = PerformanceAnalyzer(
            self.registry,
            self.config.performance,
            self.config.simulation,
            rng=self.rng,
        )
        self.projections = ProjectionBuilder(
            self.registry,
            self.config.simulation,
            self.config.health,
            rng=self.rng,
        )
        self.sensors = SensorSnapshot(
            self.registry, self.config.simulation, rng=self.rng,
        )
        self.alerts = MaintenanceAlertGenerator(
            self.registry,
            self.config.alerts,
            self.config.health,
            rng=self.rng,
        )

        logger.info(f"Digital twin ready: {len(self.registry)} engines")

    def list_engines(self) -> List[EngineRecord]:
        """All fleet records in registry order."""
        return self.registry.list_all()

    def lookup(self, engine_id: str) -> Optional[EngineRecord]:
        """Fleet record for an id, or None."""
        return self.registry.lookup(engine_id)

    def sensor_series(
        self,
        engine_id: str,
        cycle_count: Optional[int] = None,
    ) -> List[SensorReading]:
        """Per-cycle readings; empty for unknown engines."""
        return self.generator.generate(engine_id, cycle_count)

    def assess(self, engine_id: str) -> HealthAssessment:
        """Health assessment; raises EngineNotFoundError for unknown engines."""
        return self.assessor.assess(engine_id)

    def performance_metrics(self, engine_id: str) -> Optional[PerformanceMetrics]:
        """Performance summary; None for unknown engines."""
        return self.performance.derive(engine_id)

    def history(self, engine_id: str, days: int) -> List[HistoricalPoint]:
        """Daily history; empty for unknown engines."""
        return self.projections.history(engine_id, days)

    def component_health(self, engine_id: str) -> List[ComponentHealth]:
        """Five-component breakdown; raises EngineNotFoundError for unknown engines."""
        return self.projections.component_health(engine_id)

    def sensor_snapshot(self, engine_id: str) -> List[SensorStatusReading]:
        """Classified headline sensors; empty for unknown engines."""
        return self.sensors.snapshot(engine_id)

    def maintenance_alerts(self, now: Optional[datetime] = None) -> List[MaintenanceAlert]:
        """Alerts across the whole fleet."""
        return self.alerts.generate(now)

    def fleet_dataframe(self, cycle_count: Optional[int] = None) -> pd.DataFrame:
        """Readings for every engine stacked into one DataFrame.

        Args:
            cycle_count: Cycles per engine; defaults to the configured length

        Returns:
            DataFrame with one row per engine-cycle, in registry order
        """
        frames = [
            readings_to_dataframe(self.generator.generate(record.engine_id, cycle_count))
            for record in self.registry
        ]
        if not frames:
            return readings_to_dataframe([])
        return pd.concat(frames, ignore_index=True)

    def fleet_summary(self) -> Dict[str, Any]:
        """Fleet-level status summary.

        Returns:
            Dictionary with counts by status and dataset, health and RUL statistics
        """
        records = self.registry.list_all()
        if not records:
            return {'total_engines': 0}

        assessments = [self.assessor.assess(r.engine_id) for r in records]
        health = np.array([r.health_score for r in records])
        ruls = np.array([a.remaining_useful_life for a in assessments])

        by_status: Dict[str, int] = {}
        by_dataset: Dict[str, int] = {}
        for record in records:
            by_status[record.status.value] = by_status.get(record.status.value, 0) + 1
            by_dataset[record.dataset.value] = by_dataset.get(record.dataset.value, 0) + 1

        by_tier: Dict[str, int] = {}
        for assessment in assessments:
            name = assessment.maintenance_tier.name
            by_tier[name] = by_tier.get(name, 0) + 1

        return {
            'total_engines': len(records),
            'by_status': by_status,
            'by_dataset': by_dataset,
            'by_maintenance_tier': by_tier,
            'mean_health': float(health.mean()),
            'min_health': float(health.min()),
            'mean_rul': float(ruls.mean()),
            'min_rul': int(ruls.min()),
            'max_rul': int(ruls.max()),
        }
