"""
Maintenance Alerts for the CMAPSS digital twin.

This module turns fleet health assessments into maintenance alerts.

Alert Levels:
- LOW: Informational
- MEDIUM: Component at risk, inspect at next maintenance window
- HIGH: Engine health below the alert threshold
- CRITICAL: Engine health below the critical threshold

Two alert kinds are produced per engine:
- An engine-level "Overall Engine Health" alert when health drops below
  the alert threshold, predicted to fail after its remaining useful life
- One MEDIUM alert per critical component
"""

import json
import logging
from dataclasses import dataclass, field, asdict
from datetime import datetime, timedelta, timezone
from enum import IntEnum
from typing import Optional, List, Dict, Any

import numpy as np

from cmapss_twin.decision.health import HealthAssessment, HealthAssessor
from cmapss_twin.fleet.registry import EngineRegistry, default_registry
from cmapss_twin.utils.config import AlertConfig, HealthConfig
from cmapss_twin.utils.logging_config import LogContext
from cmapss_twin.utils.rounding import round_half_up


logger = logging.getLogger(__name__)


OVERALL_HEALTH_COMPONENT = 'Overall Engine Health'


class AlertLevel(IntEnum):
    """Alert severity levels."""
    LOW = 0
    MEDIUM = 1
    HIGH = 2
    CRITICAL = 3

    @property
    def color(self) -> str:
        """Color code for display."""
        colors = {
            AlertLevel.LOW: 'green',
            AlertLevel.MEDIUM: 'yellow',
            AlertLevel.HIGH: 'orange',
            AlertLevel.CRITICAL: 'red',
        }
        return colors.get(self, 'white')

    @property
    def requires_action(self) -> bool:
        """Whether this level requires operator action."""
        return self >= AlertLevel.HIGH

    @property
    def log_level(self) -> int:
        """Logging level used when the alert is raised."""
        return {
            AlertLevel.LOW: logging.INFO,
            AlertLevel.MEDIUM: logging.INFO,
            AlertLevel.HIGH: logging.WARNING,
            AlertLevel.CRITICAL: logging.ERROR,
        }[self]


@dataclass
class MaintenanceAlert:
    """Individual maintenance alert.

    Attributes:
        engine_id: Engine the alert concerns
        component: Component name, or the overall-health marker
        level: Alert severity level
        predicted_failure: Predicted failure time
        confidence: Confidence in the prediction
        recommendation: Human-readable action
        estimated_cost: Estimated maintenance cost (USD)
        created: Time the alert was raised
        metadata: Additional context
    """
    engine_id: str
    component: str
    level: AlertLevel
    predicted_failure: datetime
    confidence: float
    recommendation: str
    estimated_cost: int
    created: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def alert_id(self) -> str:
        """Unique alert identifier."""
        slug = self.component.lower().replace(' ', '-')
        return f"alert-{self.engine_id}-{slug}-{int(self.created.timestamp() * 1000)}"

    @property
    def is_engine_level(self) -> bool:
        """Whether the alert concerns the whole engine."""
        return self.component == OVERALL_HEALTH_COMPONENT

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        d = asdict(self)
        d['level'] = self.level.name
        d['predicted_failure'] = self.predicted_failure.isoformat()
        d['created'] = self.created.isoformat()
        d['alert_id'] = self.alert_id
        return d

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict())


class MaintenanceAlertGenerator:
    """Fleet-wide maintenance alert generator.

    Assesses every registered engine and raises alerts for low overall
    health and for each critical component. Estimated costs carry random
    jitter from the injected generator.

    Usage:
        generator = MaintenanceAlertGenerator(seed=7)
        alerts = generator.generate()
        urgent = [a for a in alerts if a.level.requires_action]
    """

    def __init__(
        self,
        registry: Optional[EngineRegistry] = None,
        config: Optional[AlertConfig] = None,
        health_config: Optional[HealthConfig] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        """Initialize alert generator.

        Args:
            registry: Engine registry; defaults to the built-in fleet
            config: Alert configuration
            health_config: Health configuration for the assessor
            rng: Random generator (takes precedence over seed)
            seed: Random seed
        """
        self.registry = registry if registry is not None else default_registry()
        self.config = config or AlertConfig()
        self.assessor = HealthAssessor(self.registry, health_config)
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def generate(self, now: Optional[datetime] = None) -> List[MaintenanceAlert]:
        """Generate alerts for the whole fleet.

        Args:
            now: Reference time; defaults to the current UTC time

        Returns:
            Alerts grouped by engine in registry order, engine-level first
        """
        now = now or datetime.now(timezone.utc)
        alerts: List[MaintenanceAlert] = []

        with LogContext(logger, 'maintenance_alerts', engines=len(self.registry)):
            for record in self.registry:
                assessment = self.assessor.assess(record.engine_id)
                alerts.extend(self.alerts_for(assessment, now))

        for alert in alerts:
            logger.log(
                alert.level.log_level,
                f"Alert: [{alert.level.name}] {alert.engine_id} | {alert.component}",
            )

        return alerts

    def alerts_for(
        self,
        assessment: HealthAssessment,
        now: datetime,
    ) -> List[MaintenanceAlert]:
        """Alerts raised by a single assessment.

        Args:
            assessment: Engine health assessment
            now: Reference time

        Returns:
            List of alerts (possibly empty)
        """
        alerts = []

        if assessment.health_score < self.config.engine_alert_health:
            level = (
                AlertLevel.CRITICAL
                if assessment.health_score < self.config.critical_alert_health
                else AlertLevel.HIGH
            )
            alerts.append(MaintenanceAlert(
                engine_id=assessment.engine_id,
                component=OVERALL_HEALTH_COMPONENT,
                level=level,
                predicted_failure=now + timedelta(days=assessment.remaining_useful_life),
                confidence=self.config.engine_confidence,
                recommendation=assessment.maintenance_recommendation,
                estimated_cost=round_half_up(15000 + self.rng.uniform(0, 10000)),
                created=now,
                metadata={
                    'health_score': assessment.health_score,
                    'remaining_useful_life': assessment.remaining_useful_life,
                },
            ))

        for component in assessment.critical_components:
            alerts.append(MaintenanceAlert(
                engine_id=assessment.engine_id,
                component=component,
                level=AlertLevel.MEDIUM,
                predicted_failure=now + timedelta(days=self.config.component_horizon_days),
                confidence=self.config.component_confidence,
                recommendation=f"Inspect {component} during next maintenance window",
                estimated_cost=round_half_up(5000 + self.rng.uniform(0, 8000)),
                created=now,
            ))

        return alerts


def summarize_alerts(alerts: List[MaintenanceAlert]) -> Dict[str, Any]:
    """Fleet-level alert statistics.

    Args:
        alerts: Alerts to summarize

    Returns:
        Dictionary with counts by level and engines needing action
    """
    by_level = {level.name: 0 for level in AlertLevel}
    for alert in alerts:
        by_level[alert.level.name] += 1

    action_engines = sorted({a.engine_id for a in alerts if a.level.requires_action})

    return {
        'total_alerts': len(alerts),
        'by_level': by_level,
        'engines_with_alerts': len({a.engine_id for a in alerts}),
        'engines_requiring_action': action_engines,
        'estimated_cost': sum(a.estimated_cost for a in alerts),
    }
