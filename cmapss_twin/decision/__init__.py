"""
Decision Package for the CMAPSS digital twin.

Modules:
- health.py: Health assessment (RUL, degradation, fault probability,
  critical components, maintenance recommendation)
- alerts.py: Fleet-wide maintenance alerts built on health assessments

Architecture:
    Engine Registry --> Health Assessor --> Maintenance Recommendation
                              |
                              v
                    Alert Generator --> Severity Classification
"""

from cmapss_twin.decision.health import (
    HealthAssessment,
    HealthAssessor,
    MaintenanceTier,
    FAULT_COMPONENTS,
    LOW_HEALTH_COMPONENTS,
    RECOMMEND_CONTINUE,
    RECOMMEND_INSPECTION,
    RECOMMEND_MAINTENANCE,
    RECOMMEND_URGENT,
    assess_engine_health,
)
from cmapss_twin.decision.alerts import (
    AlertLevel,
    MaintenanceAlert,
    MaintenanceAlertGenerator,
    OVERALL_HEALTH_COMPONENT,
    summarize_alerts,
)

__all__ = [
    # Health
    'HealthAssessment',
    'HealthAssessor',
    'MaintenanceTier',
    'FAULT_COMPONENTS',
    'LOW_HEALTH_COMPONENTS',
    'RECOMMEND_CONTINUE',
    'RECOMMEND_INSPECTION',
    'RECOMMEND_MAINTENANCE',
    'RECOMMEND_URGENT',
    'assess_engine_health',
    # Alerts
    'AlertLevel',
    'MaintenanceAlert',
    'MaintenanceAlertGenerator',
    'OVERALL_HEALTH_COMPONENT',
    'summarize_alerts',
]
