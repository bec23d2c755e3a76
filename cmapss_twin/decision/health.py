"""
Health Assessment for the CMAPSS digital twin.

Derives remaining useful life, degradation rate, fault probability,
critical components and a maintenance recommendation from an engine's
fleet record. The formulas are closed-form heuristics:

    RUL               = max(0, round_half_up(cycles * 1.3 - cycles))
    degradation rate  = 0.15 [+0.05 fan degradation] [+0.03 FD002/FD004]
    fault probability = max(0, (100 - health) / 100 * 0.8)

Unlike the sensor generator, assessing an unknown engine is an error.
"""

from dataclasses import dataclass, asdict
from enum import IntEnum
from typing import Optional, Dict, Any, List, Tuple
import logging

from cmapss_twin.fleet.registry import (
    EngineRecord,
    EngineRegistry,
    HPC_DEGRADATION,
    FAN_DEGRADATION,
    default_registry,
)
from cmapss_twin.utils.config import HealthConfig
from cmapss_twin.utils.rounding import round_half_up


logger = logging.getLogger(__name__)


RECOMMEND_CONTINUE = 'Continue normal operations'
RECOMMEND_INSPECTION = 'Schedule borescope inspection within 50 cycles'
RECOMMEND_MAINTENANCE = (
    'Plan maintenance within 25 cycles - component replacement may be required'
)
RECOMMEND_URGENT = (
    'URGENT: Schedule immediate maintenance - engine approaching critical degradation levels'
)

# Components put at risk by each fault mode
FAULT_COMPONENTS: Dict[str, Tuple[str, ...]] = {
    HPC_DEGRADATION: ('High Pressure Compressor', 'Compressor Blades'),
    FAN_DEGRADATION: ('Fan Blades', 'Fan Disk'),
}

# Components at risk once overall health falls below the critical threshold
LOW_HEALTH_COMPONENTS: Tuple[str, ...] = ('Combustor', 'Turbine Blades')


class MaintenanceTier(IntEnum):
    """Severity tier of a maintenance recommendation."""
    ROUTINE = 0
    INSPECTION = 1
    MAINTENANCE = 2
    URGENT = 3

    @property
    def recommendation(self) -> str:
        """Recommendation text for the tier."""
        return {
            MaintenanceTier.ROUTINE: RECOMMEND_CONTINUE,
            MaintenanceTier.INSPECTION: RECOMMEND_INSPECTION,
            MaintenanceTier.MAINTENANCE: RECOMMEND_MAINTENANCE,
            MaintenanceTier.URGENT: RECOMMEND_URGENT,
        }[self]


@dataclass(frozen=True)
class HealthAssessment:
    """Health and maintenance assessment of one engine.

    Attributes:
        engine_id: Engine identifier
        current_cycle: Recorded cycles at assessment time
        health_score: Registry health score
        remaining_useful_life: Estimated remaining cycles (>= 0)
        degradation_rate: Wear rate in %/100 cycles
        fault_probability: Probability of fault in [0, 0.8]
        maintenance_tier: Severity tier of the recommendation
        maintenance_recommendation: Recommendation text
        critical_components: Components at risk, in fault-mode order
    """
    engine_id: str
    current_cycle: int
    health_score: float
    remaining_useful_life: int
    degradation_rate: float
    fault_probability: float
    maintenance_tier: MaintenanceTier
    maintenance_recommendation: str
    critical_components: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        d = asdict(self)
        d['maintenance_tier'] = self.maintenance_tier.name
        d['critical_components'] = list(self.critical_components)
        return d


class HealthAssessor:
    """Generator of health assessments from registry records.

    Usage:
        assessor = HealthAssessor()
        assessment = assessor.assess('CMAPSS-FD004-002')
        assessment.maintenance_tier      # MaintenanceTier.URGENT
    """

    def __init__(
        self,
        registry: Optional[EngineRegistry] = None,
        config: Optional[HealthConfig] = None,
    ):
        """Initialize health assessor.

        Args:
            registry: Engine registry; defaults to the built-in fleet
            config: Health configuration
        """
        self.registry = registry if registry is not None else default_registry()
        self.config = config or HealthConfig()

    def assess(self, engine_id: str) -> HealthAssessment:
        """Assess one engine.

        Args:
            engine_id: Engine identifier

        Returns:
            HealthAssessment for the engine

        Raises:
            EngineNotFoundError: If the engine is not registered
        """
        record = self.registry.get(engine_id)

        tier = self.maintenance_tier(record.health_score)

        assessment = HealthAssessment(
            engine_id=record.engine_id,
            current_cycle=record.cycles,
            health_score=record.health_score,
            remaining_useful_life=self.remaining_useful_life(record),
            degradation_rate=round(self.degradation_rate(record), 3),
            fault_probability=round(self.fault_probability(record.health_score), 3),
            maintenance_tier=tier,
            maintenance_recommendation=tier.recommendation,
            critical_components=self.critical_components(record),
        )

        logger.debug(
            f"Assessed {engine_id}: RUL={assessment.remaining_useful_life} "
            f"tier={tier.name} p_fault={assessment.fault_probability:.3f}"
        )
        return assessment

    def remaining_useful_life(self, record: EngineRecord) -> int:
        """Remaining cycles against an estimated total life."""
        estimated_total_life = record.cycles * self.config.life_multiplier
        return max(0, round_half_up(estimated_total_life - record.cycles))

    def degradation_rate(self, record: EngineRecord) -> float:
        """Wear rate in %/100 cycles."""
        rate = self.config.base_degradation_rate
        if record.has_fault(FAN_DEGRADATION):
            rate += self.config.fan_degradation_penalty
        if record.dataset.variable_conditions:
            rate += self.config.variable_conditions_penalty
        return rate

    def fault_probability(self, health_score: float) -> float:
        """Fault probability, capped at the configured scale."""
        return max(0.0, (100.0 - health_score) / 100.0 * self.config.fault_probability_scale)

    def critical_components(self, record: EngineRecord) -> Tuple[str, ...]:
        """Components at risk for the engine's fault modes and health."""
        components: List[str] = []
        for fault_mode, parts in FAULT_COMPONENTS.items():
            if record.has_fault(fault_mode):
                components.extend(parts)
        if record.health_score < self.config.critical_health:
            components.extend(LOW_HEALTH_COMPONENTS)
        return tuple(components)

    def maintenance_tier(self, health_score: float) -> MaintenanceTier:
        """Most severe tier whose threshold the health score falls below."""
        tier = MaintenanceTier.ROUTINE
        if health_score < self.config.inspection_health:
            tier = MaintenanceTier.INSPECTION
        if health_score < self.config.maintenance_health:
            tier = MaintenanceTier.MAINTENANCE
        if health_score < self.config.urgent_health:
            tier = MaintenanceTier.URGENT
        return tier


def assess_engine_health(
    engine_id: str,
    registry: Optional[EngineRegistry] = None,
    config: Optional[HealthConfig] = None,
) -> HealthAssessment:
    """Assess one engine with a default assessor.

    Raises:
        EngineNotFoundError: If the engine is not registered
    """
    return HealthAssessor(registry=registry, config=config).assess(engine_id)
