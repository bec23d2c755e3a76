"""
Engine fleet registry for the CMAPSS digital twin.

The registry is a fixed, read-only catalogue of engine records built once
at import time. Each record belongs to one of the four C-MAPSS
sub-datasets, which determines the simulated operating envelope:

    FD001: sea level, HPC degradation
    FD002: six operating conditions, HPC degradation
    FD003: sea level, HPC + fan degradation
    FD004: six operating conditions, HPC + fan degradation

References:
    - Saxena et al., "Damage propagation modeling for aircraft
      engine run-to-failure simulation" (2008)
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple
import logging


logger = logging.getLogger(__name__)


HPC_DEGRADATION = 'HPC Degradation'
FAN_DEGRADATION = 'Fan Degradation'


class DatasetClass(str, Enum):
    """C-MAPSS sub-dataset an engine is drawn from."""
    FD001 = 'FD001'
    FD002 = 'FD002'
    FD003 = 'FD003'
    FD004 = 'FD004'

    @property
    def variable_conditions(self) -> bool:
        """Whether the dataset spans multiple flight conditions."""
        return self in (DatasetClass.FD002, DatasetClass.FD004)


class EngineStatus(str, Enum):
    """Operational status label carried by a fleet record."""
    OPERATIONAL = 'operational'
    MAINTENANCE_REQUIRED = 'maintenance_required'
    DEGRADED = 'degraded'


class EngineNotFoundError(KeyError):
    """Raised when an engine id is not present in the registry."""

    def __init__(self, engine_id: str):
        self.engine_id = engine_id
        super().__init__(f"Engine {engine_id} not found")

    def __str__(self) -> str:
        return self.args[0]


@dataclass(frozen=True)
class DatasetParameters:
    """Operating-envelope parameters used by the sensor generator.

    Attributes:
        altitude_base: Baseline altitude (ft)
        mach_base: Baseline Mach number
        temp_variation: Full width of the additive temperature/speed jitter
    """
    altitude_base: float
    mach_base: float
    temp_variation: float


@dataclass(frozen=True)
class DatasetSpec:
    """Descriptive facts about a C-MAPSS sub-dataset."""
    name: str
    description: str
    engines: int
    test_engines: int
    conditions: str
    fault_modes: Tuple[str, ...]
    avg_cycles: float
    complexity: str


DATASET_PARAMETERS: Dict[DatasetClass, DatasetParameters] = {
    DatasetClass.FD001: DatasetParameters(altitude_base=0, mach_base=0.0, temp_variation=0.5),
    DatasetClass.FD002: DatasetParameters(altitude_base=25000, mach_base=0.7, temp_variation=2.0),
    DatasetClass.FD003: DatasetParameters(altitude_base=0, mach_base=0.0, temp_variation=0.8),
    DatasetClass.FD004: DatasetParameters(altitude_base=30000, mach_base=0.75, temp_variation=2.5),
}

CMAPSS_DATASETS: Dict[DatasetClass, DatasetSpec] = {
    DatasetClass.FD001: DatasetSpec(
        'FD001', 'Sea Level Operating Conditions', 100, 100,
        'Sea Level', (HPC_DEGRADATION,), 206.3, 'Basic',
    ),
    DatasetClass.FD002: DatasetSpec(
        'FD002', 'Six Operating Conditions', 260, 259,
        '6 Operating Conditions', (HPC_DEGRADATION,), 206.8, 'Intermediate',
    ),
    DatasetClass.FD003: DatasetSpec(
        'FD003', 'Sea Level with Multiple Faults', 100, 100,
        'Sea Level', (HPC_DEGRADATION, FAN_DEGRADATION), 247.2, 'Advanced',
    ),
    DatasetClass.FD004: DatasetSpec(
        'FD004', 'Six Conditions with Multiple Faults', 249, 248,
        '6 Operating Conditions', (HPC_DEGRADATION, FAN_DEGRADATION), 246.0, 'Expert',
    ),
}


def dataset_parameters(dataset: DatasetClass) -> DatasetParameters:
    """Operating-envelope parameters for a dataset class."""
    return DATASET_PARAMETERS[DatasetClass(dataset)]


def dataset_spec(dataset: DatasetClass) -> DatasetSpec:
    """Descriptive specification for a dataset class."""
    return CMAPSS_DATASETS[DatasetClass(dataset)]


@dataclass(frozen=True)
class EngineRecord:
    """Immutable fleet record for one engine.

    Attributes:
        engine_id: Unique identifier, ``CMAPSS-<DATASET>-<sequence>``
        dataset: C-MAPSS dataset class
        cycles: Accumulated operating cycles
        health_score: Current health in [0, 100]
        fault_modes: Qualitative fault tags
        status: Operational status label
        last_maintenance: Date of last maintenance
        next_maintenance: Date of next scheduled maintenance
        model: Engine model designation
        serial_number: Manufacturer serial number
        flight_hours: Accumulated flight hours
        operational_conditions: Human-readable operating envelope
    """
    engine_id: str
    dataset: DatasetClass
    cycles: int
    health_score: float
    fault_modes: Tuple[str, ...]
    status: EngineStatus = EngineStatus.OPERATIONAL
    last_maintenance: Optional[date] = None
    next_maintenance: Optional[date] = None
    model: str = 'CFM56-7B (CMAPSS)'
    serial_number: str = ''
    flight_hours: int = 0
    operational_conditions: str = ''

    def __post_init__(self):
        if not 0 <= self.health_score <= 100:
            raise ValueError(f"Health score out of range for {self.engine_id}: {self.health_score}")
        if self.cycles <= 0:
            raise ValueError(f"Cycle count must be positive for {self.engine_id}: {self.cycles}")

    def has_fault(self, fault_mode: str) -> bool:
        """Whether the engine carries the given fault tag."""
        return fault_mode in self.fault_modes

    @property
    def parameters(self) -> DatasetParameters:
        """Operating-envelope parameters for this engine's dataset."""
        return dataset_parameters(self.dataset)


def _record(
    engine_id: str,
    serial_number: str,
    flight_hours: int,
    cycles: int,
    health_score: float,
    status: EngineStatus,
    last_maintenance: str,
    next_maintenance: str,
    dataset: DatasetClass,
) -> EngineRecord:
    spec = CMAPSS_DATASETS[dataset]
    return EngineRecord(
        engine_id=engine_id,
        dataset=dataset,
        cycles=cycles,
        health_score=health_score,
        fault_modes=spec.fault_modes,
        status=status,
        last_maintenance=date.fromisoformat(last_maintenance),
        next_maintenance=date.fromisoformat(next_maintenance),
        serial_number=serial_number,
        flight_hours=flight_hours,
        operational_conditions=spec.conditions,
    )


_OK = EngineStatus.OPERATIONAL
_MAINT = EngineStatus.MAINTENANCE_REQUIRED
_DEGRADED = EngineStatus.DEGRADED

DEFAULT_FLEET: Tuple[EngineRecord, ...] = (
    # FD001: sea level, HPC degradation
    _record('CMAPSS-FD001-001', 'SN001', 15420, 362, 92.5, _OK, '2024-01-15', '2024-07-15', DatasetClass.FD001),
    _record('CMAPSS-FD001-002', 'SN002', 12850, 334, 88.7, _OK, '2024-02-01', '2024-08-01', DatasetClass.FD001),
    _record('CMAPSS-FD001-003', 'SN003', 8920, 206, 95.2, _OK, '2024-03-10', '2024-09-10', DatasetClass.FD001),
    # FD002: variable conditions, HPC degradation
    _record('CMAPSS-FD002-001', 'SN101', 18650, 298, 85.4, _OK, '2024-01-20', '2024-07-20', DatasetClass.FD002),
    _record('CMAPSS-FD002-002', 'SN102', 21340, 356, 78.9, _MAINT, '2024-02-15', '2024-05-15', DatasetClass.FD002),
    # FD003: sea level, multiple faults
    _record('CMAPSS-FD003-001', 'SN201', 16780, 285, 82.1, _OK, '2024-01-25', '2024-06-25', DatasetClass.FD003),
    _record('CMAPSS-FD003-002', 'SN202', 19420, 312, 74.6, _MAINT, '2024-03-01', '2024-05-01', DatasetClass.FD003),
    # FD004: variable conditions, multiple faults
    _record('CMAPSS-FD004-001', 'SN301', 22150, 341, 71.3, _DEGRADED, '2024-02-10', '2024-04-10', DatasetClass.FD004),
    _record('CMAPSS-FD004-002', 'SN302', 24680, 378, 68.9, _DEGRADED, '2024-01-05', '2024-03-05', DatasetClass.FD004),
)


class EngineRegistry:
    """Read-only catalogue of engine records.

    Records are inserted once at construction and never mutated.
    Iteration and ``list_all`` preserve insertion order.

    Usage:
        registry = EngineRegistry()
        record = registry.lookup('CMAPSS-FD001-001')   # None if unknown
        record = registry.get('CMAPSS-FD001-001')      # raises if unknown
    """

    def __init__(self, records: Optional[Iterable[EngineRecord]] = None):
        """Initialize registry.

        Args:
            records: Engine records; defaults to the built-in fleet
        """
        records = DEFAULT_FLEET if records is None else tuple(records)

        self._records: Dict[str, EngineRecord] = {}
        for record in records:
            if record.engine_id in self._records:
                raise ValueError(f"Duplicate engine id: {record.engine_id}")
            self._records[record.engine_id] = record

        logger.debug(f"Engine registry loaded with {len(self._records)} records")

    def lookup(self, engine_id: str) -> Optional[EngineRecord]:
        """Find a record by id.

        Args:
            engine_id: Engine identifier

        Returns:
            The record, or None when the id is unknown
        """
        return self._records.get(engine_id)

    def get(self, engine_id: str) -> EngineRecord:
        """Find a record by id, failing on unknown ids.

        Raises:
            EngineNotFoundError: If the id is not registered
        """
        record = self._records.get(engine_id)
        if record is None:
            raise EngineNotFoundError(engine_id)
        return record

    def list_all(self) -> List[EngineRecord]:
        """All records in insertion order."""
        return list(self._records.values())

    def by_dataset(self, dataset: DatasetClass) -> List[EngineRecord]:
        """Records belonging to one dataset class."""
        dataset = DatasetClass(dataset)
        return [r for r in self._records.values() if r.dataset == dataset]

    def engine_ids(self) -> List[str]:
        """Registered ids in insertion order."""
        return list(self._records)

    def __contains__(self, engine_id: object) -> bool:
        return engine_id in self._records

    def __iter__(self) -> Iterator[EngineRecord]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)


_default_registry: Optional[EngineRegistry] = None


def default_registry() -> EngineRegistry:
    """Shared registry over the built-in fleet."""
    global _default_registry
    if _default_registry is None:
        _default_registry = EngineRegistry()
    return _default_registry
