"""
Unit tests for the engine registry.

Tests the EngineRegistry and dataset tables to ensure:
1. Stable insertion-order listing of the built-in fleet
2. Explicit not-found behaviour (None from lookup, error from get)
3. Construction-time validation of records
"""

import pytest
from pathlib import Path
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cmapss_twin.fleet.registry import (
    DatasetClass,
    EngineRecord,
    EngineRegistry,
    EngineNotFoundError,
    EngineStatus,
    DEFAULT_FLEET,
    HPC_DEGRADATION,
    FAN_DEGRADATION,
    dataset_parameters,
    dataset_spec,
    default_registry,
)


def make_record(engine_id='TEST-FD001-001', health=90.0, dataset=DatasetClass.FD001,
                cycles=200, fault_modes=(HPC_DEGRADATION,)):
    """Build an engine record with test defaults."""
    return EngineRecord(
        engine_id=engine_id,
        dataset=dataset,
        cycles=cycles,
        health_score=health,
        fault_modes=fault_modes,
    )


class TestEngineRegistry:
    """Test suite for EngineRegistry."""

    @pytest.fixture
    def registry(self):
        """Create a registry over the built-in fleet."""
        return EngineRegistry()

    def test_default_fleet_size(self, registry):
        """Test the built-in fleet holds nine engines."""
        assert len(registry) == 9

    def test_list_all_preserves_insertion_order(self, registry):
        """Test list_all returns records in fleet order."""
        ids = [r.engine_id for r in registry.list_all()]
        assert ids == [r.engine_id for r in DEFAULT_FLEET]
        assert ids[0] == 'CMAPSS-FD001-001'
        assert ids[-1] == 'CMAPSS-FD004-002'

    def test_list_all_is_stable(self, registry):
        """Test repeated listings are identical."""
        assert registry.list_all() == registry.list_all()

    def test_lookup_known(self, registry):
        """Test lookup of a registered engine returns its record."""
        record = registry.lookup('CMAPSS-FD001-001')
        assert record is not None
        assert record.cycles == 362
        assert record.health_score == 92.5
        assert record.dataset == DatasetClass.FD001
        assert record.fault_modes == (HPC_DEGRADATION,)

    def test_lookup_unknown_returns_none(self, registry):
        """Test lookup of an unknown id returns None."""
        assert registry.lookup('unknown-id') is None

    def test_get_unknown_raises(self, registry):
        """Test get of an unknown id raises naming the id."""
        with pytest.raises(EngineNotFoundError, match='unknown-id'):
            registry.get('unknown-id')

    def test_not_found_is_key_error(self, registry):
        """Test EngineNotFoundError is a KeyError."""
        with pytest.raises(KeyError):
            registry.get('unknown-id')

    def test_contains(self, registry):
        """Test membership by engine id."""
        assert 'CMAPSS-FD003-002' in registry
        assert 'CMAPSS-FD009-001' not in registry

    def test_by_dataset(self, registry):
        """Test filtering by dataset class or its string value."""
        fd004 = registry.by_dataset(DatasetClass.FD004)
        assert [r.engine_id for r in fd004] == ['CMAPSS-FD004-001', 'CMAPSS-FD004-002']
        assert len(registry.by_dataset('FD001')) == 3

    def test_duplicate_ids_rejected(self):
        """Test duplicate engine ids fail at construction."""
        with pytest.raises(ValueError, match='Duplicate'):
            EngineRegistry([make_record(), make_record()])

    def test_custom_records(self):
        """Test a registry built from caller records."""
        registry = EngineRegistry([make_record('A'), make_record('B')])
        assert registry.engine_ids() == ['A', 'B']

    def test_empty_registry_stays_empty(self):
        """Test an explicitly empty registry holds no engines."""
        registry = EngineRegistry([])
        assert len(registry) == 0
        assert registry.list_all() == []
        assert registry.lookup('CMAPSS-FD001-001') is None

    def test_default_registry_is_shared(self):
        """Test the default registry is built once."""
        assert default_registry() is default_registry()

    def test_engine_ids_follow_naming_scheme(self, registry):
        """Test ids read CMAPSS-<dataset>-<sequence>."""
        for record in registry:
            prefix, dataset, sequence = record.engine_id.split('-')
            assert prefix == 'CMAPSS'
            assert dataset == record.dataset.value
            assert sequence.isdigit()


class TestEngineRecord:
    """Test suite for EngineRecord validation."""

    def test_health_out_of_range(self):
        """Test health above 100 is rejected."""
        with pytest.raises(ValueError):
            make_record(health=101.0)

    def test_non_positive_cycles(self):
        """Test zero cycles is rejected."""
        with pytest.raises(ValueError):
            make_record(cycles=0)

    def test_record_is_immutable(self):
        """Test records cannot be modified."""
        record = make_record()
        with pytest.raises(AttributeError):
            record.health_score = 50.0

    def test_has_fault(self):
        """Test fault mode membership."""
        record = make_record(fault_modes=(HPC_DEGRADATION, FAN_DEGRADATION))
        assert record.has_fault(FAN_DEGRADATION)
        assert not make_record().has_fault(FAN_DEGRADATION)

    def test_fleet_statuses(self):
        """Test operational status of representative fleet engines."""
        statuses = {r.engine_id: r.status for r in DEFAULT_FLEET}
        assert statuses['CMAPSS-FD001-001'] == EngineStatus.OPERATIONAL
        assert statuses['CMAPSS-FD002-002'] == EngineStatus.MAINTENANCE_REQUIRED
        assert statuses['CMAPSS-FD004-002'] == EngineStatus.DEGRADED


class TestDatasetTables:
    """Test suite for the dataset parameter and description tables."""

    @pytest.mark.parametrize('dataset,altitude,mach,variation', [
        ('FD001', 0, 0.0, 0.5),
        ('FD002', 25000, 0.7, 2.0),
        ('FD003', 0, 0.0, 0.8),
        ('FD004', 30000, 0.75, 2.5),
    ])
    def test_parameters(self, dataset, altitude, mach, variation):
        """Test operating-envelope parameters per dataset."""
        params = dataset_parameters(DatasetClass(dataset))
        assert params.altitude_base == altitude
        assert params.mach_base == mach
        assert params.temp_variation == variation

    def test_variable_conditions(self):
        """Test only FD002 and FD004 fly variable conditions."""
        assert DatasetClass.FD002.variable_conditions
        assert DatasetClass.FD004.variable_conditions
        assert not DatasetClass.FD001.variable_conditions
        assert not DatasetClass.FD003.variable_conditions

    def test_unknown_dataset_rejected(self):
        """Test an unknown dataset name is rejected."""
        with pytest.raises(ValueError):
            dataset_parameters('FD005')

    def test_dataset_spec_fault_modes(self):
        """Test dataset descriptions carry fault modes and average cycles."""
        assert dataset_spec(DatasetClass.FD001).fault_modes == (HPC_DEGRADATION,)
        assert FAN_DEGRADATION in dataset_spec(DatasetClass.FD004).fault_modes
        assert dataset_spec(DatasetClass.FD003).avg_cycles == 247.2


if __name__ == '__main__':
    pytest.main([__file__, '-v', '--tb=short'])
