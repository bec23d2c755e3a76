"""
Unit tests for the sensor series generator.

Tests SensorSeriesGenerator to ensure:
1. One reading per cycle, in ascending order
2. Derived channels (EGT, EPR, N1/N2) follow their primaries
3. Bounded degradation (health floor) and noise envelopes
4. Silent-empty behaviour for unknown engines
"""

import numpy as np
import pandas as pd
import pytest
from pathlib import Path
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cmapss_twin.fleet.registry import EngineRegistry, default_registry, dataset_parameters
from cmapss_twin.simulation.sensor_generator import (
    SensorSeriesGenerator,
    READING_COLUMNS,
    health_factor,
    generate_sensor_series,
    readings_to_dataframe,
)
from cmapss_twin.utils.config import SimulationConfig


ENGINE_IDS = [r.engine_id for r in default_registry().list_all()]


class MidpointRng:
    """Random source returning the centre of every interval (zero jitter)."""

    def uniform(self, low, high):
        return (low + high) / 2


class TestSensorSeriesGenerator:
    """Test suite for SensorSeriesGenerator."""

    @pytest.fixture
    def generator(self):
        """Create a seeded generator over the built-in fleet."""
        return SensorSeriesGenerator(seed=42)

    @pytest.fixture
    def quiet_generator(self):
        """Create a generator with zero jitter."""
        return SensorSeriesGenerator(rng=MidpointRng())

    @pytest.mark.parametrize('engine_id', ENGINE_IDS)
    def test_length_and_order(self, generator, engine_id):
        """Test one reading per cycle in ascending order."""
        readings = generator.generate(engine_id, 25)
        assert len(readings) == 25
        assert [r.cycle for r in readings] == list(range(1, 26))
        assert all(r.engine_id == engine_id for r in readings)

    def test_unknown_engine_returns_empty(self, generator):
        """Test unknown engines yield an empty series."""
        assert generator.generate('unknown-id', 10) == []

    def test_empty_registry_is_not_replaced(self):
        """Test an empty caller registry does not fall back to the built-in fleet."""
        generator = SensorSeriesGenerator(registry=EngineRegistry([]), seed=1)
        assert len(generator.registry) == 0
        assert generator.generate('CMAPSS-FD001-001', 3) == []

    def test_non_positive_cycle_count(self, generator):
        """Test zero and negative cycle counts yield an empty series."""
        assert generator.generate('CMAPSS-FD001-001', 0) == []
        assert generator.generate('CMAPSS-FD001-001', -3) == []

    def test_default_cycle_count(self):
        """Test the configured default series length."""
        generator = SensorSeriesGenerator(config=SimulationConfig(default_cycles=7), seed=1)
        assert len(generator.generate('CMAPSS-FD001-001')) == 7

    @pytest.mark.parametrize('engine_id', ENGINE_IDS)
    def test_egt_follows_t30(self, generator, engine_id):
        """Test EGT is T30 converted from Rankine to Celsius."""
        for r in generator.generate(engine_id, 40):
            expected = (r.T30 - 459.67) * 5 / 9
            assert abs(r.EGT - expected) <= 0.05 + 1e-9

    @pytest.mark.parametrize('engine_id', ENGINE_IDS)
    def test_epr_follows_pressures(self, generator, engine_id):
        """Test EPR is P24 over P2."""
        for r in generator.generate(engine_id, 40):
            assert abs(r.epr - r.P24 / r.P2) <= 0.0005 + 1e-9

    def test_percent_speeds(self, generator):
        """Test N1 and N2 are percent of rated fan and core speed."""
        for r in generator.generate('CMAPSS-FD002-002', 40):
            assert abs(r.N1 - r.Nf / 2400 * 100) <= 0.05 + 1e-9
            assert abs(r.N2 - r.Nc / 9100 * 100) <= 0.05 + 1e-9

    def test_corrected_speeds(self, generator):
        """Test corrected speeds use the sea-level reference temperature."""
        for r in generator.generate('CMAPSS-FD004-001', 20):
            assert r.NRf == pytest.approx(r.Nf / np.sqrt(r.T2 / 518.67), abs=0.005 + 1e-9)
            assert r.NRc == pytest.approx(r.Nc / np.sqrt(r.T24 / 518.67), abs=0.005 + 1e-9)

    def test_golden_first_cycle(self, quiet_generator):
        """Test every channel of a jitter-free first cycle."""
        # CMAPSS-FD001-001: 362 cycles, no jitter
        r = quiet_generator.generate('CMAPSS-FD001-001', 1)[0]
        assert r.T2 == 518.67
        assert r.T30 == 1350.07
        assert r.EGT == 494.7
        assert r.P2 == 14.62
        assert r.P24 == 593.12
        assert r.epr == 40.569
        assert r.Nf == 2382.5
        assert r.N1 == 99.3
        assert r.Nc == 9025.18
        assert r.N2 == 99.2
        assert r.Ps30 == 1400.14
        assert r.phi == 0.03
        assert r.fuel_flow == 4
        assert r.NRf == r.Nf
        assert r.altitude == 0.0
        assert r.mach_number == 0.0
        assert r.ambient_temp == 15.0
        assert r.BPR == 5.1
        assert r.timestamp.startswith('2024-01-02')

    def test_health_floor(self, quiet_generator):
        """Test degradation stops at the health floor."""
        # CMAPSS-FD001-003 has 206 cycles; degradation bottoms out after ~99 cycles
        readings = quiet_generator.generate('CMAPSS-FD001-003', 300)
        last = readings[-1]
        assert last.Nf == 1432.8
        assert last.T30 == 1362.0
        assert readings[-2].Nf == last.Nf

    def test_degradation_trend(self, quiet_generator):
        """Test fan speed falls and HPC temperature rises with wear."""
        readings = quiet_generator.generate('CMAPSS-FD002-002', 120)
        fan_speeds = [r.Nf for r in readings]
        hpc_temps = [r.T30 for r in readings]
        assert fan_speeds == sorted(fan_speeds, reverse=True)
        assert hpc_temps == sorted(hpc_temps)

    @pytest.mark.parametrize('engine_id', ENGINE_IDS)
    def test_noise_envelope(self, generator, engine_id):
        """Test jittered channels stay within their envelopes."""
        params = dataset_parameters(default_registry().get(engine_id).dataset)
        half = params.temp_variation / 2
        for r in generator.generate(engine_id, 50):
            assert abs(r.T2 - 518.67) <= half + 0.005 + 1e-9
            assert abs(r.P2 - 14.62) <= 0.01 + 0.005 + 1e-9
            assert abs(r.altitude - params.altitude_base) <= half * 1000 + 0.05 + 1e-6

    def test_ambient_temperature_by_dataset(self, generator):
        """Test ambient temperature follows the dataset altitude."""
        assert generator.generate('CMAPSS-FD001-001', 1)[0].ambient_temp == 15.0
        assert generator.generate('CMAPSS-FD002-001', 1)[0].ambient_temp == -147.5
        assert generator.generate('CMAPSS-FD004-001', 1)[0].ambient_temp == -180.0

    def test_fresh_jitter_per_call(self, generator):
        """Test repeated calls carry independent jitter."""
        first = [r.T30 for r in generator.generate('CMAPSS-FD004-002', 30)]
        second = [r.T30 for r in generator.generate('CMAPSS-FD004-002', 30)]
        assert first != second

    def test_seed_reproducibility(self):
        """Test equal seeds give equal series."""
        a = SensorSeriesGenerator(seed=7).generate('CMAPSS-FD003-001', 15)
        b = SensorSeriesGenerator(seed=7).generate('CMAPSS-FD003-001', 15)
        assert a == b

    def test_consecutive_daily_timestamps(self, generator):
        """Test cycle c is stamped base date plus c days."""
        readings = generator.generate('CMAPSS-FD001-002', 3)
        assert [r.timestamp[:10] for r in readings] == ['2024-01-02', '2024-01-03', '2024-01-04']


class TestHealthFactor:
    """Test suite for the bounded degradation curve."""

    def test_linear_region(self):
        """Test the linear part of the curve."""
        assert health_factor(60, 100) == pytest.approx(0.5)
        assert health_factor(24, 100) == pytest.approx(0.8)

    def test_floor(self):
        """Test the default floor of 0.6."""
        assert health_factor(100, 100) == 0.6
        assert health_factor(1000, 100) == 0.6

    def test_custom_floor(self):
        """Test a caller-supplied floor."""
        assert health_factor(120, 100, floor=0.0) == pytest.approx(0.0)


class TestDataFrameExport:
    """Test suite for tabular export."""

    def test_columns_and_rows(self):
        """Test one row per cycle with the reading columns."""
        readings = generate_sensor_series('CMAPSS-FD001-001', 12, seed=3)
        frame = readings_to_dataframe(readings)
        assert isinstance(frame, pd.DataFrame)
        assert list(frame.columns) == READING_COLUMNS
        assert len(frame) == 12
        assert frame['cycle'].tolist() == list(range(1, 13))

    def test_empty(self):
        """Test an empty series keeps its columns."""
        frame = readings_to_dataframe([])
        assert frame.empty
        assert list(frame.columns) == READING_COLUMNS


if __name__ == '__main__':
    pytest.main([__file__, '-v', '--tb=short'])
