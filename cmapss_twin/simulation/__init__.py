"""
Simulation Package for the CMAPSS digital twin.

This package provides the synthetic sensor series generator that every
downstream health, performance and projection calculation consumes.

Components:
    - sensor_generator: Per-cycle C-MAPSS style sensor readings
"""

from .sensor_generator import (
    SensorReading,
    SensorSeriesGenerator,
    READING_COLUMNS,
    health_factor,
    generate_sensor_series,
    readings_to_dataframe,
)


__all__ = [
    'SensorReading',
    'SensorSeriesGenerator',
    'READING_COLUMNS',
    'health_factor',
    'generate_sensor_series',
    'readings_to_dataframe',
]
