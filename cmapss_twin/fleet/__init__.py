"""
Fleet Package for the CMAPSS digital twin.

Holds the static engine registry and the C-MAPSS dataset catalogue
that every generator resolves engine ids against.
"""

from .registry import (
    DatasetClass,
    DatasetParameters,
    DatasetSpec,
    EngineStatus,
    EngineRecord,
    EngineRegistry,
    EngineNotFoundError,
    DATASET_PARAMETERS,
    CMAPSS_DATASETS,
    DEFAULT_FLEET,
    HPC_DEGRADATION,
    FAN_DEGRADATION,
    dataset_parameters,
    dataset_spec,
    default_registry,
)


__all__ = [
    'DatasetClass',
    'DatasetParameters',
    'DatasetSpec',
    'EngineStatus',
    'EngineRecord',
    'EngineRegistry',
    'EngineNotFoundError',
    'DATASET_PARAMETERS',
    'CMAPSS_DATASETS',
    'DEFAULT_FLEET',
    'HPC_DEGRADATION',
    'FAN_DEGRADATION',
    'dataset_parameters',
    'dataset_spec',
    'default_registry',
]
