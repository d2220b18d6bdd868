"""
Feature schema for pylinreg.

This module is the SINGLE SOURCE OF TRUTH for column names and the
feature count. Import from here, never use raw strings.

Usage:
    from pylinreg.core.features import FEATURE_NAMES, N_FEATURES, Sample

    sample = Sample(features=(125, 256, 6000, 256, 16, 128), target=198)
"""

from dataclasses import dataclass

# Machine cycle time (ns), min/max main memory (KB), cache (KB),
# min/max channels. Position in a feature row is semantic.
FEATURE_NAMES: tuple[str, ...] = ('MYCT', 'MMIN', 'MMAX', 'CACH', 'CHMIN', 'CHMAX')

# Published relative performance
TARGET_NAME = 'PRP'

N_FEATURES = len(FEATURE_NAMES)

# Column layout of the machine data file (no header row)
FILE_COLUMNS: tuple[str, ...] = (
    'vendor', 'model', *FEATURE_NAMES, TARGET_NAME, 'ERP',
)

LABEL_COLUMNS: tuple[str, ...] = ('vendor', 'model')


@dataclass(frozen=True)
class Sample:
    """
    One observation: a feature row paired with its target value.

    Attributes:
        features: Values in FEATURE_NAMES order
        target: Target value (PRP)
    """
    features: tuple[float, ...]
    target: float


__all__ = [
    'FEATURE_NAMES',
    'TARGET_NAME',
    'N_FEATURES',
    'FILE_COLUMNS',
    'LABEL_COLUMNS',
    'Sample',
]
