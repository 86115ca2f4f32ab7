"""Shared constants for the analysis formulation package.

This module consolidates the document format version, output field defaults,
and the distribution vocabulary used by formulation, workflow, and document I/O.
"""

from typing import Any, Dict, FrozenSet, Tuple

# =============================================================================
# Document Format
# =============================================================================

FILE_FORMAT_VERSION: int = 1

SUPPORTED_VERSIONS: Tuple[int, ...] = (FILE_FORMAT_VERSION,)

# =============================================================================
# Output Declarations
# =============================================================================

# Caller-supplied fields are overlaid on these (caller wins)
DEFAULT_OUTPUT_FIELDS: Dict[str, Any] = {
    'units': '',
    'objective_function': False,
    'objective_function_index': None,
    'objective_function_target': None,
    'objective_function_group': None,
    'scaling_factor': None,
}

# =============================================================================
# Static Data Points
# =============================================================================

STATIC_DATA_POINT_STATUS: str = 'na'

# =============================================================================
# Workflow Variables
# =============================================================================

DISTRIBUTION_TYPES: FrozenSet[str] = frozenset({
    'uniform', 'triangle', 'normal', 'lognormal', 'discrete'
})

# Distributions that cannot be described without a spread
DISTRIBUTIONS_REQUIRING_STD: FrozenSet[str] = frozenset({'normal', 'lognormal'})

DEFAULT_MEASURE_TYPE: str = 'ModelMeasure'

DISCRETE_WEIGHT_TOLERANCE: float = 1e-6
