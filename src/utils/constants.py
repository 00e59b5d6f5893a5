"""
Numerical constants and tolerances for discrete probability calculations.

This module defines the thresholds used when evaluating and validating
probability mass functions. All values are calibrated for double
precision arithmetic on supports up to the tens of thousands.
"""

# Interleaved evaluation
INTERLEAVE_PIVOT = 1.0  # Running result above this is lowered, below it is raised

# Diagnostic tolerances
PROBABILITY_TOLERANCE = 1e-9  # Normalization and complement-law tolerance
REFERENCE_RELATIVE_TOLERANCE = 1e-9  # Relative agreement with scipy.stats
REFERENCE_ABSOLUTE_TOLERANCE = 1e-12  # Absolute agreement near zero

# Cumulative operations
DEFAULT_OPERATION_NAME = "EQUAL"  # Applied when a distribution has no operation

# Support tabulation
TABLE_TAIL_MASS = 1e-12  # Unbounded supports are tabulated until the tail mass falls below this
MAX_TABLE_ROWS = 100_000  # Hard cap on rows produced for a support table
