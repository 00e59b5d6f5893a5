"""
Tabulation of a distribution over its enumerable support.

Produces pandas DataFrames consumed by the command-line and Streamlit
interfaces.
"""

from typing import Optional

import numpy as np
import pandas as pd

from src.diagnostics.reference import support_upper_bound
from src.utils.constants import MAX_TABLE_ROWS
from src.utils.types import DiscreteDistribution


def support_table(distribution: DiscreteDistribution, upper: Optional[int] = None) -> pd.DataFrame:
    """
    Tabulate PMF, CDF and survival function from 0 to upper.

    Args:
        distribution: Distribution to tabulate
        upper: Last random variable to include, default support_upper_bound

    Returns:
        DataFrame with columns y, pmf, cdf (P(Y <= y)) and survival (P(Y > y))

    Raises:
        ValueError: If upper is negative or would exceed MAX_TABLE_ROWS rows
    """
    if upper is None:
        upper = support_upper_bound(distribution)
    if upper < 0:
        raise ValueError(f"upper must be non-negative, got upper={upper}")
    if upper >= MAX_TABLE_ROWS:
        raise ValueError(f"upper must be below {MAX_TABLE_ROWS}, got upper={upper}")

    ys = np.arange(upper + 1)
    probabilities = np.array([distribution.compute_result(int(y)) for y in ys], dtype=float)
    cdf = np.minimum(np.cumsum(probabilities), 1.0)

    return pd.DataFrame(
        {
            "y": ys,
            "pmf": probabilities,
            "cdf": cdf,
            "survival": 1.0 - cdf,
        }
    )
