"""
Pytest configuration and shared fixtures.
"""

import pytest


@pytest.fixture
def dice_params():
    """Five rolls of a fair die, success is rolling a one."""
    return {
        "trials": 5,
        "chance_of_success": 1.0 / 6,
    }


@pytest.fixture
def lottery_params():
    """Pick-6 lottery from 50 numbers."""
    return {
        "population_size": 50,
        "sample_size": 6,
        "success_states": 6,
    }


@pytest.fixture
def large_hypergeometric_params():
    """Population large enough that naive factorials overflow."""
    return {
        "population_size": 80000,
        "sample_size": 40000,
        "success_states": 10000,
    }


@pytest.fixture
def counting_pmf():
    """Factory wrapping a PMF with a call counter."""

    def wrap(pmf):
        calls = []

        def counted(y):
            calls.append(y)
            return pmf(y)

        counted.calls = calls
        return counted

    return wrap
