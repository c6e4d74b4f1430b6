"""Sampling and summary statistics built on top of the probviz registry."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from ..core import DistributionResult, SampleSet, Statistics
from ..distributions import Distribution, DistributionKind, get_distribution

__all__ = [
    "DISCRETE_GRID",
    "CONTINUOUS_GRID",
    "sample_grid",
    "bind_parameters",
    "pdf_to_cdf",
    "compute_statistics",
    "evaluate_distribution",
]

logger = logging.getLogger(__name__)

# Fixed plotting windows; they do not adapt to the supplied parameters.
DISCRETE_GRID = np.arange(0, 20, dtype=float)
CONTINUOUS_GRID = np.arange(-50, 50, dtype=float) / 10.0

_ERRSTATE = {"divide": "ignore", "invalid": "ignore", "over": "ignore", "under": "ignore"}


def sample_grid(dist: Distribution) -> np.ndarray:
    """Return the x-axis sample points for ``dist``.

    Discrete families use the integers 0..19; continuous families use
    -5.0..4.9 in steps of 0.1.
    """
    grid = DISCRETE_GRID if dist.discrete else CONTINUOUS_GRID
    return grid.copy()


def bind_parameters(dist: Distribution, params: Sequence[float] = ()) -> tuple[np.float64, ...]:
    """Bind positional ``params`` to ``dist``'s parameters.

    Missing trailing values fall back to the documented defaults and extra
    values are dropped.
    """
    values = list(params)[: len(dist.parameters)]
    values.extend(dist.defaults[len(values) :])
    return tuple(np.float64(value) for value in values)


def pdf_to_cdf(pdf_values: np.ndarray) -> np.ndarray:
    """Running sum of ``pdf_values`` normalised by its final value.

    The sum is not scaled by the grid spacing. A zero total mass yields NaN
    everywhere.
    """
    values = np.asarray(pdf_values, dtype=float)
    if values.size == 0:
        return np.zeros(0, dtype=float)
    cumulative = np.cumsum(values)
    with np.errstate(**_ERRSTATE):
        return cumulative / cumulative[-1]


def compute_statistics(dist: Distribution, params: Sequence[float]) -> Statistics:
    """Evaluate the closed-form moments of ``dist`` at ``params``."""
    bound = bind_parameters(dist, params)
    with np.errstate(**_ERRSTATE):
        mean = np.float64(dist.mean(*bound))
        variance = np.float64(dist.variance(*bound))
        std_dev = np.sqrt(variance)
    return Statistics(mean=float(mean), variance=float(variance), std_dev=float(std_dev))


def evaluate_distribution(
    distribution: str | DistributionKind,
    params: Sequence[float] = (),
) -> DistributionResult:
    """Sample the PDF, derive the CDF and summarise ``distribution``.

    Raises :class:`~probviz.distributions.UnknownDistributionError` before any
    computation when the name is not registered. Numeric anomalies in the
    density or moments are returned as NaN/inf rather than raised.
    """
    dist = get_distribution(distribution)
    bound = bind_parameters(dist, params)
    xs = sample_grid(dist)
    pdf_values = np.asarray(dist.pdf(xs, *bound), dtype=float)
    cdf_values = pdf_to_cdf(pdf_values)
    stats = compute_statistics(dist, bound)
    total = float(np.sum(pdf_values))
    if not total > 0:
        logger.debug("Distribution %s has non-positive total mass %s", dist.name, total)
    return DistributionResult(
        distribution=dist.name,
        parameters={name: float(value) for name, value in zip(dist.parameters, bound, strict=True)},
        samples=SampleSet(x_values=xs, pdf_values=pdf_values, cdf_values=cdf_values),
        stats=stats,
        pdf_expression=dist.pdf_expression,
        cdf_expression=dist.cdf_expression,
        diagnostics={"total_mass": total, "grid": "discrete" if dist.discrete else "continuous"},
    )
