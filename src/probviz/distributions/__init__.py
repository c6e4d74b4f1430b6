"""Distribution registry and canonical implementations."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import numpy as np
from scipy.special import comb, factorial

from .base import (
    Distribution,
    DistributionKind,
    Pdf,
    UnknownDistributionError,
    build_registry,
    lookup,
)

__all__ = [
    "BUILTIN_DISTRIBUTIONS",
    "REGISTRY",
    "Distribution",
    "DistributionKind",
    "Pdf",
    "UnknownDistributionError",
    "get_distribution",
    "list_distributions",
]

_ERRSTATE = {"divide": "ignore", "invalid": "ignore", "over": "ignore", "under": "ignore"}


def _as_array(x: np.ndarray | float) -> np.ndarray:
    return np.asarray(x, dtype=float)


def normal_pdf(x: np.ndarray, mu: float = 0.0, sigma: float = 1.0) -> np.ndarray:
    arr = _as_array(x)
    with np.errstate(**_ERRSTATE):
        return (1.0 / (sigma * np.sqrt(2.0 * np.pi))) * np.exp(-0.5 * ((arr - mu) / sigma) ** 2)


def uniform_pdf(x: np.ndarray, a: float = 0.0, b: float = 1.0) -> np.ndarray:
    arr = _as_array(x)
    with np.errstate(**_ERRSTATE):
        height = np.divide(1.0, np.float64(b) - np.float64(a))
    return np.where((arr >= a) & (arr <= b), height, 0.0)


def exponential_pdf(x: np.ndarray, lam: float = 1.0) -> np.ndarray:
    arr = _as_array(x)
    with np.errstate(**_ERRSTATE):
        values = lam * np.exp(-lam * arr)
    return np.where(arr >= 0, values, 0.0)


def poisson_pmf(x: np.ndarray, lam: float = 3.0) -> np.ndarray:
    """Poisson mass; zero away from the non-negative integers."""
    arr = _as_array(x)
    mask = (arr >= 0) & (arr == np.floor(arr))
    with np.errstate(**_ERRSTATE):
        values = np.exp(-lam) * np.power(np.float64(lam), arr) / factorial(arr)
    return np.where(mask, values, 0.0)


def rayleigh_pdf(x: np.ndarray, sigma: float = 1.0) -> np.ndarray:
    arr = _as_array(x)
    with np.errstate(**_ERRSTATE):
        scale = np.float64(sigma) ** 2
        values = (arr / scale) * np.exp(-(arr**2) / (2.0 * scale))
    return np.where(arr >= 0, values, 0.0)


def laplacian_pdf(x: np.ndarray, mu: float = 0.0, b: float = 1.0) -> np.ndarray:
    arr = _as_array(x)
    b = np.float64(b)
    with np.errstate(**_ERRSTATE):
        return (1.0 / (2.0 * b)) * np.exp(-np.abs(arr - mu) / b)


def binomial_pmf(x: np.ndarray, n: float = 10.0, p: float = 0.5) -> np.ndarray:
    """Binomial mass with the real-valued binomial coefficient.

    ``comb`` evaluates to zero for ``x > n`` when ``n`` is an integer; other
    non-integer inputs are evaluated through the gamma function as-is.
    """
    arr = _as_array(x)
    p = np.float64(p)
    with np.errstate(**_ERRSTATE):
        return comb(n, arr) * np.power(p, arr) * np.power(1.0 - p, n - arr)


# Moment callables receive numpy scalars from the sampling engine, so division
# by zero yields inf/nan instead of raising.
BUILTIN_DISTRIBUTIONS: tuple[Distribution, ...] = (
    Distribution(
        kind=DistributionKind.NORMAL,
        parameters=("mu", "sigma"),
        defaults=(0.0, 1.0),
        pdf=normal_pdf,
        mean=lambda mu=0.0, sigma=1.0: mu,
        variance=lambda mu=0.0, sigma=1.0: sigma**2,
        pdf_expression="(1 / (σ√(2π))) * exp(-0.5 * ((x - μ) / σ)^2)",
        cdf_expression="0.5 * (1 + erf((x - μ) / (σ * sqrt(2))))",
        notes="Gaussian with location mu and scale sigma.",
    ),
    Distribution(
        kind=DistributionKind.UNIFORM,
        parameters=("a", "b"),
        defaults=(0.0, 1.0),
        pdf=uniform_pdf,
        mean=lambda a=0.0, b=1.0: (a + b) / 2,
        variance=lambda a=0.0, b=1.0: (b - a) ** 2 / 12,
        pdf_expression="1 / (b - a) for a ≤ x ≤ b",
        cdf_expression="((x - a) / (b - a)) for a ≤ x ≤ b",
        notes="Continuous uniform on the closed interval [a, b].",
    ),
    Distribution(
        kind=DistributionKind.EXPONENTIAL,
        parameters=("lambda",),
        defaults=(1.0,),
        pdf=exponential_pdf,
        mean=lambda lam=1.0: 1 / lam,
        variance=lambda lam=1.0: 1 / lam**2,
        pdf_expression="λ * exp(-λx) for x ≥ 0",
        cdf_expression="1 - exp(-λx) for x ≥ 0",
        notes="Exponential with rate lambda.",
    ),
    Distribution(
        kind=DistributionKind.POISSON,
        parameters=("lambda",),
        defaults=(3.0,),
        pdf=poisson_pmf,
        mean=lambda lam=3.0: lam,
        variance=lambda lam=3.0: lam,
        pdf_expression="(e^(-λ) * λ^x) / x!",
        cdf_expression="Σ (e^(-λ) * λ^k / k!) from k=0 to x",
        discrete=True,
        notes="Poisson counts with rate lambda.",
    ),
    Distribution(
        kind=DistributionKind.RAYLEIGH,
        parameters=("sigma",),
        defaults=(1.0,),
        pdf=rayleigh_pdf,
        mean=lambda sigma=1.0: sigma * np.sqrt(np.pi / 2),
        variance=lambda sigma=1.0: (2 - np.pi / 2) * sigma**2,
        pdf_expression="(x / σ^2) * exp(-x^2 / (2 * σ^2)) for x ≥ 0",
        cdf_expression="1 - exp(-x^2 / (2 * σ^2)) for x ≥ 0",
        notes="Rayleigh with scale sigma.",
    ),
    Distribution(
        kind=DistributionKind.LAPLACIAN,
        parameters=("mu", "b"),
        defaults=(0.0, 1.0),
        pdf=laplacian_pdf,
        mean=lambda mu=0.0, b=1.0: mu,
        variance=lambda mu=0.0, b=1.0: 2 * b**2,
        pdf_expression="(1 / (2 * b)) * exp(-|x - μ| / b)",
        cdf_expression="0.5 * (1 + sign(x - μ) * (1 - exp(-|x - μ| / b)))",
        notes="Laplace (double exponential) with location mu and scale b.",
    ),
    Distribution(
        kind=DistributionKind.BINOMIAL,
        parameters=("n", "p"),
        defaults=(10.0, 0.5),
        pdf=binomial_pmf,
        mean=lambda n=10.0, p=0.5: n * p,
        variance=lambda n=10.0, p=0.5: n * p * (1 - p),
        pdf_expression="nCx * p^x * (1-p)^(n-x)",
        cdf_expression="Σ (nCx * p^x * (1-p)^(n-x)) from x=0 to x",
        discrete=True,
        notes="Binomial successes in n trials with probability p.",
    ),
)

REGISTRY: Mapping[str, Distribution] = build_registry(BUILTIN_DISTRIBUTIONS)


def list_distributions() -> Iterable[str]:
    """Return registered distribution names."""
    return sorted(REGISTRY.keys())


def get_distribution(name: str | DistributionKind) -> Distribution:
    """Retrieve a distribution by name."""
    return lookup(REGISTRY, name)
