"""Core distribution registry infrastructure."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

import numpy as np

Pdf = Callable[..., np.ndarray]
Moment = Callable[..., float]

logger = logging.getLogger(__name__)


class DistributionKind(str, Enum):
    """Closed set of supported distribution families."""

    NORMAL = "normal"
    UNIFORM = "uniform"
    EXPONENTIAL = "exponential"
    POISSON = "poisson"
    RAYLEIGH = "rayleigh"
    LAPLACIAN = "laplacian"
    BINOMIAL = "binomial"


class UnknownDistributionError(KeyError):
    """Raised when a distribution name is not part of the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown distribution '{self.name}'."


@dataclass(frozen=True, slots=True)
class Distribution:
    """Describe a distribution family: density, moments and display formulas.

    ``pdf`` takes the sample points followed by the positional parameters in
    the order given by ``parameters``; ``mean`` and ``variance`` take the same
    positional parameters.
    """

    kind: DistributionKind
    parameters: tuple[str, ...]
    defaults: tuple[float, ...]
    pdf: Pdf
    mean: Moment
    variance: Moment
    pdf_expression: str
    cdf_expression: str
    discrete: bool = False
    notes: str | None = None

    @property
    def name(self) -> str:
        return self.kind.value


def build_registry(distributions: Iterable[Distribution]) -> Mapping[str, Distribution]:
    """Freeze a collection of descriptors into a read-only name lookup."""
    table: dict[str, Distribution] = {}
    for dist in distributions:
        if dist.name in table:
            raise ValueError(f"Distribution '{dist.name}' defined twice.")
        if len(dist.parameters) != len(dist.defaults):
            raise ValueError(f"Distribution '{dist.name}' needs one default per parameter.")
        table[dist.name] = dist
    missing = {kind.value for kind in DistributionKind} - set(table)
    if missing:
        raise ValueError(f"Missing descriptors for: {', '.join(sorted(missing))}.")
    return MappingProxyType(table)


def lookup(registry: Mapping[str, Distribution], name: str | DistributionKind) -> Distribution:
    """Retrieve a distribution from ``registry`` by kind or exact name."""
    key = name.value if isinstance(name, DistributionKind) else str(name)
    try:
        return registry[key]
    except KeyError:
        logger.debug("Rejected unknown distribution %r", name)
        raise UnknownDistributionError(str(name)) from None


__all__ = [
    "Distribution",
    "DistributionKind",
    "Moment",
    "Pdf",
    "UnknownDistributionError",
    "build_registry",
    "lookup",
]
