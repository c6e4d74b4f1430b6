"""Top-level package exports for probviz."""

from __future__ import annotations

from importlib import metadata

__version__ = "0.1.0"

try:
    __version__ = metadata.version("probviz")
except metadata.PackageNotFoundError:  # pragma: no cover - local dev fallback
    pass

from . import core as core  # noqa: F401
from . import distributions as distributions  # noqa: F401
from .core import DistributionResult, SampleSet, Statistics  # noqa: F401
from .distributions import (  # noqa: F401
    DistributionKind,
    UnknownDistributionError,
    get_distribution,
    list_distributions,
)
from .sampling import evaluate_distribution  # noqa: F401

__all__ = [
    "__version__",
    "core",
    "distributions",
    "DistributionKind",
    "DistributionResult",
    "SampleSet",
    "Statistics",
    "UnknownDistributionError",
    "evaluate_distribution",
    "get_distribution",
    "list_distributions",
]
