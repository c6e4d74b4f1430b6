"""Core result dataclasses for probviz modules."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pandas as pd


def _json_number(value: Any) -> float | None:
    """Return a JSON-safe float; NaN and infinities become ``None``."""
    number = float(value)
    return number if math.isfinite(number) else None


def _json_list(values: np.ndarray) -> list[float | None]:
    return [_json_number(value) for value in np.asarray(values, dtype=float).tolist()]


@dataclass(slots=True)
class SampleSet:
    """Sampled x-axis with the matching PDF and cumulative values."""

    x_values: np.ndarray
    pdf_values: np.ndarray
    cdf_values: np.ndarray

    def __post_init__(self) -> None:
        sizes = {len(self.x_values), len(self.pdf_values), len(self.cdf_values)}
        if len(sizes) != 1:
            raise ValueError("x, pdf and cdf samples must share the same length.")

    def __len__(self) -> int:
        return len(self.x_values)


@dataclass(slots=True)
class Statistics:
    """Closed-form summary statistics for a parameterised distribution."""

    mean: float
    variance: float
    std_dev: float

    def to_payload(self) -> dict[str, float | None]:
        return {
            "mean": _json_number(self.mean),
            "variance": _json_number(self.variance),
            "stdDev": _json_number(self.std_dev),
        }


@dataclass(slots=True)
class DistributionResult:
    """Everything a plotting client needs for one distribution request."""

    distribution: str
    parameters: dict[str, float]
    samples: SampleSet
    stats: Statistics
    pdf_expression: str
    cdf_expression: str
    diagnostics: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        """Return the camelCase JSON body served over HTTP."""
        return {
            "xValues": _json_list(self.samples.x_values),
            "pdfValues": _json_list(self.samples.pdf_values),
            "cdfValues": _json_list(self.samples.cdf_values),
            "stats": self.stats.to_payload(),
            "pdfExpression": self.pdf_expression,
            "cdfExpression": self.cdf_expression,
        }

    def to_frame(self) -> pd.DataFrame:
        """Return a tidy data frame of the sampled curve."""
        return pd.DataFrame(
            {
                "x": self.samples.x_values,
                "pdf": self.samples.pdf_values,
                "cdf": self.samples.cdf_values,
            }
        )


__all__ = [
    "SampleSet",
    "Statistics",
    "DistributionResult",
]
