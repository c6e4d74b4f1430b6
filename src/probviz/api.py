"""FastAPI application serving sampled distribution curves."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from . import __version__
from .config import ServerConfig
from .distributions import UnknownDistributionError, get_distribution, list_distributions
from .sampling import evaluate_distribution

logger = logging.getLogger(__name__)

INVALID_DISTRIBUTION_MESSAGE = "Invalid distribution type"
HEALTH_MESSAGE = "Backend is running!"

_FLOAT_PREFIX = re.compile(r"^[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_float(text: str) -> float:
    """Parse the leading numeric prefix of ``text``; NaN when there is none.

    ``"3.5abc"`` parses as 3.5 and ``"abc"`` as NaN.
    """
    match = _FLOAT_PREFIX.match(text.strip())
    if match is None:
        return math.nan
    return float(match.group(0))


_INDEX_KEY = re.compile(r"0|[1-9]\d*")
_MAX_INDEX = 2**32 - 2


def _is_index_key(key: str) -> bool:
    return bool(_INDEX_KEY.fullmatch(key)) and int(key) <= _MAX_INDEX


def ordered_query_keys(keys: Iterable[str]) -> list[str]:
    """Order query keys the way a JavaScript object enumerates them.

    Canonical integer keys ("0", "7", not "07") come first in ascending
    numeric order; every other key follows in order of first appearance.
    """
    unique = list(dict.fromkeys(keys))
    indices = sorted((key for key in unique if _is_index_key(key)), key=int)
    return indices + [key for key in unique if not _is_index_key(key)]


def positional_params(request: Request) -> list[float]:
    """Query values in enumeration order; key names are otherwise ignored."""
    query = request.query_params
    return [parse_float(query.getlist(key)[0]) for key in ordered_query_keys(query.keys())]


def create_app(config: ServerConfig | None = None) -> FastAPI:
    """Build the HTTP application."""
    config = config or ServerConfig()
    app = FastAPI(title="probviz", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"
        logger.info("Incoming request: %s %s", request.method, target)
        return await call_next(request)

    @app.exception_handler(UnknownDistributionError)
    async def unknown_distribution(request: Request, exc: UnknownDistributionError) -> JSONResponse:
        logger.info("Rejected distribution request: %s", exc)
        return JSONResponse(status_code=400, content={"error": INVALID_DISTRIBUTION_MESSAGE})

    @app.get("/", response_class=PlainTextResponse)
    def health() -> str:
        return HEALTH_MESSAGE

    @app.get("/distributions")
    def distributions() -> dict[str, list[dict[str, Any]]]:
        """List supported distributions with their parameters and formulas."""
        entries = []
        for name in list_distributions():
            dist = get_distribution(name)
            entries.append(
                {
                    "name": dist.name,
                    "parameters": list(dist.parameters),
                    "defaults": list(dist.defaults),
                    "discrete": dist.discrete,
                    "pdfExpression": dist.pdf_expression,
                    "cdfExpression": dist.cdf_expression,
                    "notes": dist.notes,
                }
            )
        return {"distributions": entries}

    @app.get("/distribution/{kind}")
    def distribution(kind: str, request: Request) -> dict[str, Any]:
        """Sample the PDF/CDF of ``kind``.

        Query values bind positionally to the distribution's parameters in
        enumeration order of the query keys; the key names are not inspected.
        """
        result = evaluate_distribution(kind, positional_params(request))
        return result.to_payload()

    return app


app = create_app()

__all__ = ["app", "create_app", "ordered_query_keys", "parse_float", "positional_params"]
