import logging
import math

import pytest
from fastapi.testclient import TestClient

from probviz.api import create_app, ordered_query_keys, parse_float
from probviz.config import ServerConfig
from probviz.distributions import DistributionKind


@pytest.fixture()
def client() -> TestClient:
    return TestClient(create_app(ServerConfig()))


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert response.text == "Backend is running!"
    assert response.headers["content-type"].startswith("text/plain")


def test_unknown_distribution_returns_400(client: TestClient) -> None:
    response = client.get("/distribution/unknownthing")
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid distribution type"}


@pytest.mark.parametrize("kind", ["Normal", "BINOMIAL"])
def test_kind_lookup_is_case_sensitive(client: TestClient, kind: str) -> None:
    response = client.get(f"/distribution/{kind}")
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid distribution type"}


def test_normal_defaults_payload(client: TestClient) -> None:
    response = client.get("/distribution/normal")
    assert response.status_code == 200
    body = response.json()
    assert set(body) == {
        "xValues",
        "pdfValues",
        "cdfValues",
        "stats",
        "pdfExpression",
        "cdfExpression",
    }
    assert len(body["xValues"]) == len(body["pdfValues"]) == len(body["cdfValues"]) == 100
    index = body["xValues"].index(0.0)
    assert body["pdfValues"][index] == pytest.approx(0.3989423, abs=1e-7)
    assert body["stats"] == {"mean": 0.0, "variance": 1.0, "stdDev": 1.0}
    assert body["cdfValues"][-1] == pytest.approx(1.0)
    assert body["pdfExpression"] == "(1 / (σ√(2π))) * exp(-0.5 * ((x - μ) / σ)^2)"


@pytest.mark.parametrize("kind", [kind.value for kind in DistributionKind])
def test_every_kind_is_served(client: TestClient, kind: str) -> None:
    body = client.get(f"/distribution/{kind}").json()
    expected = 20 if kind in {"poisson", "binomial"} else 100
    assert len(body["xValues"]) == expected
    assert len(body["pdfValues"]) == expected
    assert len(body["cdfValues"]) == expected


def test_binomial_discrete_grid_and_stats(client: TestClient) -> None:
    body = client.get("/distribution/binomial").json()
    assert body["xValues"] == list(range(20))
    assert body["stats"]["mean"] == 5.0
    assert body["stats"]["variance"] == 2.5


def test_query_values_bind_positionally_ignoring_names(client: TestClient) -> None:
    named = client.get("/distribution/binomial", params=[("n", "20"), ("p", "0.3")]).json()
    renamed = client.get("/distribution/binomial", params=[("zz", "20"), ("aa", "0.3")]).json()
    assert named == renamed
    assert named["stats"]["mean"] == pytest.approx(6.0)

    swapped = client.get("/distribution/binomial", params=[("p", "0.3"), ("n", "20")]).json()
    assert swapped["stats"]["mean"] == pytest.approx(6.0)
    assert swapped["stats"]["variance"] == pytest.approx(0.3 * 20 * (1 - 20))


def test_extra_query_values_are_ignored(client: TestClient) -> None:
    body = client.get("/distribution/exponential?rate=2&extra=99").json()
    assert body["stats"]["mean"] == pytest.approx(0.5)


def test_non_finite_values_are_encoded_as_null(client: TestClient) -> None:
    body = client.get("/distribution/uniform?a=10&b=20").json()
    assert all(value is None for value in body["cdfValues"])
    assert all(value == 0.0 for value in body["pdfValues"])

    body = client.get("/distribution/normal?mu=abc").json()
    assert body["stats"]["mean"] is None


def test_cors_allows_any_origin(client: TestClient) -> None:
    response = client.get("/distribution/normal", headers={"Origin": "http://example.com"})
    assert response.headers["access-control-allow-origin"] == "*"


def test_distribution_listing(client: TestClient) -> None:
    body = client.get("/distributions").json()
    names = [entry["name"] for entry in body["distributions"]]
    assert names == sorted(kind.value for kind in DistributionKind)
    binomial = next(entry for entry in body["distributions"] if entry["name"] == "binomial")
    assert binomial["parameters"] == ["n", "p"]
    assert binomial["defaults"] == [10.0, 0.5]
    assert binomial["discrete"] is True
    assert binomial["notes"] == "Binomial successes in n trials with probability p."
    assert all(entry["notes"] for entry in body["distributions"])


def test_requests_are_logged(client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="probviz.api"):
        client.get("/distribution/normal?mu=1")
    assert "Incoming request: GET /distribution/normal?mu=1" in caplog.text


@pytest.mark.parametrize(
    "text,expected",
    [
        ("3.5", 3.5),
        ("3.5abc", 3.5),
        ("  -2", -2.0),
        (".5", 0.5),
        ("1e3", 1000.0),
        ("1e", 1.0),
        ("Infinity", math.inf),
        ("-Infinity", -math.inf),
    ],
)
def test_parse_float_leading_prefix(text: str, expected: float) -> None:
    assert parse_float(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "inf", "nan", "-"])
def test_parse_float_without_number_is_nan(text: str) -> None:
    assert math.isnan(parse_float(text))


def test_integer_like_keys_bind_first(client: TestClient) -> None:
    body = client.get("/distribution/binomial", params=[("n", "20"), ("0", "0.3")]).json()
    # binds as n=0.3, p=20
    assert body["stats"]["variance"] == pytest.approx(0.3 * 20 * (1 - 20))

    body = client.get("/distribution/normal", params=[("mu", "4"), ("1", "2")]).json()
    assert body["stats"]["mean"] == pytest.approx(2.0)
    assert body["stats"]["variance"] == pytest.approx(16.0)


@pytest.mark.parametrize(
    "keys,expected",
    [
        (["n", "p"], ["n", "p"]),
        (["n", "0"], ["0", "n"]),
        (["b", "10", "a", "2"], ["2", "10", "b", "a"]),
        (["07", "x", "3"], ["3", "07", "x"]),
        (["-1", "1.5", "4294967295", "4294967294"], ["4294967294", "-1", "1.5", "4294967295"]),
        (["a", "a", "1"], ["1", "a"]),
    ],
)
def test_ordered_query_keys(keys: list[str], expected: list[str]) -> None:
    assert ordered_query_keys(keys) == expected
