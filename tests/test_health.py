"""Tests pour les endpoints de santé et de métriques."""

from prometheus_client import REGISTRY

from pyversions.apigw.rate_limit import RateQuota

HTTP_OK = 200


def test_health(client, fetcher):
    """Teste que l'endpoint de santé retourne un statut OK sans appel amont."""
    r = client.get("/health")
    assert r.status_code == HTTP_OK
    assert r.json()["status"] == "ok"
    assert fetcher.calls == []


def test_metrics_exposition(client):
    """Teste l'exposition des compteurs HTTP, de scan et de rate limit."""
    labels = {"target": "stable", "result": "found"}
    before = REGISTRY.get_sample_value("version_scans_total", labels) or 0.0
    client.get("/python-stable")
    r = client.get("/metrics")
    assert r.status_code == HTTP_OK
    assert "http_requests_total" in r.text
    assert "version_scans_total" in r.text
    assert REGISTRY.get_sample_value("version_scans_total", labels) == before + 1


def test_rate_limit_block_counter(make_client):
    """Teste l'incrément du compteur de blocages par route."""
    labels = {"route": "/python-prerelease"}
    before = REGISTRY.get_sample_value("rate_limit_blocks_total", labels) or 0.0
    client = make_client(RateQuota(max_rate=1, max_burst=0))
    client.get("/python-prerelease")
    client.get("/python-prerelease")
    assert client.get("/metrics").status_code == HTTP_OK
    assert REGISTRY.get_sample_value("rate_limit_blocks_total", labels) == before + 1
