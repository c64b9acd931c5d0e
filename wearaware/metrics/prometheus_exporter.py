"""Prometheus exporter helpers."""

from __future__ import annotations

from prometheus_client import Counter, make_asgi_app


impact_calculations_total = Counter(
    "impact_calculations_total",
    "Total number of impact calculations, by resulting grade.",
    ["grade"],
)

scans_saved_total = Counter(
    "scans_saved_total",
    "Total number of scans written to the database.",
    ["operation"],
)


def metrics_app():
    """ASGI app serving the default registry."""

    return make_asgi_app()
