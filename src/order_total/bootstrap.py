from __future__ import annotations

from fastapi import FastAPI

from order_total.adapters.inbound.web import create_fastapi_app
from order_total.adapters.outbound.http_tax_rates import HttpTaxRateGateway
from order_total.config import Settings
from order_total.core.domain.service.compute_total_service import (
    ComputeTotalDeps,
    ComputeTotalService,
)


def build_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    tax_rates = HttpTaxRateGateway(
        url=settings.tax_rate_service_url,
        timeout=settings.tax_rate_timeout,
    )
    compute_total = ComputeTotalService(ComputeTotalDeps(tax_rates=tax_rates))
    return create_fastapi_app(compute_total)


def create_asgi_app() -> FastAPI:
    return build_app()
