"""Shared fixtures: an app wired to a fake rate-lookup service."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from order_total.adapters.inbound.web import create_fastapi_app
from order_total.adapters.outbound.http_tax_rates import HttpTaxRateGateway
from order_total.core.domain.service.compute_total_service import (
    ComputeTotalDeps,
    ComputeTotalService,
)

RATE_SERVICE_URL = "http://rates.test/find_rate"

RateHandler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def order_payload() -> dict:
    return {
        "order_id": 1,
        "product_id": 123,
        "quantity": 2,
        "subtotal": 20.0,
        "shipping_address": "123 Main St, Anytown USA",
        "shipping_zip": "78701",
        "total": 0.0,
    }


@pytest.fixture
def rate_requests() -> list[httpx.Request]:
    """Requests received by the fake rate-lookup service."""
    return []


@pytest.fixture
def make_gateway(rate_requests: list[httpx.Request]) -> Callable[[RateHandler], HttpTaxRateGateway]:
    def _make(handler: RateHandler) -> HttpTaxRateGateway:
        def recording(request: httpx.Request) -> httpx.Response:
            rate_requests.append(request)
            return handler(request)

        return HttpTaxRateGateway(
            url=RATE_SERVICE_URL,
            timeout=1.0,
            transport=httpx.MockTransport(recording),
        )

    return _make


@pytest.fixture
def make_app(make_gateway) -> Callable[[RateHandler], FastAPI]:
    def _make(handler: RateHandler) -> FastAPI:
        service = ComputeTotalService(ComputeTotalDeps(tax_rates=make_gateway(handler)))
        return create_fastapi_app(service)

    return _make


@pytest.fixture
def make_client(make_app) -> Callable[[RateHandler], TestClient]:
    def _make(handler: RateHandler) -> TestClient:
        return TestClient(make_app(handler))

    return _make


def rate_of(body: str, status_code: int = 200) -> RateHandler:
    """Fake rate-lookup service answering every zip code with ``body``."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, text=body)

    return handler


def unreachable(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


def timing_out(request: httpx.Request) -> httpx.Response:
    raise httpx.ReadTimeout("timed out", request=request)
