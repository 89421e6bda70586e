from __future__ import annotations

import json
from typing import Annotated, Any, Literal

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from returns.result import Failure, Result, Success, safe
from starlette.exceptions import HTTPException as StarletteHTTPException

from order_total.core.domain.model.errors import (
    ComputeError,
    InvalidRequest,
    TaxRateNotAvailable,
    Unexpected,
)
from order_total.core.domain.model.order import Order
from order_total.core.ports.inbound.compute_total import ComputeTotalUseCase

logger = structlog.get_logger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "api,Keep-Alive,User-Agent,Content-Type",
}

USAGE = (
    "Try POSTing data to /compute such as: "
    "`curl localhost:8002/compute -XPOST -d '...'`"
)

Int32 = Annotated[int, Field(ge=-(2**31), le=2**31 - 1)]


# ---- HTTP DTOs -------------------------------------------------------------


class OrderIn(BaseModel):
    # no coercion: "5" is not an int and 1.5 is not a quantity
    model_config = ConfigDict(strict=True)

    order_id: Int32 = Field(examples=[1])
    product_id: Int32 = Field(examples=[123])
    quantity: Int32 = Field(examples=[2])
    subtotal: float = Field(examples=[20.0])
    shipping_address: str = Field(examples=["123 Main St, Anytown USA"])
    shipping_zip: str = Field(examples=["78701"])
    total: float = Field(examples=[0.0])

    def to_domain(self) -> Order:
        return Order(**self.model_dump())


class OrderOut(BaseModel):
    order_id: int
    product_id: int
    quantity: int
    subtotal: float
    shipping_address: str
    shipping_zip: str
    total: float

    @staticmethod
    def from_domain(order: Order) -> "OrderOut":
        return OrderOut(
            order_id=order.order_id,
            product_id=order.product_id,
            quantity=order.quantity,
            subtotal=order.subtotal,
            shipping_address=order.shipping_address,
            shipping_zip=order.shipping_zip,
            total=order.total,
        )


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    message: str


class PrettyJSONResponse(JSONResponse):
    def render(self, content: Any) -> bytes:
        return json.dumps(
            content, ensure_ascii=False, allow_nan=False, indent=2
        ).encode("utf-8")


# ---- Mapping helpers -------------------------------------------------------


@safe(exceptions=(PydanticValidationError, UnicodeDecodeError))
def _validate_order(body: bytes) -> OrderIn:
    return OrderIn.model_validate_json(body)


def decode_order(body: bytes) -> Result[Order, ComputeError]:
    return _validate_order(body).map(OrderIn.to_domain).alt(lambda _: InvalidRequest())


def map_error_to_http(err: ComputeError) -> tuple[int, ErrorResponse]:
    if isinstance(err, InvalidRequest):
        return 400, ErrorResponse(message=str(err))

    if isinstance(err, TaxRateNotAvailable):
        return 503, ErrorResponse(message=str(err))

    if isinstance(err, Unexpected):
        return 500, ErrorResponse(message=str(err))

    raise TypeError(f"no HTTP mapping for {type(err).__name__}")


def _error_response(err: ComputeError) -> Response:
    status, body = map_error_to_http(err)
    return PrettyJSONResponse(status_code=status, content=body.model_dump())


def _order_response(order: Order) -> Response:
    content = OrderOut.from_domain(order).model_dump(mode="json")
    return PrettyJSONResponse(status_code=200, content=content)


# ---- App factory -----------------------------------------------------------


def create_fastapi_app(compute_total_uc: ComputeTotalUseCase) -> FastAPI:
    app = FastAPI(
        title="order_total",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next: Any) -> Response:
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> Response:
        # unknown path or unsupported method on a known path
        if exc.status_code in (404, 405):
            return Response(status_code=404)
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> Response:
        # runs outside the middleware stack, so CORS is stamped here
        logger.error("unexpected_error", path=request.url.path, exc_info=exc)
        response = _error_response(Unexpected(cause=exc))
        response.headers.update(CORS_HEADERS)
        return response

    # --- routes --------------------------------------------------------------

    @app.options("/compute")
    async def compute_preflight() -> Response:
        return Response(status_code=200)

    @app.get("/", response_class=PlainTextResponse)
    async def usage() -> str:
        return USAGE

    @app.post("/compute")
    async def compute(request: Request) -> Response:
        body = await request.body()
        decoded = decode_order(body)
        if isinstance(decoded, Failure):
            return _compute_failed(decoded.failure())

        result = await compute_total_uc.compute_total(decoded.unwrap())
        if isinstance(result, Success):
            return _order_response(result.unwrap())
        return _compute_failed(result.failure())

    return app


def _compute_failed(err: ComputeError) -> Response:
    logger.warning("compute_failed", kind=type(err).__name__, message=str(err))
    return _error_response(err)
