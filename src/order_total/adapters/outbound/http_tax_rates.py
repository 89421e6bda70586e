from __future__ import annotations

from dataclasses import dataclass

import httpx
import structlog
from returns.result import Failure, Result, Success

from order_total.core.domain.model.errors import ComputeError, TaxRateNotAvailable
from order_total.core.ports.outbound.tax_rates import TaxRateGateway

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class HttpTaxRateGateway(TaxRateGateway):
    """
    Asks the rate-lookup service for the sales tax rate of a zip code.

    The zip code is POSTed as the raw request body and the response body is
    read as a decimal rate (``"0.07"`` for 7%). The status code is not
    inspected: a numeric body is accepted whatever the status.
    """

    url: str
    timeout: float = 5.0
    transport: httpx.AsyncBaseTransport | None = None

    async def find_rate(self, zip_code: str) -> Result[float, ComputeError]:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(
                    self.url,
                    content=zip_code,
                    headers={"Content-Type": "text/plain; charset=utf-8"},
                )
                text = response.text
            return Success(parse_rate(text))
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            # every lookup failure collapses to the same error kind
            logger.warning(
                "tax_rate_lookup_failed",
                url=self.url,
                shipping_zip=zip_code,
                reason=f"{type(e).__name__}: {e}",
            )
            return Failure(TaxRateNotAvailable())


def parse_rate(text: str) -> float:
    # float() would also accept padding and digit separators
    if not text or text != text.strip() or "_" in text:
        raise ValueError(f"not a tax rate: {text!r}")
    return float(text)
