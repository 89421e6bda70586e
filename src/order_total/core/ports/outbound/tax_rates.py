from __future__ import annotations

from typing import Protocol

from returns.result import Result

from order_total.core.domain.model.errors import ComputeError


class TaxRateGateway(Protocol):
    async def find_rate(self, zip_code: str) -> Result[float, ComputeError]: ...
