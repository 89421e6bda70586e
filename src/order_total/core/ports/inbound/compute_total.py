from __future__ import annotations

from typing import Protocol

from returns.result import Result

from order_total.core.domain.model.errors import ComputeError
from order_total.core.domain.model.order import Order


class ComputeTotalUseCase(Protocol):
    async def compute_total(self, order: Order) -> Result[Order, ComputeError]: ...
