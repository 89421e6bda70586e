from __future__ import annotations

from dataclasses import dataclass

import structlog
from returns.result import Result

from order_total.core.domain.model.errors import ComputeError
from order_total.core.domain.model.order import Order
from order_total.core.ports.inbound.compute_total import ComputeTotalUseCase
from order_total.core.ports.outbound.tax_rates import TaxRateGateway

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ComputeTotalDeps:
    tax_rates: TaxRateGateway


@dataclass(frozen=True)
class ComputeTotalService(ComputeTotalUseCase):
    deps: ComputeTotalDeps

    async def compute_total(self, order: Order) -> Result[Order, ComputeError]:
        # single lookup, no retry
        rate = await self.deps.tax_rates.find_rate(order.shipping_zip)
        return rate.map(order.with_total).map(_log_computed)


def _log_computed(order: Order) -> Order:
    logger.info(
        "order_total_computed",
        order_id=order.order_id,
        shipping_zip=order.shipping_zip,
        total=order.total,
    )
    return order
