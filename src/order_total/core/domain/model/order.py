from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Order:
    order_id: int
    product_id: int
    quantity: int
    subtotal: float
    shipping_address: str
    shipping_zip: str
    total: float

    def with_total(self, rate: float) -> "Order":
        # incoming total is never trusted
        return replace(self, total=compute_total(self.subtotal, rate))


def compute_total(subtotal: float, rate: float) -> float:
    return subtotal * (1.0 + rate)
