from __future__ import annotations

from dataclasses import dataclass, field

TAX_RATE_NOT_AVAILABLE_MESSAGE = (
    "The zip code in the order does not have a corresponding sales tax rate."
)


@dataclass(frozen=True)
class ComputeError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class InvalidRequest(ComputeError):
    message: str = "invalid request"


@dataclass(frozen=True)
class TaxRateNotAvailable(ComputeError):
    message: str = TAX_RATE_NOT_AVAILABLE_MESSAGE


@dataclass(frozen=True)
class Unexpected(ComputeError):
    message: str = field(init=False, default="")
    cause: BaseException | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "message", str(self.cause))
