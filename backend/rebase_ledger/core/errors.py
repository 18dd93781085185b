from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class LedgerError(Exception):
    """Base error for conditions the ledger reports instead of absorbing."""

    code: str
    reason: str
    details: Any | None = None

    def __str__(self) -> str:
        if self.details is None:
            return f"{self.code}:{self.reason}"
        return f"{self.code}:{self.reason}:{self.details}"


class AccrualHorizonExceeded(LedgerError):
    def __init__(self, address: str, epochs: int, max_epochs: int):
        super().__init__(
            code="accrual_horizon_exceeded",
            reason=f"{address} needs {epochs} compounding steps, limit is {max_epochs}",
            details={"address": address, "epochs": epochs, "max_epochs": max_epochs},
        )
        self.address = address
        self.epochs = epochs
        self.max_epochs = max_epochs
