from __future__ import annotations

from dataclasses import dataclass

ADDRESS_ZERO = "0x0000000000000000000000000000000000000000"


@dataclass(frozen=True)
class HolderState:
    address: str
    balance: int = 0
    cumulative_balance: int = 0
    total_earned: int = 0
    # 0 means the holder has never been aligned to a rebase period.
    last_accrual_epoch_start: int = 0

    @classmethod
    def empty(cls, address: str) -> HolderState:
        return cls(address=address)

    @property
    def is_consistent(self) -> bool:
        return self.cumulative_balance == self.balance + self.total_earned


@dataclass(frozen=True)
class TransferEvent:
    contract_address: str
    transaction_hash: str
    block_timestamp: int
    from_address: str
    to_address: str
    value: int
    block_number: int | None = None
    log_index: int | None = None


@dataclass(frozen=True)
class EventRecord:
    transaction_hash: str
    emitter: str
    contract: str
    timestamp: int
    from_address: str
    to_address: str
    value: int

    @classmethod
    def from_event(cls, ev: TransferEvent) -> EventRecord:
        return cls(
            transaction_hash=ev.transaction_hash,
            emitter=ev.contract_address,
            contract=ev.contract_address,
            timestamp=ev.block_timestamp,
            from_address=ev.from_address,
            to_address=ev.to_address,
            value=ev.value,
        )


@dataclass(frozen=True)
class DebitClamp:
    """A debit larger than what the sender held, recorded as it was clamped."""

    transaction_hash: str
    address: str
    block_timestamp: int
    value: int
    balance_before: int
    cumulative_balance_before: int


@dataclass(frozen=True)
class RateParams:
    rebase_start_time: int
    rate: int
    rate_decimals: int
