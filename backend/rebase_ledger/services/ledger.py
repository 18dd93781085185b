from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from rebase_ledger.services.accrual import accrue
from rebase_ledger.services.rates import RateProvider
from rebase_ledger.services.store import LedgerStore
from rebase_ledger.services.types import (
    ADDRESS_ZERO,
    DebitClamp,
    EventRecord,
    HolderState,
    RateParams,
    TransferEvent,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    receiver: HolderState | None
    sender: HolderState | None
    record: EventRecord
    clamp: DebitClamp | None = None
    duplicate: bool = False


def _credit(h: HolderState, value: int) -> HolderState:
    return replace(h, balance=h.balance + value, cumulative_balance=h.cumulative_balance + value)


def _debit(h: HolderState, value: int) -> HolderState:
    return replace(
        h,
        balance=max(0, h.balance - value),
        cumulative_balance=max(0, h.cumulative_balance - value),
    )


class LedgerProcessor:
    def __init__(self, store: LedgerStore, rates: RateProvider, max_accrual_epochs: int | None = None):
        self.store = store
        self.rates = rates
        self.max_accrual_epochs = max_accrual_epochs

    def _accrue(self, h: HolderState, ev: TransferEvent, params: RateParams) -> HolderState:
        return accrue(
            h,
            ev.block_timestamp,
            params.rate,
            params.rate_decimals,
            params.rebase_start_time,
            max_epochs=self.max_accrual_epochs,
        )

    def _apply(self, ev: TransferEvent) -> ProcessResult:
        params = RateParams(
            rebase_start_time=self.rates.init_rebase_start_time(ev),
            rate=self.rates.get_rebase_rate(ev),
            rate_decimals=self.rates.rate_decimal_precision(ev),
        )

        receiver: HolderState | None = None
        if ev.to_address != ADDRESS_ZERO:
            receiver = _credit(self._accrue(self.store.upsert_holder(ev.to_address), ev, params), ev.value)
            self.store.save_holder(receiver)

        sender: HolderState | None = None
        clamp: DebitClamp | None = None
        if ev.from_address != ADDRESS_ZERO:
            before = self._accrue(self.store.upsert_holder(ev.from_address), ev, params)
            if ev.value > before.balance or ev.value > before.cumulative_balance:
                clamp = DebitClamp(
                    transaction_hash=ev.transaction_hash,
                    address=ev.from_address,
                    block_timestamp=ev.block_timestamp,
                    value=ev.value,
                    balance_before=before.balance,
                    cumulative_balance_before=before.cumulative_balance,
                )
                logger.warning(
                    "debit clamped at zero tx=%s address=%s value=%d balance=%d cumulative_balance=%d",
                    ev.transaction_hash,
                    ev.from_address,
                    ev.value,
                    before.balance,
                    before.cumulative_balance,
                )
                self.store.save_clamp(clamp)
            sender = _debit(before, ev.value)
            self.store.save_holder(sender)

        record = EventRecord.from_event(ev)
        duplicate = not self.store.save_event(record)
        if duplicate:
            record = self.store.load_event(ev.transaction_hash) or record

        return ProcessResult(receiver=receiver, sender=sender, record=record, clamp=clamp, duplicate=duplicate)

    def process(self, ev: TransferEvent) -> ProcessResult:
        """Apply one transfer: accrue and credit the receiver, accrue and debit
        the sender, then append the audit record. Commits once, or not at all."""
        try:
            result = self._apply(ev)
            self.store.commit()
        except Exception:
            self.store.rollback()
            raise

        logger.debug(
            "processed tx=%s from=%s to=%s value=%d",
            ev.transaction_hash,
            ev.from_address,
            ev.to_address,
            ev.value,
        )
        return result
