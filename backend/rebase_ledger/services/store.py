from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from rebase_ledger.models.debit_clamp import DebitClampRow
from rebase_ledger.models.event_transfer import EventTransfer
from rebase_ledger.models.holder import Holder
from rebase_ledger.services.types import DebitClamp, EventRecord, HolderState

logger = logging.getLogger(__name__)


def _holder_state(row: Holder) -> HolderState:
    return HolderState(
        address=row.address,
        balance=int(row.balance or 0),
        cumulative_balance=int(row.cumulative_balance or 0),
        total_earned=int(row.total_earned or 0),
        last_accrual_epoch_start=int(row.last_accrual_epoch_start or 0),
    )


def _event_record(row: EventTransfer) -> EventRecord:
    return EventRecord(
        transaction_hash=row.transaction_hash,
        emitter=row.emitter,
        contract=row.contract,
        timestamp=int(row.timestamp),
        from_address=row.from_address,
        to_address=row.to_address,
        value=int(row.value),
    )


class LedgerStore:
    """Holder records keyed by address, audit records keyed by transaction hash."""

    def __init__(self, s: Session):
        self.s = s

    def load_holder(self, address: str) -> HolderState | None:
        row = self.s.get(Holder, address)
        if row is None:
            return None
        return _holder_state(row)

    def upsert_holder(self, address: str) -> HolderState:
        """Stored state for `address`, or a fresh one that is not yet saved.

        An existing row stays locked until the transaction ends.
        """
        row = self.s.get(Holder, address, with_for_update=True)
        if row is None:
            return HolderState.empty(address)
        return _holder_state(row)

    def save_holder(self, h: HolderState) -> None:
        row = self.s.get(Holder, h.address)
        if row is None:
            row = Holder(address=h.address)
            self.s.add(row)
        row.balance = h.balance
        row.cumulative_balance = h.cumulative_balance
        row.total_earned = h.total_earned
        row.last_accrual_epoch_start = h.last_accrual_epoch_start
        self.s.flush()

    def load_event(self, transaction_hash: str) -> EventRecord | None:
        row = self.s.get(EventTransfer, transaction_hash)
        if row is None:
            return None
        return _event_record(row)

    def save_event(self, rec: EventRecord) -> bool:
        """Append `rec`; returns False if the hash is already recorded."""
        if self.s.get(EventTransfer, rec.transaction_hash) is not None:
            logger.info("event already recorded tx=%s", rec.transaction_hash)
            return False
        self.s.add(
            EventTransfer(
                transaction_hash=rec.transaction_hash,
                emitter=rec.emitter,
                contract=rec.contract,
                timestamp=rec.timestamp,
                from_address=rec.from_address,
                to_address=rec.to_address,
                value=rec.value,
            )
        )
        self.s.flush()
        return True

    def save_clamp(self, clamp: DebitClamp) -> None:
        self.s.add(
            DebitClampRow(
                transaction_hash=clamp.transaction_hash,
                address=clamp.address,
                block_timestamp=clamp.block_timestamp,
                value=clamp.value,
                balance_before=clamp.balance_before,
                cumulative_balance_before=clamp.cumulative_balance_before,
            )
        )
        self.s.flush()

    def commit(self) -> None:
        self.s.commit()

    def rollback(self) -> None:
        self.s.rollback()
