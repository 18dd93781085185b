from __future__ import annotations

import threading

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from rebase_ledger.api.deps import db, rate_provider
from rebase_ledger.core.config import settings
from rebase_ledger.core.errors import AccrualHorizonExceeded
from rebase_ledger.models.event_transfer import EventTransfer
from rebase_ledger.schemas.clamp import ClampOut
from rebase_ledger.schemas.event import EventOut, ProcessOut, TransferEventIn
from rebase_ledger.schemas.holder import HolderOut
from rebase_ledger.services.ledger import LedgerProcessor
from rebase_ledger.services.rates import RateProvider
from rebase_ledger.services.store import LedgerStore

router = APIRouter(prefix="/events", tags=["events"])

# requests run on a thread pool; events are applied one at a time
_process_lock = threading.Lock()


@router.post("", response_model=ProcessOut)
def ingest_event(body: TransferEventIn, s: Session = Depends(db), rates: RateProvider = Depends(rate_provider)):
    processor = LedgerProcessor(LedgerStore(s), rates, max_accrual_epochs=settings.max_accrual_epochs)
    try:
        with _process_lock:
            result = processor.process(body.to_event())
    except AccrualHorizonExceeded as e:
        raise HTTPException(status_code=422, detail=e.code)

    return ProcessOut(
        receiver=HolderOut.model_validate(result.receiver) if result.receiver is not None else None,
        sender=HolderOut.model_validate(result.sender) if result.sender is not None else None,
        event=EventOut.model_validate(result.record),
        clamp=ClampOut.model_validate(result.clamp) if result.clamp is not None else None,
        duplicate=result.duplicate,
    )


@router.get("", response_model=list[EventOut])
def list_events(
    s: Session = Depends(db),
    address: str | None = Query(default=None),
    limit: int = Query(default=200, ge=1, le=1000),
):
    q = select(EventTransfer).order_by(EventTransfer.timestamp.desc(), EventTransfer.transaction_hash.desc())

    if address:
        a = address.strip().lower()
        q = q.where(or_(EventTransfer.from_address == a, EventTransfer.to_address == a))

    q = q.limit(limit)
    return s.execute(q).scalars().all()


@router.get("/{transaction_hash}", response_model=EventOut)
def get_event(transaction_hash: str, s: Session = Depends(db)):
    rec = LedgerStore(s).load_event(transaction_hash.strip().lower())
    if rec is None:
        raise HTTPException(status_code=404, detail="event_not_found")
    return EventOut.model_validate(rec)
