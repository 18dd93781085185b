from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from rebase_ledger.api.deps import db, rate_provider
from rebase_ledger.core.config import settings
from rebase_ledger.core.errors import AccrualHorizonExceeded
from rebase_ledger.models.holder import Holder
from rebase_ledger.schemas.holder import HolderOut
from rebase_ledger.services.accrual import accrue
from rebase_ledger.services.rates import RateProvider
from rebase_ledger.services.store import LedgerStore

router = APIRouter(prefix="/holders", tags=["holders"])


@router.get("", response_model=list[HolderOut])
def list_holders(
    s: Session = Depends(db),
    limit: int = Query(default=200, ge=1, le=1000),
):
    return s.execute(select(Holder).order_by(Holder.address.asc()).limit(limit)).scalars().all()


@router.get("/{address}", response_model=HolderOut)
def get_holder(
    address: str,
    at: int | None = Query(default=None, ge=0),
    s: Session = Depends(db),
    rates: RateProvider = Depends(rate_provider),
):
    h = LedgerStore(s).load_holder(address.strip().lower())
    if h is None:
        raise HTTPException(status_code=404, detail="holder_not_found")

    if at is None:
        return HolderOut.model_validate(h)

    # Read-only projection: what the next event at `at` would accrue first.
    params = rates.params_at(at)
    try:
        projected = accrue(
            h,
            at,
            params.rate,
            params.rate_decimals,
            params.rebase_start_time,
            max_epochs=settings.max_accrual_epochs,
        )
    except AccrualHorizonExceeded as e:
        raise HTTPException(status_code=422, detail=e.code)

    out = HolderOut.model_validate(projected)
    out.projected_at = at
    return out
