from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from sqlalchemy import select
from rebase_ledger.api.deps import db
from rebase_ledger.models.debit_clamp import DebitClampRow
from rebase_ledger.schemas.clamp import DebitClampOut

router = APIRouter(prefix="/clamps", tags=["clamps"])


@router.get("", response_model=list[DebitClampOut])
def list_clamps(
    s: Session = Depends(db),
    address: str | None = Query(default=None),
    limit: int = Query(default=200, ge=1, le=1000),
):
    q = select(DebitClampRow).order_by(DebitClampRow.created_at.desc(), DebitClampRow.id.desc())

    if address:
        q = q.where(DebitClampRow.address == address.strip().lower())

    q = q.limit(limit)
    return s.execute(q).scalars().all()
