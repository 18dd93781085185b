import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy import select
from rebase_ledger.api.deps import db
from rebase_ledger.schemas.rebase_rate import RebaseRateCreate, RebaseRateOut
from rebase_ledger.models.rebase_rate import RebaseRate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rebase-rates", tags=["rates"])

@router.get("", response_model=list[RebaseRateOut])
def list_rates(s: Session = Depends(db)):
    return s.execute(select(RebaseRate).order_by(RebaseRate.effective_at.desc(), RebaseRate.id.desc())).scalars().all()

@router.post("", response_model=RebaseRateOut)
def add_rate(body: RebaseRateCreate, s: Session = Depends(db)):
    existing = s.execute(
        select(RebaseRate).where(RebaseRate.effective_at == body.effective_at)
    ).scalar_one_or_none()
    if existing is not None:
        raise HTTPException(status_code=409, detail="rate_exists")

    r = RebaseRate(
        effective_at=body.effective_at,
        rate=body.rate,
        rate_decimals=body.rate_decimals,
        rebase_start_time=body.rebase_start_time,
    )
    s.add(r)
    s.commit()
    s.refresh(r)

    logger.info(
        "rebase rate added effective_at=%d rate=%d rate_decimals=%d rebase_start_time=%d",
        r.effective_at,
        r.rate,
        r.rate_decimals,
        r.rebase_start_time,
    )
    return r

@router.delete("/{rate_id}")
def delete_rate(rate_id: int, s: Session = Depends(db)):
    r = s.execute(select(RebaseRate).where(RebaseRate.id == rate_id)).scalar_one_or_none()
    if not r:
        raise HTTPException(status_code=404, detail="rate_not_found")

    effective_at = r.effective_at
    s.delete(r)
    s.commit()

    logger.info("rebase rate deleted id=%d effective_at=%d", rate_id, effective_at)
    return {"ok": True}
