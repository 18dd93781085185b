from fastapi import Depends
from sqlalchemy.orm import Session
from rebase_ledger.core.config import settings
from rebase_ledger.db.session import SessionLocal
from rebase_ledger.services.rates import DbRateProvider, StaticRateProvider

def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()

def rate_provider(s: Session = Depends(db)):
    return DbRateProvider(s, fallback=StaticRateProvider.from_settings(settings).params)
