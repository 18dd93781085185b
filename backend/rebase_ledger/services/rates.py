from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from rebase_ledger.core.config import Settings
from rebase_ledger.models.rebase_rate import RebaseRate
from rebase_ledger.services.types import RateParams, TransferEvent


class RateProvider:
    """Rebase parameters in force at a given time, queried once per event."""

    def params_at(self, at: int) -> RateParams:
        raise NotImplementedError

    def init_rebase_start_time(self, event: TransferEvent) -> int:
        return self.params_at(event.block_timestamp).rebase_start_time

    def get_rebase_rate(self, event: TransferEvent) -> int:
        return self.params_at(event.block_timestamp).rate

    def rate_decimal_precision(self, event: TransferEvent) -> int:
        return self.params_at(event.block_timestamp).rate_decimals


class StaticRateProvider(RateProvider):
    def __init__(self, params: RateParams):
        self.params = params

    @classmethod
    def from_settings(cls, settings: Settings) -> StaticRateProvider:
        return cls(
            RateParams(
                rebase_start_time=settings.rebase_start_time,
                rate=settings.rebase_rate,
                rate_decimals=settings.rate_decimals,
            )
        )

    def params_at(self, at: int) -> RateParams:
        return self.params


class DbRateProvider(RateProvider):
    """Latest rebase_rates row effective at the given time, else the fallback."""

    def __init__(self, s: Session, fallback: RateParams):
        self.s = s
        self.fallback = fallback

    def params_at(self, at: int) -> RateParams:
        row = (
            self.s.execute(
                select(RebaseRate)
                .where(RebaseRate.effective_at <= at)
                .order_by(RebaseRate.effective_at.desc())
                .limit(1)
            )
            .scalars()
            .first()
        )
        if row is None:
            return self.fallback
        return RateParams(
            rebase_start_time=int(row.rebase_start_time),
            rate=int(row.rate),
            rate_decimals=int(row.rate_decimals),
        )
