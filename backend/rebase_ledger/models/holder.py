from sqlalchemy import BigInteger, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column
from rebase_ledger.db.base import Base, Uint256

class Holder(Base):
    __tablename__ = "holders"
    address: Mapped[str] = mapped_column(String(42), primary_key=True)
    balance: Mapped[int] = mapped_column(Uint256, default=0)
    cumulative_balance: Mapped[int] = mapped_column(Uint256, default=0)
    total_earned: Mapped[int] = mapped_column(Uint256, default=0)
    last_accrual_epoch_start: Mapped[int] = mapped_column(BigInteger, default=0)
    updated_at: Mapped[DateTime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())
