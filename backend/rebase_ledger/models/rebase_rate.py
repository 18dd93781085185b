from sqlalchemy import BigInteger, Integer, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column
from rebase_ledger.db.base import Base, Uint256

class RebaseRate(Base):
    __tablename__ = "rebase_rates"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    effective_at: Mapped[int] = mapped_column(BigInteger, unique=True, index=True)
    rate: Mapped[int] = mapped_column(Uint256)
    rate_decimals: Mapped[int] = mapped_column(Integer)
    rebase_start_time: Mapped[int] = mapped_column(BigInteger)
    created_at: Mapped[DateTime] = mapped_column(DateTime, server_default=func.now())
