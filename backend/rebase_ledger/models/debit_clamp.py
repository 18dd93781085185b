from sqlalchemy import Integer, BigInteger, DateTime, func, String, Index
from sqlalchemy.orm import Mapped, mapped_column
from rebase_ledger.db.base import Base, Uint256


class DebitClampRow(Base):
    __tablename__ = "debit_clamps"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    created_at: Mapped[DateTime] = mapped_column(DateTime, server_default=func.now(), index=True)

    transaction_hash: Mapped[str] = mapped_column(String(66), index=True)
    address: Mapped[str] = mapped_column(String(42), index=True)
    block_timestamp: Mapped[int] = mapped_column(BigInteger)

    value: Mapped[int] = mapped_column(Uint256)
    balance_before: Mapped[int] = mapped_column(Uint256)
    cumulative_balance_before: Mapped[int] = mapped_column(Uint256)


Index("ix_debit_clamps_address_created", DebitClampRow.address, DebitClampRow.created_at)
