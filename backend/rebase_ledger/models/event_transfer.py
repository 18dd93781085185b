from sqlalchemy import BigInteger, DateTime, String, func, Index
from sqlalchemy.orm import Mapped, mapped_column
from rebase_ledger.db.base import Base, Uint256


class EventTransfer(Base):
    __tablename__ = "event_transfers"

    transaction_hash: Mapped[str] = mapped_column(String(66), primary_key=True)

    emitter: Mapped[str] = mapped_column(String(42))
    contract: Mapped[str] = mapped_column(String(42))
    timestamp: Mapped[int] = mapped_column(BigInteger, index=True)

    from_address: Mapped[str] = mapped_column(String(42), index=True)
    to_address: Mapped[str] = mapped_column(String(42), index=True)
    value: Mapped[int] = mapped_column(Uint256)

    created_at: Mapped[DateTime] = mapped_column(DateTime, server_default=func.now())


Index("ix_event_transfers_timestamp_hash", EventTransfer.timestamp, EventTransfer.transaction_hash)
