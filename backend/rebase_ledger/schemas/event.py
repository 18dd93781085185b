import re

from pydantic import BaseModel, Field, field_validator

from rebase_ledger.schemas.clamp import ClampOut
from rebase_ledger.schemas.holder import HolderOut
from rebase_ledger.services.types import TransferEvent

_ADDRESS_RE = re.compile(r"^0x[0-9a-f]{40}$")
_TX_HASH_RE = re.compile(r"^0x[0-9a-f]{64}$")


def _normalize_address(v: str) -> str:
    v = (v or "").strip().lower()
    if not _ADDRESS_RE.match(v):
        raise ValueError("address must be 0x followed by 40 hex characters")
    return v


class TransferEventIn(BaseModel):
    contract_address: str
    transaction_hash: str
    block_timestamp: int = Field(ge=0)
    from_address: str
    to_address: str
    value: int = Field(ge=0)
    block_number: int | None = None
    log_index: int | None = None

    @field_validator("contract_address", "from_address", "to_address")
    @classmethod
    def address_format(cls, v: str):
        return _normalize_address(v)

    @field_validator("transaction_hash")
    @classmethod
    def tx_hash_format(cls, v: str):
        v = (v or "").strip().lower()
        if not _TX_HASH_RE.match(v):
            raise ValueError("transaction_hash must be 0x followed by 64 hex characters")
        return v

    def to_event(self) -> TransferEvent:
        return TransferEvent(
            contract_address=self.contract_address,
            transaction_hash=self.transaction_hash,
            block_timestamp=self.block_timestamp,
            from_address=self.from_address,
            to_address=self.to_address,
            value=self.value,
            block_number=self.block_number,
            log_index=self.log_index,
        )


class EventOut(BaseModel):
    transaction_hash: str
    emitter: str
    contract: str
    timestamp: int
    from_address: str
    to_address: str
    value: int

    class Config:
        from_attributes = True


class ProcessOut(BaseModel):
    receiver: HolderOut | None
    sender: HolderOut | None
    event: EventOut
    clamp: ClampOut | None = None
    duplicate: bool = False
