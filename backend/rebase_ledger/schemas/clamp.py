from pydantic import BaseModel
from datetime import datetime


class ClampOut(BaseModel):
    transaction_hash: str
    address: str
    block_timestamp: int
    value: int
    balance_before: int
    cumulative_balance_before: int

    class Config:
        from_attributes = True


class DebitClampOut(ClampOut):
    id: int
    created_at: datetime
