from pydantic import BaseModel

class HolderOut(BaseModel):
    address: str
    balance: int
    cumulative_balance: int
    total_earned: int
    last_accrual_epoch_start: int
    projected_at: int | None = None

    class Config:
        from_attributes = True
