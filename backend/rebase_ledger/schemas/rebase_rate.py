from pydantic import BaseModel, Field
from datetime import datetime

class RebaseRateCreate(BaseModel):
    effective_at: int = Field(ge=0)
    rate: int = Field(ge=0)
    rate_decimals: int = Field(ge=0, le=36)
    rebase_start_time: int = Field(ge=0)

class RebaseRateOut(BaseModel):
    id: int
    effective_at: int
    rate: int
    rate_decimals: int
    rebase_start_time: int
    created_at: datetime

    class Config:
        from_attributes = True
