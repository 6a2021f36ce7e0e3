from pydantic import BaseModel, ConfigDict, Field, field_validator


class DepositCreate(BaseModel):
    amount: float = Field(..., gt=0, le=1_000_000_000, allow_inf_nan=False,
                          description="Monto a depositar (debe ser positivo)")
    utr: str = Field(..., min_length=1, max_length=64, description="UTR / referencia del pago")

    @field_validator('utr')
    @classmethod
    def utr_not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('UTR/reference is required')
        return v


class DepositApprove(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    request_id: int = Field(..., alias="requestId", gt=0)


class DepositSubmitted(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    request_id: int = Field(..., alias="requestId")
    status: str


class DepositApproved(DepositSubmitted):
    wallet: float
