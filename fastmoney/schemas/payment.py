from pydantic import BaseModel, ConfigDict, Field


class ManualPaymentDetails(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    bank_name: str = Field(..., alias="bankName")
    account_name: str = Field(..., alias="accountName")
    account_number: str = Field(..., alias="accountNumber")
    ifsc: str
    upi_id: str = Field(..., alias="upiId")
    note: str
