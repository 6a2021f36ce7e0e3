from fastapi import APIRouter, Depends

from ..api.auth import get_settings
from ..config import Settings
from ..schemas.payment import ManualPaymentDetails

router = APIRouter()


@router.get("/manual-details", response_model=ManualPaymentDetails)
def manual_details(settings: Settings = Depends(get_settings)):
    """Datos para transferencia bancaria manual"""
    return ManualPaymentDetails(
        bank_name=settings.bank_name,
        account_name=settings.bank_account_name,
        account_number=settings.bank_account_number,
        ifsc=settings.bank_ifsc,
        upi_id=settings.bank_upi_id,
        note=settings.bank_note,
    )
