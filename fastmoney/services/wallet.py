from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..api.auth import get_current_user_id
from ..crud import get_wallet
from ..database import get_db
from ..schemas.user import WalletOut

router = APIRouter()


@router.get("", response_model=WalletOut)
def read_wallet(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Saldo actual del usuario autenticado"""
    return WalletOut(wallet=get_wallet(db, user_id))
