import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..api.auth import Capability, get_current_user_id, require_capability
from ..crud import (
    approve_deposit_request,
    create_deposit_request,
    get_wallet,
    list_pending_deposits,
    list_user_deposits,
)
from ..database import get_db
from ..exceptions import ConflictError, NotFoundError
from ..models.user import User
from ..models.deposit import DepositRequest
from ..schemas.deposit import DepositApprove, DepositApproved, DepositCreate, DepositSubmitted

logger = logging.getLogger(__name__)

router = APIRouter()


def deposit_to_dict(dep: DepositRequest) -> dict:
    return {
        "id": dep.id,
        "userId": dep.user_id,
        "amount": float(dep.amount),  # Decimal -> float para JSON
        "utr": dep.utr,
        "status": dep.status,
        "createdAt": dep.created_at.isoformat() if dep.created_at else None,
        "processedAt": dep.processed_at.isoformat() if dep.processed_at else None,
    }


# ========================
# SOLICITUD DE DEPÓSITO (usuario)
# ========================

@router.post("/request", response_model=DepositSubmitted)
def submit_deposit(
    data: DepositCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Registrar una solicitud de depósito manual (queda pendiente)"""
    deposit = create_deposit_request(db, user_id, data.amount, data.utr)
    logger.info("Depósito solicitado: id=%s usuario=%s monto=%s utr=%s",
                deposit.id, user_id, deposit.amount, deposit.utr)
    return DepositSubmitted(
        message="Deposit request submitted successfully",
        request_id=deposit.id,
        status=deposit.status,
    )


@router.get("/mine")
def my_deposits(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Historial de depósitos del usuario actual"""
    return [deposit_to_dict(dep) for dep in list_user_deposits(db, user_id)]

# ========================
# ADMINISTRACIÓN DE DEPÓSITOS
# ========================

@router.get("/pending")
def pending_deposits(
    current_user: User = Depends(require_capability(Capability.LIST_DEPOSITS)),
    db: Session = Depends(get_db),
):
    """Depósitos pendientes, más recientes primero (solo admin)"""
    return [deposit_to_dict(dep) for dep in list_pending_deposits(db)]


@router.post("/approve", response_model=DepositApproved)
def approve_deposit(
    data: DepositApprove,
    current_user: User = Depends(require_capability(Capability.APPROVE_DEPOSIT)),
    db: Session = Depends(get_db),
):
    """Aprobar un depósito pendiente y acreditar la billetera (solo admin)"""
    try:
        deposit = approve_deposit_request(db, data.request_id)
    except (ConflictError, NotFoundError) as e:
        logger.warning("Aprobación rechazada: id=%s admin=%s (%s)",
                       data.request_id, current_user.username, e.message)
        raise

    wallet = get_wallet(db, deposit.user_id)
    logger.info("Depósito aprobado: id=%s usuario=%s monto=%s nuevo_saldo=%s admin=%s",
                deposit.id, deposit.user_id, deposit.amount, wallet, current_user.username)
    return DepositApproved(
        message="Deposit approved and wallet updated successfully",
        request_id=deposit.id,
        status=deposit.status,
        wallet=wallet,
    )
