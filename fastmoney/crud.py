import logging
import math
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import List

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .api.auth import hash_password, verify_password
from .exceptions import AuthError, ConflictError, NotFoundError, ValidationError
from .models.deposit import DepositRequest, STATUS_APPROVED, STATUS_PENDING
from .models.user import DEFAULT_WALLET, ROLES, User

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


# ------------------- Usuarios -------------------

def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_user_by_username(db: Session, username: str):
    return db.query(User).filter(User.username == username).first()


def create_user(db: Session, username: str, password: str, email: str,
                wallet: float = DEFAULT_WALLET) -> User:
    # La restricción UNIQUE cubre la carrera entre dos registros simultáneos
    if get_user_by_username(db, username):
        raise ValidationError("Username already taken")

    user = User(
        username=username,
        password_hash=hash_password(password),
        email=email,
        wallet=Decimal(str(wallet)).quantize(CENTS),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError("Username already taken")
    db.refresh(user)
    return user


def authenticate_user(db: Session, username: str, password: str) -> User:
    user = get_user_by_username(db, username)
    if not user or not verify_password(password, user.password_hash):
        raise AuthError("Invalid credentials")
    return user


def get_wallet(db: Session, user_id: int) -> Decimal:
    return get_user(db, user_id).wallet


def set_role(db: Session, username: str, role: str) -> User:
    if role not in ROLES:
        raise ValidationError(f"Unknown role: {role}")
    user = get_user_by_username(db, username)
    if not user:
        raise NotFoundError("User not found")
    user.role = role
    db.commit()
    db.refresh(user)
    return user


# ------------------- Depósitos -------------------

def to_amount(value) -> Decimal:
    """Convierte a Decimal con 2 decimales; solo acepta montos positivos y finitos."""
    if isinstance(value, bool):
        raise ValidationError("Amount must be a number")
    try:
        if isinstance(value, float) and not math.isfinite(value):
            raise ValidationError("Amount must be a finite number")
        amount = Decimal(str(value)).quantize(CENTS)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError("Amount must be a number")
    if not amount.is_finite() or amount <= 0:
        raise ValidationError("Amount must be positive")
    return amount


def create_deposit_request(db: Session, user_id: int, amount, utr: str) -> DepositRequest:
    amount = to_amount(amount)
    utr = (utr or "").strip()
    if not utr:
        raise ValidationError("UTR/reference is required")

    # El usuario del token puede haber desaparecido
    get_user(db, user_id)

    deposit = DepositRequest(
        user_id=user_id,
        amount=amount,
        utr=utr,
        status=STATUS_PENDING,
        created_at=datetime.utcnow(),
    )
    db.add(deposit)
    db.commit()
    db.refresh(deposit)
    return deposit


def approve_deposit_request(db: Session, request_id: int) -> DepositRequest:
    """Aprueba un depósito pendiente y acredita la billetera en una sola transacción.

    El cambio de estado es un UPDATE condicional (``WHERE status = 'pending'``):
    solo una aprobación puede tocar la fila, las demás reciben ConflictError y
    la billetera se acredita exactamente una vez.
    """
    deposit = db.get(DepositRequest, request_id)
    if deposit is None:
        raise NotFoundError("Invalid request")
    if deposit.status != STATUS_PENDING:
        raise ConflictError("Deposit request already processed")

    amount = deposit.amount
    user_id = deposit.user_id

    try:
        claimed = db.execute(
            update(DepositRequest)
            .where(DepositRequest.id == request_id, DepositRequest.status == STATUS_PENDING)
            .values(status=STATUS_APPROVED, processed_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        if claimed.rowcount != 1:
            db.rollback()
            raise ConflictError("Deposit request already processed")

        credited = db.execute(
            update(User)
            .where(User.id == user_id)
            .values(wallet=User.wallet + amount)
            .execution_options(synchronize_session=False)
        )
        if credited.rowcount != 1:
            db.rollback()
            raise NotFoundError("User not found")

        db.commit()
    except (ConflictError, NotFoundError):
        raise
    except Exception:
        db.rollback()
        raise

    # commit() expira los objetos: se recargan con los valores nuevos
    db.refresh(deposit)
    return deposit


def list_pending_deposits(db: Session) -> List[DepositRequest]:
    return db.query(DepositRequest).filter(
        DepositRequest.status == STATUS_PENDING
    ).order_by(DepositRequest.created_at.desc(), DepositRequest.id.desc()).all()


def list_user_deposits(db: Session, user_id: int) -> List[DepositRequest]:
    return db.query(DepositRequest).filter(
        DepositRequest.user_id == user_id
    ).order_by(DepositRequest.created_at.desc(), DepositRequest.id.desc()).all()
