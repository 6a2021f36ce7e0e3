import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..api.auth import create_access_token, get_settings
from ..config import Settings
from ..crud import authenticate_user, create_user
from ..database import get_db
from ..schemas.user import LoginResponse, MessageOut, UserCreate, UserLogin, UserView

logger = logging.getLogger(__name__)

router = APIRouter()

# ========================
# ENDPOINTS DE AUTENTICACIÓN
# ========================
@router.post("/register", response_model=MessageOut)
def register_user(
    user: UserCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Registrar nuevo usuario (no inicia sesión)"""
    new_user = create_user(db, user.username, user.password, user.email,
                           wallet=settings.default_wallet)
    logger.info("Usuario registrado: %s (id=%s)", new_user.username, new_user.id)
    return MessageOut(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
def login(
    data: UserLogin,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Iniciar sesión y obtener token JWT"""
    user = authenticate_user(db, data.username, data.password)
    token = create_access_token({"sub": str(user.id)}, settings)
    logger.info("Login: %s", user.username)
    return LoginResponse(token=token, user=UserView.model_validate(user))
