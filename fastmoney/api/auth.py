# fastmoney/api/auth.py
import logging
from datetime import datetime, timedelta, timezone
from enum import Enum

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from ..config import Settings
from ..database import get_db
from ..exceptions import AuthError, ForbiddenError
from ..models.user import ROLE_ADMIN, ROLE_USER, User

logger = logging.getLogger(__name__)

# 🔹 Manejo de contraseñas
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# 🔹 Esquema Bearer (sin auto_error: el 401 lo decide get_current_user_id)
bearer_scheme = HTTPBearer(auto_error=False)

# -------------------------------
# Funciones de autenticación
# -------------------------------

def hash_password(password: str) -> str:
    """Hashea una contraseña usando bcrypt (sal por contraseña)."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verifica que la contraseña ingresada coincida con el hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, settings: Settings, expires_delta: timedelta = None) -> str:
    """Genera un token JWT con fecha de expiración."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def verify_access_token(token: str, settings: Settings) -> int:
    """Valida firma y expiración; devuelve el id de usuario embebido."""
    if not token:
        raise AuthError("Not authenticated")
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        raise AuthError("Invalid or expired token")

    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError):
        raise AuthError("Invalid or expired token")


# -------------------------------
# Dependencias
# -------------------------------

def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> int:
    """Obtiene el id del usuario a partir del header ``Authorization: Bearer``."""
    if credentials is None:
        raise AuthError("Not authenticated")
    return verify_access_token(credentials.credentials, settings)


# ========================
# POLÍTICA DE ACCESO
# ========================

class Capability(str, Enum):
    APPROVE_DEPOSIT = "approve_deposit"
    LIST_DEPOSITS = "list_deposits"


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


ROLE_CAPABILITIES = {
    ROLE_ADMIN: frozenset({Capability.APPROVE_DEPOSIT, Capability.LIST_DEPOSITS}),
    ROLE_USER: frozenset(),
}


def authorize(user: User, capability: Capability) -> Decision:
    """Decide si el rol del usuario concede la capacidad. Roles desconocidos no conceden nada."""
    granted = ROLE_CAPABILITIES.get(user.role, frozenset())
    return Decision.ALLOW if capability in granted else Decision.DENY


def require_capability(capability: Capability):
    """Fábrica de dependencias: carga al usuario una vez y evalúa la política.

    Uso: ``current_user: User = Depends(require_capability(Capability.APPROVE_DEPOSIT))``
    """

    def _guard(
        user_id: int = Depends(get_current_user_id),
        db: Session = Depends(get_db),
    ) -> User:
        user = db.get(User, user_id)
        if user is None:
            raise AuthError("User no longer exists")

        if authorize(user, capability) is Decision.DENY:
            logger.warning("Acceso denegado: usuario=%s capacidad=%s", user.username, capability.value)
            raise ForbiddenError("Insufficient permissions")
        return user

    return _guard
