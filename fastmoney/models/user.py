from sqlalchemy import Column, Integer, String, DateTime, Numeric
from sqlalchemy.orm import relationship
from datetime import datetime
from ..config import DEFAULT_WALLET
from ..database import Base

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_ADMIN)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(32), unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    email = Column(String, nullable=False)
    role = Column(String(16), nullable=False, default=ROLE_USER)
    wallet = Column(Numeric(18, 2), nullable=False, default=DEFAULT_WALLET)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relaciones
    deposit_requests = relationship("DepositRequest", back_populates="user")
