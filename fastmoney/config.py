# fastmoney/config.py
import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

# Saldo inicial de cada usuario nuevo
DEFAULT_WALLET = 10000


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Configuración de la aplicación.

    Se construye una sola vez (normalmente con ``Settings.from_env()``) y se
    pasa a ``create_app``. Ningún otro módulo lee variables de entorno.
    """

    project_name: str = "FastMoney API"
    api_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    port: int = 5000

    # Base de datos
    database_url: str = "sqlite:///./fastmoney.db"
    database_sslmode: str = ""

    # JWT
    secret_key: str = "change_me"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # Negocio
    default_wallet: float = DEFAULT_WALLET
    odds_push_interval: float = 5
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    # Transferencia bancaria manual
    bank_name: str = "FastMoney Bank"
    bank_account_name: str = "FastMoney Games Pvt Ltd"
    bank_account_number: str = "1234567890"
    bank_ifsc: str = "FAST0001234"
    bank_upi_id: str = "fastmoney@upi"
    bank_note: str = "Send UTR/reference number through support after payment."

    @classmethod
    def from_env(cls) -> "Settings":
        """Carga ``.env`` (si existe) y lee las variables de entorno."""
        load_dotenv()
        defaults = cls()
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            project_name=os.getenv("PROJECT_NAME", defaults.project_name),
            api_version=os.getenv("API_VERSION", defaults.api_version),
            debug=_env_bool("DEBUG"),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level),
            port=int(os.getenv("PORT", str(defaults.port))),
            database_url=os.getenv("DATABASE_URL", defaults.database_url),
            database_sslmode=os.getenv("DATABASE_SSLMODE", defaults.database_sslmode),
            secret_key=os.getenv("JWT_SECRET") or os.getenv("SECRET_KEY") or defaults.secret_key,
            algorithm=os.getenv("ALGORITHM", defaults.algorithm),
            access_token_expire_minutes=int(
                os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(defaults.access_token_expire_minutes))
            ),
            default_wallet=float(os.getenv("DEFAULT_WALLET", str(defaults.default_wallet))),
            odds_push_interval=float(os.getenv("ODDS_PUSH_INTERVAL", str(defaults.odds_push_interval))),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            bank_name=os.getenv("BANK_NAME", defaults.bank_name),
            bank_account_name=os.getenv("BANK_ACCOUNT_NAME", defaults.bank_account_name),
            bank_account_number=os.getenv("BANK_ACCOUNT_NUMBER", defaults.bank_account_number),
            bank_ifsc=os.getenv("BANK_IFSC", defaults.bank_ifsc),
            bank_upi_id=os.getenv("BANK_UPI_ID", defaults.bank_upi_id),
            bank_note=os.getenv("BANK_NOTE", defaults.bank_note),
        )
