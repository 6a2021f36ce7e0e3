"""
Administración de roles desde la línea de comandos.

Uso:
    fastmoney-admin promote alice
    fastmoney-admin demote alice

Lee DATABASE_URL igual que la app (``.env`` incluido).
"""
import argparse
import logging
import sys

from .config import Settings
from .crud import set_role
from .database import Base, build_engine, build_session_factory
from .exceptions import FastMoneyError, NotFoundError
from .logging_config import setup_logging
from .models.user import ROLE_ADMIN, ROLE_USER

logger = logging.getLogger(__name__)

COMMANDS = {"promote": ROLE_ADMIN, "demote": ROLE_USER}


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="fastmoney-admin", description="Manage FastMoney user roles.")
    ap.add_argument("command", choices=sorted(COMMANDS), help="promote to admin or demote to user")
    ap.add_argument("username")
    return ap


def main(argv=None, settings: Settings = None) -> int:
    args = build_parser().parse_args(argv)
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    engine = build_engine(settings)
    Base.metadata.create_all(bind=engine)
    db = build_session_factory(engine)()
    try:
        user = set_role(db, args.username, COMMANDS[args.command])
    except NotFoundError as e:
        print(f"[!] {e.message}: {args.username}", file=sys.stderr)
        return 2
    except FastMoneyError as e:
        print(f"[!] {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()
        engine.dispose()

    logger.info("Rol actualizado: %s -> %s", user.username, user.role)
    print(f"[+] {user.username} is now {user.role}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
