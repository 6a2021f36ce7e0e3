# fastmoney/logging_config.py
import logging


def setup_logging(level: str = "INFO") -> None:
    """Configura el logger raíz con un handler de consola (solo una vez)."""
    logger = logging.getLogger()
    if logger.handlers:
        # Ya configurado (tests, o create_app llamado varias veces)
        return

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
