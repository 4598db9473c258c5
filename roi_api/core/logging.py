# roi_api/core/logging.py
# -----------------------------------------------------------------------------
# Loguru based logging setup
# - stderr sink: DEBUG in development, INFO in production
# - file sink with rotation/retention/backtrace
# -----------------------------------------------------------------------------
import sys
from pathlib import Path

from loguru import logger

from roi_api.core.config import Settings, settings as default_settings


def setup_logging(cfg: Settings = default_settings) -> None:
    level = cfg.LOG_LEVEL or ("INFO" if cfg.is_production else "DEBUG")

    log_dir = Path(cfg.LOG_DIR)
    log_dir.mkdir(exist_ok=True, parents=True)

    logger.remove()  # drop the default handler
    logger.add(
        sys.stderr,
        level=level,
        colorize=not cfg.is_production,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{line} - {message}",
    )
    logger.add(
        log_dir / "app.log",
        rotation="10 MB",
        retention=10,  # keep 10 rotated files
        enqueue=True,  # multi-process safe
        backtrace=True,
        diagnose=not cfg.is_production,
        level="INFO",
    )
