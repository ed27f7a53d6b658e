import logging
import sys
from pathlib import Path

from loguru import logger

from src.dashboard.runtime.context import get_config


class InterceptHandler(logging.Handler):
    """Redirect standard 'logging' records (httpx, httpcore) to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=2, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def configure_logging(level: str | None = None) -> None:
    """Install the console sink, the optional file sink and the stdlib bridge.

    Args:
        level: Overrides ``logging.level`` from the configuration when given.
    """
    main_config = get_config()
    cfg = main_config.logging
    env = main_config.app.environment
    effective_level = (level or cfg.level).upper()

    logger.remove()

    fmt_plain = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    )
    is_json_file = cfg.format == "json"
    diagnose_on = env != "production"

    logger.add(
        sys.stderr,
        level=effective_level,
        format=fmt_plain,
        colorize=True,
        backtrace=diagnose_on,
        diagnose=diagnose_on,
    )

    if cfg.file:
        path = Path(cfg.file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(path),
            level=effective_level,
            format="{message}" if is_json_file else fmt_plain,
            serialize=is_json_file,
            rotation=f"{cfg.max_size_mb} MB",
            retention=cfg.backup_count,
            compression="zip",
            enqueue=True,
            backtrace=diagnose_on,
            diagnose=diagnose_on,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger.debug(
        "Logging configured",
        app_level=effective_level,
        app_format=cfg.format,
        app_file=cfg.file,
        environment=env,
    )
