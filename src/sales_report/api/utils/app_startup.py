import logging
import sys
from pathlib import Path

from loguru import logger

from src.sales_report.runtime.context import get_config


class InterceptHandler(logging.Handler):
    """Redirect standard 'logging' records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # The request middleware already logs every request
        if record.name == "uvicorn.access":
            return

        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # depth=2 skips this handler and the stdlib logging frame
        logger.opt(depth=2, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def configure_logging() -> None:
    main_config = get_config()
    cfg = main_config.logging
    env = main_config.app.environment

    logger.remove()
    logger.configure(extra={"request_id": "-"})

    fmt_plain = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "[<cyan>{extra[request_id]}</cyan>] | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    )
    is_json_file = cfg.format == "json"
    debug_tracebacks = env != "production"

    # Console: always colorized, human-readable
    logger.add(
        sys.stderr,
        level=cfg.level,
        format=fmt_plain,
        colorize=True,
        backtrace=debug_tracebacks,
        diagnose=debug_tracebacks,
    )

    if cfg.file:
        path = Path(cfg.file)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(path),
            level=cfg.level,
            format="{message}" if is_json_file else fmt_plain,
            serialize=is_json_file,
            rotation=f"{cfg.max_size_mb} MB",
            retention=cfg.backup_count,
            compression="zip",
            enqueue=True,
            backtrace=debug_tracebacks,
            diagnose=debug_tracebacks,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in list(logging.root.manager.loggerDict.keys()):
        stdlog = logging.getLogger(name)
        stdlog.handlers = []
        stdlog.propagate = True

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.CRITICAL)

    logger.info(
        "Logging configured",
        app_level=cfg.level,
        app_format=cfg.format,
        app_file=cfg.file,
        environment=env,
    )
