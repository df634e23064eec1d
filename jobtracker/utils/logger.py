import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler


def setup_logger(
    name: str = "jobtracker",
    log_file: str = "logs/jobtracker.log",
    level: str = "INFO",
    max_size: int = 10,
    backup_count: int = 5,
) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    console_handler.setLevel(logging.WARNING)
    logger.addHandler(console_handler)

    # File handler may fail on read-only or permission-restricted paths
    try:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file, maxBytes=max_size * 1024 * 1024, backupCount=backup_count
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    except (PermissionError, OSError) as e:
        logger.warning(f"Could not create log file {log_file}: {e}. Using console only.")

    return logger


def _from_settings() -> logging.Logger:
    from jobtracker.utils.config import get_settings

    cfg = get_settings().logging
    return setup_logger(
        log_file=cfg.file,
        level=cfg.level,
        max_size=cfg.max_size,
        backup_count=cfg.backup_count,
    )


# Global instance
logger = _from_settings()
