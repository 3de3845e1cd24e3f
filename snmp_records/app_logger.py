from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional, cast

if TYPE_CHECKING:
    from snmp_records.app_config import AppConfig


@dataclass(frozen=True)
class LoggingConfig:
    level: str
    log_dir: Optional[Path] = None
    log_file: str = "snmp-records.log"
    console: bool = True
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5


class ColoredFormatter(logging.Formatter):
    """Formatter that adds color to log levels for console output."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        original_levelname = record.levelname
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


class AppLogger:
    """Configures the root logger once for the CLI tools.

    Library modules only ever call ``logging.getLogger(__name__)``; handlers
    are installed here. Console output goes to stderr so that command output
    on stdout stays clean.
    """

    _configured: bool = False

    FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s [%(threadName)s] %(message)s"
    DATEFMT = "%Y-%m-%d %H:%M:%S"

    @staticmethod
    def configure(app_config: "AppConfig", level: Optional[str] = None) -> None:
        """
        Configure logging from the ``logger`` section of an AppConfig.

        Args:
            app_config: Loaded configuration
            level: Overrides the configured level (the CLI ``--verbose`` flag)
        """
        logger_cfg = cast(Dict[str, Any], app_config.get("logger", {}) or {})
        log_dir = logger_cfg.get("log_dir")
        config = LoggingConfig(
            level=level or logger_cfg.get("level", "INFO"),
            log_dir=Path(os.path.abspath(log_dir)) if log_dir else None,
            log_file=logger_cfg.get("log_file", "snmp-records.log"),
            console=logger_cfg.get("console", True),
            max_bytes=logger_cfg.get("max_bytes", 10 * 1024 * 1024),
            backup_count=logger_cfg.get("backup_count", 5),
        )
        AppLogger(config)

    def __init__(self, config: LoggingConfig) -> None:
        if AppLogger._configured:
            return
        self._configure(config)
        AppLogger._configured = True

    @staticmethod
    def get(name: str | None = None) -> logging.Logger:
        return logging.getLogger(name)

    @staticmethod
    def _configure(config: LoggingConfig) -> None:
        level = logging.getLevelName(config.level.upper())
        if not isinstance(level, int):
            level = logging.INFO

        root = logging.getLogger()
        root.setLevel(level)
        for handler in list(root.handlers):
            root.removeHandler(handler)

        if config.log_dir is not None:
            config.log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                filename=config.log_dir / config.log_file,
                maxBytes=config.max_bytes,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(logging.Formatter(fmt=AppLogger.FORMAT, datefmt=AppLogger.DATEFMT))
            root.addHandler(file_handler)

        if config.console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(level)
            console_handler.setFormatter(
                ColoredFormatter(fmt=AppLogger.FORMAT, datefmt=AppLogger.DATEFMT)
            )
            root.addHandler(console_handler)

        AppLogger._suppress_third_party_loggers(level)

    @staticmethod
    def _suppress_third_party_loggers(level: int) -> None:
        logging.getLogger("asyncio").setLevel(logging.WARNING)

        # pysnmp is very chatty; only let it through in DEBUG mode
        if level > logging.DEBUG:
            logging.getLogger("pysnmp").setLevel(logging.WARNING)
        else:
            logging.getLogger("pysnmp").setLevel(logging.DEBUG)
