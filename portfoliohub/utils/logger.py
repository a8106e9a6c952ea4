"""
Logging for PortfolioHub.

Everything goes through Loguru. Three sinks are installed:

- console (optional), human readable and colorized
- application log file, rotated by size
- metrics files ``metrics_YYYY-MM-DD.log``, one JSON object per line,
  rotated at midnight and read back by ``MetricsAnalyzer``

A record is a metrics record when it was bound with ``metric_type``
(see ``metrics_log``); those only reach the metrics sink.
"""

import json
import sys
from typing import Any

from loguru import logger

from portfoliohub.utils.config import LoggingSettings, get_settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> | "
    "<level>{message}</level>"
)

REDACTED = "***REDACTED***"
SENSITIVE_KEYS = frozenset(
    {"password", "passwd", "secret", "token", "api_key", "apikey", "credential", "private_key"}
)


def _is_metrics_record(record: dict[str, Any]) -> bool:
    return "metric_type" in record["extra"]


def _is_app_record(record: dict[str, Any]) -> bool:
    return "metric_type" not in record["extra"]


def _format_metrics_record(record: dict[str, Any]) -> str:
    return "{extra[payload_json]}\n"


def _add_console_sink(log_settings: LoggingSettings, diagnose: bool) -> int:
    return logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=log_settings.level,
        filter=_is_app_record,
        colorize=True,
        diagnose=diagnose,
    )


def _add_app_file_sink(log_settings: LoggingSettings, diagnose: bool) -> int:
    log_settings.file_path.parent.mkdir(parents=True, exist_ok=True)
    return logger.add(
        log_settings.file_path,
        format=log_settings.format,
        level=log_settings.level,
        filter=_is_app_record,
        rotation=log_settings.rotation,
        retention=log_settings.retention,
        compression="zip",
        backtrace=True,
        diagnose=diagnose,
        enqueue=True,
    )


def _add_metrics_sink(log_settings: LoggingSettings) -> int:
    log_settings.metrics_dir.mkdir(parents=True, exist_ok=True)
    return logger.add(
        log_settings.metrics_dir / "metrics_{time:YYYY-MM-DD}.log",
        format=_format_metrics_record,
        level="INFO",
        filter=_is_metrics_record,
        rotation=log_settings.metrics_rotation,
        retention=log_settings.metrics_retention,
        enqueue=True,
    )


def setup_logging() -> dict[str, int]:
    """
    Replace Loguru's default handler with the PortfolioHub sinks.

    Returns:
        Handler ids keyed by sink name ("console", "file", "metrics")
    """
    settings = get_settings()
    log_settings = settings.logging

    # Variable values in tracebacks only while developing locally
    diagnose = settings.debug and settings.environment == "development"

    logger.remove()
    logger.configure(extra={"name": "portfoliohub"})

    handlers = {}
    if log_settings.console_output:
        handlers["console"] = _add_console_sink(log_settings, diagnose)
    handlers["file"] = _add_app_file_sink(log_settings, diagnose)
    handlers["metrics"] = _add_metrics_sink(log_settings)

    logger.debug(f"Logging configured ({log_settings.level}), metrics in {log_settings.metrics_dir}")
    return handlers


def get_logger(name: str) -> Any:
    """Loguru logger bound to a module or class name."""
    return logger.bind(name=name)


def redact(data: Any) -> Any:
    """Copy of ``data`` with values under sensitive-looking keys masked."""
    if isinstance(data, dict):
        return {
            key: REDACTED
            if any(s in str(key).lower() for s in SENSITIVE_KEYS)
            else redact(value)
            for key, value in data.items()
        }
    if isinstance(data, (list, tuple)):
        return [redact(item) for item in data]
    return data


def metrics_log(event: str, metric_type: str, payload: dict[str, Any]) -> dict[str, Any]:
    """
    Write one metrics record.

    The redacted payload is serialized once here, so the metrics file
    holds exactly the JSON returned to the caller.

    Args:
        event: Record name (e.g., "PROJECT_MATCHING")
        metric_type: Machine-readable metric type
        payload: JSON-serializable record body

    Returns:
        The redacted payload that was written
    """
    record = redact(payload)
    logger.bind(
        metric_type=metric_type,
        payload=record,
        payload_json=json.dumps(record, default=str),
    ).info(event)
    return record


class LoggerMixin:
    """Gives a class a ``logger`` bound to its qualified name."""

    @property
    def logger(self) -> Any:
        cls = type(self)
        return get_logger(f"{cls.__module__}.{cls.__qualname__}")


try:
    setup_logging()
except OSError as e:
    # Log directory not writable; keep loguru's default stderr handler
    logger.warning(f"Logging setup failed, using default handler: {e}")
