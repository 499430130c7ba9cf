"""
Configuración del sistema de logging del order store.

Todo el paquete usa ``logging.getLogger(__name__)``; este módulo decide a
dónde van esos registros:
- Consola (stderr), con el nivel coloreado cuando es una terminal
- Archivo rotativo opcional (LOG_FILE_PATH)
- JSON de una línea por registro cuando LOG_JSON está activo
"""

import json
import logging
import logging.config
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from order_store.core.config import Settings, get_settings

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Atributos que trae cualquier LogRecord; el resto llegó por ``extra=``
_STANDARD_RECORD_ATTRS = frozenset(logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__) | {
    "message",
    "asctime",
}


class ColoredFormatter(logging.Formatter):
    """Colorea el nombre del nivel cuando stderr es una terminal."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    RESET = "\033[0m"

    def format(self, record):
        formatted = super().format(record)
        if not sys.stderr.isatty():
            return formatted

        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return formatted
        return formatted.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)


class StructuredFormatter(logging.Formatter):
    """
    Un objeto JSON por registro.

    Incluye la identidad de la aplicación (nombre, versión, entorno), la
    excepción si la hay y los campos pasados con ``extra=``. La identidad sale
    de ``settings``, que ``get_logging_configuration`` pasa al construirlo.
    """

    def __init__(self, settings: Optional[Settings] = None, **kwargs):
        super().__init__(**kwargs)
        self.settings = settings

    def format(self, record):
        settings = self.settings or get_settings()

        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
            "app": {
                "name": settings.APP_NAME,
                "version": settings.APP_VERSION,
                "environment": settings.ENVIRONMENT,
            },
        }

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, _ = record.exc_info
            payload["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": self.formatException(record.exc_info),
            }

        extra = {key: value for key, value in vars(record).items() if key not in _STANDARD_RECORD_ATTRS}
        if extra:
            payload["extra"] = extra

        return json.dumps(payload, ensure_ascii=False, default=str)


def get_logging_configuration(settings: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Construye el diccionario para ``logging.config.dictConfig``.

    Args:
        settings: Configuración a usar (por defecto la global)

    Returns:
        Dict: Configuración de formatters, handlers y loggers
    """
    settings = settings or get_settings()
    console_formatter = "json" if settings.LOG_JSON else "console"
    handlers = ["console"]

    handler_config: Dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "level": settings.LOG_LEVEL,
            "formatter": console_formatter,
        }
    }

    if settings.LOG_FILE_PATH:
        handler_config["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": settings.LOG_FILE_PATH,
            "maxBytes": settings.LOG_MAX_SIZE_MB * 1024 * 1024,
            "backupCount": settings.LOG_BACKUP_COUNT,
            "encoding": "utf-8",
            "level": settings.LOG_LEVEL,
            "formatter": "json" if settings.LOG_JSON else "plain",
        }
        handlers.append("file")

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {"format": settings.LOG_FORMAT, "datefmt": DATE_FORMAT},
            "console": {"()": ColoredFormatter, "format": settings.LOG_FORMAT, "datefmt": DATE_FORMAT},
            "json": {"()": StructuredFormatter, "settings": settings},
        },
        "handlers": handler_config,
        "loggers": {
            # Las sentencias SQL solo se muestran con DB_ECHO
            "sqlalchemy.engine": {"level": "INFO" if settings.DB_ECHO else "WARNING"},
            "aiosqlite": {"level": "WARNING"},
        },
        "root": {"level": settings.LOG_LEVEL, "handlers": handlers},
    }


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Aplica la configuración de logging.

    Args:
        settings: Configuración a usar (por defecto la global)
    """
    settings = settings or get_settings()

    if settings.LOG_FILE_PATH:
        Path(settings.LOG_FILE_PATH).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(get_logging_configuration(settings))
    logging.getLogger(__name__).debug(f"Logging configurado: nivel {settings.LOG_LEVEL}")
