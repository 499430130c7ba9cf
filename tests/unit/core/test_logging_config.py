"""Tests unitarios para la configuración de logging."""

import json
import logging
import logging.config
import sys

from order_store.core.config import Settings
from order_store.core.logging_config import StructuredFormatter, get_logging_configuration


def _record(message="Order created", **extra):
    record = logging.LogRecord("order_store.test", logging.INFO, __file__, 10, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestLoggingConfiguration:
    def test_console_only_by_default(self):
        config = get_logging_configuration(Settings(_env_file=None))

        assert config["root"]["handlers"] == ["console"]
        assert config["handlers"]["console"]["formatter"] == "console"
        assert config["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"

    def test_file_handler_when_path_configured(self, tmp_path):
        settings = Settings(_env_file=None, LOG_FILE_PATH=str(tmp_path / "orders.log"), LOG_MAX_SIZE_MB=2)

        config = get_logging_configuration(settings)

        assert config["root"]["handlers"] == ["console", "file"]
        assert config["handlers"]["file"]["maxBytes"] == 2 * 1024 * 1024

    def test_json_and_echo(self):
        config = get_logging_configuration(Settings(_env_file=None, LOG_JSON=True, DB_ECHO=True))

        assert config["handlers"]["console"]["formatter"] == "json"
        assert config["loggers"]["sqlalchemy.engine"]["level"] == "INFO"


class TestStructuredFormatter:
    def test_formats_json_with_extra_fields(self):
        output = StructuredFormatter().format(_record(order_id=7))

        entry = json.loads(output)
        assert entry["message"] == "Order created"
        assert entry["level"] == "INFO"
        assert entry["extra"] == {"order_id": 7}

    def test_includes_exception(self):
        try:
            raise ValueError("bad ordinal")
        except ValueError:
            record = logging.LogRecord(
                "order_store.test", logging.ERROR, __file__, 10, "failed", None, sys.exc_info()
            )

        entry = json.loads(StructuredFormatter().format(record))

        assert entry["exception"]["type"] == "ValueError"

    def test_uses_settings_given_to_logging_configuration(self):
        """La identidad de la aplicación sale de los settings pasados a setup_logging, no de los globales."""
        settings = Settings(_env_file=None, APP_NAME="orders-batch", ENVIRONMENT="staging", LOG_JSON=True)
        config = get_logging_configuration(settings)
        configurator = logging.config.DictConfigurator(config)

        formatter = configurator.configure_formatter(configurator.config["formatters"]["json"])
        entry = json.loads(formatter.format(_record()))

        assert isinstance(formatter, StructuredFormatter)
        assert formatter.settings is settings
        assert entry["app"]["name"] == "orders-batch"
        assert entry["app"]["environment"] == "staging"
