"""Tests unitarios para la configuración."""

import pytest
from pydantic import ValidationError

from order_store.core.config import Settings


def _settings(**overrides):
    return Settings(_env_file=None, **overrides)


class TestConnectionString:
    """Construcción de la URL de conexión."""

    def test_built_from_individual_fields(self):
        settings = _settings(DB_HOST="db.local", DB_PORT=1444, DB_NAME="Orders", DB_USER="app", DB_PASSWORD="pw")

        assert settings.connection_string == (
            "mssql+pyodbc://app:pw@db.local:1444/Orders?driver=ODBC+Driver+17+for+SQL+Server"
        )
        assert settings.async_connection_string.startswith("mssql+aioodbc://app:pw@db.local:1444/")

    def test_host_with_port_is_kept(self):
        settings = _settings(DB_HOST="db.local,1500")

        assert "@db.local,1500/" in settings.connection_string

    def test_database_url_wins(self):
        settings = _settings(DATABASE_URL="sqlite+aiosqlite:///orders.db", DB_HOST="ignored")

        assert settings.connection_string == "sqlite+aiosqlite:///orders.db"
        assert settings.async_connection_string == "sqlite+aiosqlite:///orders.db"


class TestValidation:
    """Validadores de campos."""

    def test_log_level_is_upper_cased(self):
        assert _settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            _settings(LOG_LEVEL="LOUD")

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            _settings(ENVIRONMENT="qa")

    @pytest.mark.parametrize("port", [0, 70000])
    def test_invalid_port(self, port):
        with pytest.raises(ValidationError):
            _settings(DB_PORT=port)

    def test_procedure_names_have_defaults(self):
        settings = _settings()

        assert settings.FILTERED_ORDERS_PROCEDURE == "GetFilteredOrders"
        assert settings.BULK_DELETE_PROCEDURE == "BulkDeleteOrders"

    def test_environment_is_normalized(self):
        assert _settings(ENVIRONMENT="Production").ENVIRONMENT == "production"

    def test_reads_environment_variables(self, monkeypatch):
        monkeypatch.setenv("BULK_DELETE_PROCEDURE", "dbo.PurgeOrders")
        monkeypatch.setenv("DB_POOL_ENABLED", "true")

        settings = _settings()

        assert settings.BULK_DELETE_PROCEDURE == "dbo.PurgeOrders"
        assert settings.DB_POOL_ENABLED is True
