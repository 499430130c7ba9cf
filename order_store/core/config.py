"""
Configuración centralizada de la capa de acceso a datos.

Este módulo maneja todas las variables de entorno y configuraciones
del paquete usando Pydantic Settings para validación automática.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Configuración de la aplicación usando Pydantic Settings.

    Todas las configuraciones se cargan desde variables de entorno
    con valores por defecto apropiados para desarrollo.
    """

    # === CONFIGURACIÓN BÁSICA DE LA APP ===
    APP_NAME: str = "Order Store"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = Field(default="development")

    # === CONFIGURACIÓN DE BASE DE DATOS (SQL SERVER) ===
    # DATABASE_URL tiene prioridad sobre los campos individuales
    DATABASE_URL: Optional[str] = Field(default=None)
    DB_HOST: str = Field(default="localhost")
    DB_PORT: int = Field(default=1433)
    DB_NAME: str = Field(default="OrderStore")
    DB_USER: str = Field(default="sa")
    DB_PASSWORD: str = Field(default="")
    DB_DRIVER: str = Field(default="ODBC Driver 17 for SQL Server")
    DB_CONNECTION_TIMEOUT: int = Field(default=30)
    DB_POOL_ENABLED: bool = Field(default=False)
    DB_POOL_SIZE: int = Field(default=5)
    DB_ECHO: bool = Field(default=False)

    # === PROCEDIMIENTOS ALMACENADOS ===
    FILTERED_ORDERS_PROCEDURE: str = Field(default="GetFilteredOrders")
    BULK_DELETE_PROCEDURE: str = Field(default="BulkDeleteOrders")

    # === CONFIGURACIÓN DE LOGGING ===
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE_PATH: Optional[str] = Field(default=None)
    LOG_MAX_SIZE_MB: int = Field(default=10)
    LOG_BACKUP_COUNT: int = Field(default=5)
    LOG_FORMAT: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    LOG_JSON: bool = Field(default=False)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Valida que el nivel de log sea válido."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL debe ser uno de: {valid_levels}")
        return v.upper()

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Valida que el entorno sea válido."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"ENVIRONMENT debe ser uno de: {valid_envs}")
        return v.lower()

    @field_validator("DB_PORT")
    @classmethod
    def validate_port(cls, v):
        """Valida que el puerto esté en rango válido."""
        if not 1 <= v <= 65535:
            raise ValueError("DB_PORT debe estar entre 1 y 65535")
        return v

    @property
    def connection_string(self) -> str:
        """Genera string de conexión para SQL Server (pyodbc)."""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        # If host already includes port (with comma), use it as is
        if "," in self.DB_HOST:
            host_part = self.DB_HOST
        else:
            host_part = f"{self.DB_HOST}:{self.DB_PORT}"

        return (
            f"mssql+pyodbc://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{host_part}/{self.DB_NAME}"
            f"?driver={self.DB_DRIVER.replace(' ', '+')}"
        )

    @property
    def async_connection_string(self) -> str:
        """String de conexión asíncrona (aioodbc) para SQL Server."""
        return self.connection_string.replace("mssql+pyodbc://", "mssql+aioodbc://")


@lru_cache()
def get_settings() -> Settings:
    """
    Obtiene instancia singleton de configuración.

    Usa LRU cache para evitar recrear la configuración
    múltiples veces durante la ejecución.

    Returns:
        Settings: Instancia de configuración
    """
    return Settings()
