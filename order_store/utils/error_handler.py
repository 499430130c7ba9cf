"""
Sistema de manejo de errores personalizado.

Este módulo define las excepciones de la capa de acceso a datos y
traduce los errores de SQLAlchemy/driver a esa taxonomía.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    SQLAlchemyError,
)


class ErrorCode(Enum):
    """
    Códigos de error estandardizados.
    """

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Errores de base de datos
    DATA_ACCESS_FAILED = "DATA_ACCESS_FAILED"
    DB_CONNECTION_FAILED = "DB_CONNECTION_FAILED"
    DB_CONSTRAINT_VIOLATION = "DB_CONSTRAINT_VIOLATION"
    DB_TRANSACTION_ROLLED_BACK = "DB_TRANSACTION_ROLLED_BACK"


class ErrorSeverity(Enum):
    """
    Niveles de severidad para errores.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AppException(Exception):
    """
    Excepción base para todas las excepciones del paquete.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
    ):
        """
        Inicializa la excepción.

        Args:
            message: Mensaje de error
            error_code: Código de error estandardizado
            details: Información adicional del error
            severity: Severidad del error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.severity = severity
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convierte la excepción a diccionario.

        Returns:
            Dict: Representación de la excepción
        """
        cause = self.__cause__
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "details": self.details,
            "severity": self.severity.value,
            "timestamp": self.timestamp.isoformat(),
            "cause": f"{type(cause).__name__}: {cause}" if cause else None,
        }

    def __str__(self) -> str:
        """String representation del error."""
        return f"{self.error_code.value}: {self.message}"


class ValidationException(AppException):
    """
    Excepción para errores de validación de datos de entrada.
    """

    def __init__(self, message: str, field: str, invalid_value: Any = None, **kwargs):
        """
        Inicializa la excepción de validación.

        Args:
            message: Mensaje de error
            field: Campo que falló la validación
            invalid_value: Valor que causó el error
            **kwargs: Argumentos adicionales para AppException
        """
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        self.field = field
        self.invalid_value = invalid_value
        self.details.update(
            {
                "field": field,
                "invalid_value": str(invalid_value) if invalid_value is not None else None,
            }
        )


class DataAccessError(AppException):
    """
    Excepción para operaciones rechazadas por la base de datos.
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.DATA_ACCESS_FAILED,
        severity: ErrorSeverity = ErrorSeverity.HIGH,
        **kwargs,
    ):
        """
        Inicializa la excepción de acceso a datos.

        Args:
            message: Mensaje de error
            operation: Operación del repositorio que falló
            error_code: Código de error
            severity: Severidad del error
            **kwargs: Argumentos adicionales para AppException
        """
        super().__init__(message=message, error_code=error_code, severity=severity, **kwargs)
        self.operation = operation
        self.details.update({"operation": operation})


class ConnectivityError(DataAccessError):
    """
    La conexión no se pudo abrir o se perdió durante la operación.
    """

    def __init__(self, message: str, operation: Optional[str] = None, **kwargs):
        super().__init__(
            message=message,
            operation=operation,
            error_code=ErrorCode.DB_CONNECTION_FAILED,
            severity=ErrorSeverity.CRITICAL,
            **kwargs,
        )


class ConstraintError(DataAccessError):
    """
    La sentencia violó una restricción del esquema.
    """

    def __init__(self, message: str, operation: Optional[str] = None, **kwargs):
        super().__init__(
            message=message,
            operation=operation,
            error_code=ErrorCode.DB_CONSTRAINT_VIOLATION,
            severity=ErrorSeverity.MEDIUM,
            **kwargs,
        )


class TransactionFailure(DataAccessError):
    """
    Una transacción falló y fue revertida por completo.
    """

    def __init__(self, message: str, operation: Optional[str] = None, rolled_back: bool = True, **kwargs):
        super().__init__(
            message=message,
            operation=operation,
            error_code=ErrorCode.DB_TRANSACTION_ROLLED_BACK,
            **kwargs,
        )
        self.rolled_back = rolled_back
        self.details.update({"rolled_back": rolled_back})


def _is_connectivity_error(exception: SQLAlchemyError) -> bool:
    """Determina si el error proviene de la conexión y no de la sentencia."""
    if isinstance(exception, (InterfaceError, DisconnectionError)):
        return True
    return isinstance(exception, DBAPIError) and exception.connection_invalidated


def convert_db_exception(
    exception: SQLAlchemyError, operation: Optional[str] = None, while_connecting: bool = False
) -> DataAccessError:
    """
    Convierte un error de SQLAlchemy a la taxonomía de acceso a datos.

    Un ``OperationalError`` solo es de conectividad si ocurrió al abrir la
    conexión o si la invalidó; una tabla inexistente o un error de sintaxis
    quedan como ``DataAccessError``.

    El llamador debe encadenar el original con ``raise ... from exception``.

    Args:
        exception: Excepción de SQLAlchemy
        operation: Nombre de la operación
        while_connecting: El error ocurrió al abrir la conexión

    Returns:
        DataAccessError: Excepción convertida
    """
    original = getattr(exception, "orig", None) or exception
    message = f"{operation or 'database operation'} failed: {original}"

    if isinstance(exception, IntegrityError):
        return ConstraintError(message=message, operation=operation)

    if while_connecting or _is_connectivity_error(exception):
        return ConnectivityError(message=message, operation=operation)

    return DataAccessError(message=message, operation=operation)
