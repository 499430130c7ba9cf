"""
T-SQL definitions of the order stored procedures.

Both procedures take the same four optional parameters. A NULL parameter
leaves its column unconstrained; year and month match the components of
``CreatedDate``.
"""

from typing import Dict

_FILTER_PARAMETERS = """
    @Year INT = NULL,
    @Month INT = NULL,
    @Status INT = NULL,
    @ProductId INT = NULL"""

_FILTER_PREDICATE = """
    WHERE (@Year IS NULL OR YEAR(CreatedDate) = @Year)
      AND (@Month IS NULL OR MONTH(CreatedDate) = @Month)
      AND (@Status IS NULL OR Status = @Status)
      AND (@ProductId IS NULL OR ProductId = @ProductId)"""


def filtered_orders_procedure(name: str) -> str:
    """CREATE OR ALTER statement for the filtered-fetch procedure."""
    return f"""
CREATE OR ALTER PROCEDURE {name}{_FILTER_PARAMETERS}
AS
BEGIN
    SELECT Id, Status, CreatedDate, UpdatedDate, ProductId
    FROM [Order]{_FILTER_PREDICATE};
END
"""


def bulk_delete_procedure(name: str) -> str:
    """
    CREATE OR ALTER statement for the bulk-delete procedure.

    NOCOUNT stays off so the DELETE row count reaches the driver.
    """
    return f"""
CREATE OR ALTER PROCEDURE {name}{_FILTER_PARAMETERS}
AS
BEGIN
    DELETE FROM [Order]{_FILTER_PREDICATE};
END
"""


def procedure_definitions(filtered_orders_name: str, bulk_delete_name: str) -> Dict[str, str]:
    """Map procedure name to its definition."""
    return {
        filtered_orders_name: filtered_orders_procedure(filtered_orders_name),
        bulk_delete_name: bulk_delete_procedure(bulk_delete_name),
    }
