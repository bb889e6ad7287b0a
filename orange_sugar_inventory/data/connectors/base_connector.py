"""
Base database connector interface.
"""
from abc import ABC, abstractmethod
from datetime import date, datetime
import math
import re
import numpy as np
import pandas as pd
from typing import Dict, Any, Optional


def format_value(value: Any) -> str:
    """
    Render a Python value as a SQL literal.

    Args:
        value (Any): The value to render

    Returns:
        str: SQL literal
    """
    if isinstance(value, np.generic):
        value = value.item()
    if value is None:
        return "NULL"
    if isinstance(value, float) and math.isnan(value):
        return "NULL"
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (datetime, date)):
        return f"'{value.isoformat()}'"
    if isinstance(value, (list, tuple, set)):
        if not value:
            return "(NULL)"
        return "(" + ", ".join(format_value(item) for item in value) + ")"
    # Backslash is an escape character inside Snowflake string literals
    text = str(value).replace("\\", "\\\\").replace("'", "''")
    return f"'{text}'"


def format_query(query: str, params: Optional[Dict[str, Any]] = None) -> str:
    """
    Replace :name placeholders in a query with SQL literals.

    Args:
        query (str): Query with :name placeholders
        params (Optional[Dict[str, Any]]): Values to bind

    Returns:
        str: The query with literals substituted
    """
    if not params:
        return query

    def _replace(match):
        key = match.group(1)
        if key not in params:
            return match.group(0)
        return format_value(params[key])

    # "::" casts are left alone
    return re.sub(r"(?<!:):([A-Za-z_][A-Za-z0-9_]*)", _replace, query)


class BaseConnector(ABC):
    """
    Abstract base class for database connections.
    """

    @abstractmethod
    def connect(self) -> Any:
        """
        Establish a connection to the database.

        Returns:
            Any: The database connection/session object
        """
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """
        Close the database connection.
        """
        pass

    @abstractmethod
    def execute_query(self, query: str, params: Optional[Dict[str, Any]] = None) -> pd.DataFrame:
        """
        Execute a SQL query and return the results as a DataFrame.

        Args:
            query (str): The SQL query to execute
            params (Optional[Dict[str, Any]]): Parameters to bind to the query

        Returns:
            pd.DataFrame: The query results with lower-case column names
        """
        pass

    @abstractmethod
    def execute_statement(self, statement: str, params: Optional[Dict[str, Any]] = None) -> int:
        """
        Execute an INSERT, UPDATE, DELETE or MERGE statement.

        Args:
            statement (str): The SQL statement to execute
            params (Optional[Dict[str, Any]]): Parameters to bind to the statement

        Returns:
            int: Number of affected rows
        """
        pass

    def __enter__(self):
        """
        Context manager entry point.

        Returns:
            BaseConnector: The connector instance
        """
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """
        Context manager exit point.
        """
        self.disconnect()
