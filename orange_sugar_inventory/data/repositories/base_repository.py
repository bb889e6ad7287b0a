"""
Base repository interface for data access.
"""
from abc import ABC, abstractmethod
from typing import Any, List, Dict, Optional, Generic, TypeVar
import uuid
import pandas as pd
from orange_sugar_inventory.data.connectors.base_connector import BaseConnector
from orange_sugar_inventory.utils.logging_config import get_logger

# Set up logging
logger = get_logger(__name__)

# Generic type for repository entities
T = TypeVar('T')


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base class for repositories that provide data access.
    """

    def __init__(self, connector: BaseConnector):
        """
        Initialize the repository with a database connector.

        Args:
            connector (BaseConnector): The database connector to use
        """
        self.connector = connector

    @abstractmethod
    def get_all(self, *args, **kwargs) -> List[T]:
        """
        Get all entities that match the specified criteria.

        Returns:
            List[T]: A list of entity objects
        """
        pass

    @abstractmethod
    def get_raw_data(self, *args, **kwargs) -> pd.DataFrame:
        """
        Get raw data as a pandas DataFrame.

        Returns:
            pd.DataFrame: The raw data as a pandas DataFrame
        """
        pass

    def _execute_query(self, query: str, params: Optional[Dict[str, Any]] = None) -> pd.DataFrame:
        """
        Execute a SQL query using the connector.

        Args:
            query (str): The SQL query to execute
            params (Optional[Dict[str, Any]]): Parameters to bind to the query

        Returns:
            pd.DataFrame: The query results as a pandas DataFrame
        """
        return self.connector.execute_query(query, params)

    def _execute_statement(self, statement: str, params: Optional[Dict[str, Any]] = None) -> int:
        """
        Execute a DML statement using the connector.

        Args:
            statement (str): The SQL statement to execute
            params (Optional[Dict[str, Any]]): Parameters to bind to the statement

        Returns:
            int: Number of affected rows
        """
        return self.connector.execute_statement(statement, params)

    @staticmethod
    def _records(df: pd.DataFrame) -> List[Dict[str, Any]]:
        """
        Convert a DataFrame to a list of dicts with NaN/NaT replaced by None.

        Args:
            df (pd.DataFrame): Query result

        Returns:
            List[Dict[str, Any]]: One dict per row
        """
        if df is None or df.empty:
            return []
        cleaned = df.astype(object).where(pd.notnull(df), None)
        return cleaned.to_dict(orient="records")

    @staticmethod
    def _new_id() -> str:
        """
        Generate a primary key for a new row.
        """
        return str(uuid.uuid4())
