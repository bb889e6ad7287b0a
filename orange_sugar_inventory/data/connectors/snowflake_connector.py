"""
Snowflake database connector implementation.
"""
import pandas as pd
from typing import Dict, Any, Optional
from snowflake.snowpark import Session
from orange_sugar_inventory.data.connectors.base_connector import BaseConnector, format_query
from orange_sugar_inventory.config.database_config import SNOWFLAKE_CONFIG
from orange_sugar_inventory.exceptions import DatabaseError
from orange_sugar_inventory.utils.logging_config import get_logger

# Set up logging
logger = get_logger(__name__)


class SnowflakeConnector(BaseConnector):
    """
    Connector for Snowflake database.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the Snowflake connector.

        Args:
            config (Optional[Dict[str, Any]]): Snowflake connection configuration.
                                              If None, uses the default from database_config.py
        """
        self.config = config if config is not None else SNOWFLAKE_CONFIG
        self.session = None

    def connect(self) -> Session:
        """
        Establish a connection to Snowflake.

        Returns:
            Session: The Snowflake session object
        """
        if self.session is None:
            try:
                self.session = Session.builder.configs(self.config).create()
                logger.info("Snowflake connection established.")
            except Exception as e:
                logger.error(f"Error connecting to Snowflake: {str(e)}")
                raise DatabaseError(f"Could not connect to Snowflake: {e}") from e

        return self.session

    def disconnect(self) -> None:
        """
        Close the Snowflake connection.
        """
        try:
            if self.session is not None:
                self.session.close()
                logger.info("Snowflake connection closed.")
                self.session = None
        except Exception as e:
            logger.error(f"Error closing Snowflake connection: {str(e)}")
            raise

    def execute_query(self, query: str, params: Optional[Dict[str, Any]] = None) -> pd.DataFrame:
        """
        Execute a SQL query on Snowflake and return the results as a DataFrame.

        Args:
            query (str): The SQL query to execute
            params (Optional[Dict[str, Any]]): Parameters to bind to the query

        Returns:
            pd.DataFrame: The query results with lower-case column names
        """
        if self.session is None:
            self.connect()

        formatted_query = format_query(query, params)
        logger.debug(f"Executing query: {formatted_query[:200]}...")

        try:
            df = self.session.sql(formatted_query).to_pandas()
        except Exception as e:
            logger.error(f"Error executing query: {str(e)}")
            raise DatabaseError(str(e), details={"query": formatted_query[:200]}) from e

        df.columns = [str(col).lower() for col in df.columns]
        return df

    def execute_statement(self, statement: str, params: Optional[Dict[str, Any]] = None) -> int:
        """
        Execute a DML statement on Snowflake.

        Args:
            statement (str): The SQL statement to execute
            params (Optional[Dict[str, Any]]): Parameters to bind to the statement

        Returns:
            int: Number of affected rows reported by Snowflake
        """
        if self.session is None:
            self.connect()

        formatted_statement = format_query(statement, params)
        logger.debug(f"Executing statement: {formatted_statement[:200]}...")

        try:
            rows = self.session.sql(formatted_statement).collect()
        except Exception as e:
            logger.error(f"Error executing statement: {str(e)}")
            raise DatabaseError(str(e), details={"statement": formatted_statement[:200]}) from e

        # DML returns one row of counters, e.g. "number of rows inserted"
        affected = 0
        for row in rows:
            for value in row:
                if isinstance(value, int):
                    affected += value
        return affected
