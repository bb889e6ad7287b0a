"""
CSV exporter for the export tables.
"""
from typing import Optional
import pandas as pd
from orange_sugar_inventory.exporters.base_exporter import BaseExporter


class CSVExporter(BaseExporter):
    """
    Exporter for CSV files.
    """

    extension = "csv"

    def write(self, df: pd.DataFrame, output_path: str, sheet_name: Optional[str] = None) -> str:
        df.to_csv(output_path, index=False)
        return output_path

    @staticmethod
    def to_bytes(df: pd.DataFrame) -> bytes:
        """
        Render a table as CSV bytes for download buttons.
        """
        return df.to_csv(index=False).encode("utf-8")
