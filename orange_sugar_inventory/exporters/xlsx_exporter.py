"""
XLSX exporter for the export tables.
"""
from io import BytesIO
from typing import Optional, Union
import pandas as pd
from openpyxl.utils import get_column_letter
from orange_sugar_inventory.exporters.base_exporter import BaseExporter

MAX_COLUMN_WIDTH = 50


def _fit_columns(worksheet, df: pd.DataFrame) -> None:
    """
    Size each column to its longest value, header included.
    """
    for col_idx, column in enumerate(df.columns, start=1):
        values = [str(column)] + [str(value) for value in df[column].tolist() if value is not None]
        width = max(len(value) for value in values) + 2
        worksheet.column_dimensions[get_column_letter(col_idx)].width = min(width, MAX_COLUMN_WIDTH)


class XLSXExporter(BaseExporter):
    """
    Exporter for Excel workbooks with a single sheet.
    """

    extension = "xlsx"

    def write(self, df: pd.DataFrame, output_path: Union[str, BytesIO], sheet_name: Optional[str] = None) -> Union[str, BytesIO]:
        sheet_name = sheet_name or "Sheet1"
        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=sheet_name, index=False)
            _fit_columns(writer.sheets[sheet_name], df)
        return output_path

    def to_bytes(self, df: pd.DataFrame, sheet_name: Optional[str] = None) -> bytes:
        """
        Render a table as XLSX bytes for download buttons.
        """
        buffer = BytesIO()
        self.write(df, buffer, sheet_name)
        return buffer.getvalue()
