"""导出模块"""

from .csv_exporter import (
    CSV_HEADERS,
    build_output_path,
    export_records,
    read_records_csv,
    record_to_row,
    row_to_record,
)

__all__ = [
    "CSV_HEADERS",
    "build_output_path",
    "export_records",
    "read_records_csv",
    "record_to_row",
    "row_to_record",
]
