"""CSV 导出

列顺序与表头见 constants.CSV_COLUMNS。缺失值写为空单元格，
网站列表用分隔符拼接，contacted 写为 true/false。
"""

from __future__ import annotations

import csv
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from ..common.config import config
from ..common.constants import CSV_COLUMNS, CSV_EXTENSION
from ..common.exceptions import ExportError
from ..common.logger import get_logger
from ..common.validators import sanitize_filename
from ..field.models import ExtractedRecord

logger = get_logger(__name__)

CSV_HEADERS = [title for _, title in CSV_COLUMNS]


def build_output_path(
    output_dir: str | Path,
    file_stem: str,
    now: datetime | None = None,
) -> Path:
    """构造导出文件路径：{关键词}-{UTC 时间戳}.csv

    时间戳中的冒号替换为连字符，保证在各平台上都是合法文件名。
    """
    now = now or datetime.now(timezone.utc)
    stamp = now.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    stamp = stamp.replace("+00:00", "Z").replace(":", "-")
    filename = sanitize_filename(f"{file_stem}-{stamp}") + CSV_EXTENSION
    return Path(output_dir) / filename


def _format_cell(attr: str, value: object, separator: str) -> str:
    if value is None:
        return ""
    if attr == "website":
        return separator.join(value)  # type: ignore[arg-type]
    if attr == "contacted":
        return "true" if value else "false"
    return str(value)


def record_to_row(record: ExtractedRecord, separator: str | None = None) -> dict[str, str]:
    """记录转换为 {表头: 单元格} 字典"""
    separator = separator if separator is not None else config.output.website_separator
    return {
        title: _format_cell(attr, getattr(record, attr), separator)
        for attr, title in CSV_COLUMNS
    }


def row_to_record(row: dict[str, str], separator: str | None = None) -> ExtractedRecord:
    """CSV 行还原为记录（空单元格视为缺失）"""
    separator = separator if separator is not None else config.output.website_separator
    values: dict[str, object] = {}
    for attr, title in CSV_COLUMNS:
        cell = row.get(title, "") or ""
        if attr == "website":
            values[attr] = tuple(part for part in cell.split(separator) if part) if cell else ()
        elif attr == "contacted":
            values[attr] = cell.strip().lower() == "true"
        elif attr in ("source_url", "scraped_at"):
            values[attr] = cell
        else:
            values[attr] = cell or None
    return ExtractedRecord(**values)  # type: ignore[arg-type]


def export_records(
    records: Iterable[ExtractedRecord],
    path: str | Path,
    encoding: str | None = None,
) -> int:
    """写出 CSV 文件，父目录不存在时递归创建

    Returns:
        写入的记录数

    Raises:
        ExportError: 写入失败
    """
    path = Path(path)
    encoding = encoding or config.output.encoding
    records = list(records)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding=encoding, newline="") as f:
            writer = csv.DictWriter(f, fieldnames=CSV_HEADERS)
            writer.writeheader()
            for record in records:
                writer.writerow(record_to_row(record))
    except OSError as e:
        raise ExportError(str(path), str(e)) from e

    logger.info(f"[green]Successfully written {len(records)} records to CSV file {path}[/green]")
    return len(records)


def read_records_csv(path: str | Path, encoding: str | None = None) -> list[ExtractedRecord]:
    """读取导出的 CSV 文件"""
    encoding = encoding or config.output.encoding
    with open(path, "r", encoding=encoding, newline="") as f:
        reader = csv.DictReader(f)
        return [row_to_record(row) for row in reader]
