"""
Spreadsheet decoding: turns an uploaded file into raw records.

Every column of the first sheet is present in every record and blank cells
are "" (never missing keys, never NaN); header maps are built from the first
record only and rely on this.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, BinaryIO

import pandas as pd

from headers import Record

logger = logging.getLogger(__name__)

SOURCES = ("cost", "vehicles", "freight", "drivers")
EXCEL_ENGINES = {".xlsx": "openpyxl", ".xlsm": "openpyxl", ".xls": "xlrd"}


def _file_name(source: Any) -> str:
    if isinstance(source, (str, Path)):
        return str(source)
    return getattr(source, "name", "") or ""


def excel_engine_for(name: str) -> str | None:
    return EXCEL_ENGINES.get(Path(name).suffix.lower())


def read_frame(source: str | Path | BinaryIO) -> pd.DataFrame:
    name = _file_name(source).lower()
    if name.endswith(".csv"):
        return pd.read_csv(source, dtype=str, keep_default_na=False)
    return pd.read_excel(source, sheet_name=0, engine=excel_engine_for(name))


def frame_to_records(df: pd.DataFrame) -> list[Record]:
    df = df.astype(object).where(df.notna(), "")
    df.columns = [str(c) for c in df.columns]
    return df.to_dict(orient="records")


def parse_workbook(source: str | Path | BinaryIO | None) -> list[Record]:
    """Records of the first sheet; an absent source gives no records."""
    if source is None:
        return []
    records = frame_to_records(read_frame(source))
    logger.info("Decoded %s: %d rows", _file_name(source) or "upload", len(records))
    return records


def load_sources(files: dict[str, Any]) -> dict[str, list[Record]]:
    """
    Decode the four sources in parallel. Missing sources come back empty.
    A file that cannot be decoded raises.
    """
    with ThreadPoolExecutor(max_workers=len(SOURCES)) as pool:
        futures = {name: pool.submit(parse_workbook, files.get(name)) for name in SOURCES}
        return {name: future.result() for name, future in futures.items()}
