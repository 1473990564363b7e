"""Workbook reading on top of pandas and openpyxl."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Any

import pandas as pd

from analise_tributaria.domain.company_meta import find_company_sheet
from analise_tributaria.domain.errors import (
    MalformedSpreadsheetError,
    compose_error_message,
)

# Only empty cells are missing; literal text such as "N/A" or "null" is data.
NA_OPTIONS: dict[str, Any] = {"keep_default_na": False, "na_values": [""]}


@dataclass(frozen=True, slots=True)
class WorkbookContent:
    """Tabular data of the first sheet plus the optional company sheet grid."""

    sheet_name: str
    rows: list[dict[str, Any]]
    company_grid: list[list[Any]] | None


def _without_nan(frame: pd.DataFrame) -> pd.DataFrame:
    frame = frame.astype(object)
    return frame.where(pd.notna(frame), None)


def _open(content: bytes) -> pd.ExcelFile:
    if not content:
        raise MalformedSpreadsheetError(
            message=compose_error_message(
                cause="The uploaded file is empty.",
                action="Select a non-empty .xlsx spreadsheet and upload it again.",
            )
        )
    try:
        return pd.ExcelFile(io.BytesIO(content), engine="openpyxl")
    except Exception as exc:
        raise MalformedSpreadsheetError(
            details={"error_type": type(exc).__name__}
        ) from exc


def read_grid(workbook: pd.ExcelFile, sheet: str | int) -> list[list[Any]]:
    """Read one sheet as raw rows without header handling, skipping blank rows."""

    frame = workbook.parse(sheet, header=None, dtype=object, **NA_OPTIONS)
    frame = _without_nan(frame.dropna(how="all"))
    return [list(row) for row in frame.itertuples(index=False, name=None)]


def read_workbook(content: bytes) -> WorkbookContent:
    """Read the first sheet as header-keyed rows and the ``empresa`` sheet as a grid."""

    workbook = _open(content)
    try:
        with workbook:
            sheet_names = [str(name) for name in workbook.sheet_names]
            if not sheet_names:
                raise MalformedSpreadsheetError(
                    message=compose_error_message(
                        cause="The workbook has no sheets.",
                        action="Upload a spreadsheet with the data on its first sheet.",
                    )
                )
            frame = _without_nan(
                workbook.parse(sheet_names[0], dtype=object, **NA_OPTIONS)
            )
            rows = frame.to_dict(orient="records")

            company_sheet = find_company_sheet(sheet_names)
            company_grid = (
                read_grid(workbook, company_sheet) if company_sheet else None
            )
    except MalformedSpreadsheetError:
        raise
    except Exception as exc:
        raise MalformedSpreadsheetError(
            details={"error_type": type(exc).__name__}
        ) from exc

    return WorkbookContent(
        sheet_name=sheet_names[0],
        rows=rows,
        company_grid=company_grid,
    )


def read_sheet_grid(content: bytes, sheet_index: int) -> list[list[Any]]:
    """Read the sheet at ``sheet_index`` of a workbook as a raw grid."""

    workbook = _open(content)
    try:
        with workbook:
            sheet_names = list(workbook.sheet_names)
            if sheet_index >= len(sheet_names):
                raise MalformedSpreadsheetError(
                    message=compose_error_message(
                        cause=f"The workbook has no sheet at index {sheet_index}.",
                        action="Pass an existing sheet index.",
                    ),
                    details={"sheets": len(sheet_names)},
                )
            return read_grid(workbook, sheet_names[sheet_index])
    except MalformedSpreadsheetError:
        raise
    except Exception as exc:
        raise MalformedSpreadsheetError(
            details={"error_type": type(exc).__name__}
        ) from exc
