"""
Document Service - batch totals for exported document lines.

Reads a CSV or Excel export with one row per line item and a
``document_id`` column, groups rows into documents (in first-seen order)
and runs the totals engine on each.
"""
import logging
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from ..engine.models import ComputeOptions, LineItem
from ..engine.totals_engine import compute

logger = logging.getLogger(__name__)

DOCUMENT_COLUMN = 'document_id'

SUMMARY_COLUMNS = [
    DOCUMENT_COLUMN, 'line_rows', 'item_quantity_total', 'subtotal',
    'discount_total', 'net_amount', 'tax_total', 'excise_total',
    'other_fee_total', 'grand_total',
]


def read_lines_frame(path: Path) -> pd.DataFrame:
    """Load a document export into a DataFrame."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(
            f"Document export not found at {path}. "
            "Export document lines to CSV or XLSX first."
        )

    suffix = path.suffix.lower()
    if suffix == '.csv':
        df = pd.read_csv(path, dtype=str)
    elif suffix in ('.xlsx', '.xlsm'):
        df = pd.read_excel(path, dtype=str)
    else:
        raise ValueError(f"Unsupported document export format: {path.suffix}")

    df.columns = [str(c).strip() for c in df.columns]
    logger.info("Loaded %d line rows from %s", len(df), path)
    return df


def _row_to_line(row: dict) -> LineItem:
    # Blank cells come back as NaN; treat them as absent, not as NaN input
    cleaned = {k: (None if pd.isna(v) else v) for k, v in row.items() if k != DOCUMENT_COLUMN}
    return LineItem.from_dict(cleaned)


def group_document_lines(df: pd.DataFrame) -> dict[str, list[LineItem]]:
    """Group line rows by document id, preserving document and row order."""
    if DOCUMENT_COLUMN not in df.columns:
        raise ValueError(f"Document export is missing the '{DOCUMENT_COLUMN}' column")

    documents: dict[str, list[LineItem]] = {}
    for row in df.to_dict(orient='records'):
        doc_id = row.get(DOCUMENT_COLUMN)
        if doc_id is None or pd.isna(doc_id) or not str(doc_id).strip():
            logger.warning("Skipping line row without %s", DOCUMENT_COLUMN)
            continue
        documents.setdefault(str(doc_id).strip(), []).append(_row_to_line(row))
    return documents


def load_document_lines(path: Path) -> dict[str, list[LineItem]]:
    """Read an export file and return {document_id: [LineItem, ...]}."""
    return group_document_lines(read_lines_frame(path))


def summarize_documents(
    source: Union[Path, str, pd.DataFrame],
    options: Optional[ComputeOptions] = None,
) -> pd.DataFrame:
    """
    Compute totals for every document in ``source``.

    Args:
        source: path to a CSV/XLSX export, or an already-loaded DataFrame
        options: engine options applied to every document

    Returns:
        DataFrame with one row per document and one column per totals field
    """
    df = source if isinstance(source, pd.DataFrame) else read_lines_frame(Path(source))
    documents = group_document_lines(df)

    rows = []
    for doc_id, lines in documents.items():
        totals = compute(lines, options)
        row = {DOCUMENT_COLUMN: doc_id, 'line_rows': len(lines)}
        row.update(totals.to_dict())
        rows.append(row)

    logger.info("Summarized %d documents", len(rows))
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def write_summary(summary: pd.DataFrame, path: Path) -> Path:
    """Write a summary DataFrame to CSV, creating parent folders."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    summary.to_csv(path, index=False)
    logger.info("Wrote summary for %d documents to %s", len(summary), path)
    return path
