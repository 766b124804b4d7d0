from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from essentiality_map.core.models import DataPoint, format_number

logger = logging.getLogger(__name__)

CSV_HEADER = ["Tissue", "Cell Line", "DepMap ID", "Disease", "Gene Effect", "Expression"]
MISSING_VALUE = "N/A"


def _quote(value: Optional[str]) -> str:
    text = "" if value is None else str(value)
    return '"' + text.replace('"', '""') + '"'


def csv_row(point: DataPoint) -> str:
    """
    One export line: text fields quoted, numbers bare, missing expression as N/A.
    """
    expression = MISSING_VALUE if point.expression is None else format_number(point.expression)
    return ",".join(
        [
            _quote(point.tissue),
            _quote(point.cell_line),
            _quote(point.depmap_id),
            _quote(point.disease),
            format_number(point.gene_effect),
            expression,
        ]
    )


def points_to_csv(points: Iterable[DataPoint]) -> str:
    """
    Serialise points (normally the currently visible ones) to CSV text with a
    header row.
    """
    lines: List[str] = [",".join(CSV_HEADER)]
    lines.extend(csv_row(p) for p in points)
    logger.info("csv_export", extra={"n_rows": len(lines) - 1})
    return "\n".join(lines) + "\n"


def export_filename(gene_id: Optional[str]) -> str:
    return f"{gene_id or 'gene'}_essentiality.csv"
