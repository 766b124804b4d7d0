from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from .models import DataPoint, NormalizedDataset, ScreeningRecord

logger = logging.getLogger(__name__)


def unique_tissues(records: Iterable[ScreeningRecord]) -> List[str]:
    """
    Tissue names in the order they first appear in the response.

    No sorting here: this order is the tissue axis. Alphabetical order is only
    used for the filter menu labels.
    """
    return list(dict.fromkeys(r.tissue_name for r in records))


def normalize(records: Iterable[ScreeningRecord]) -> NormalizedDataset:
    """
    Flatten tissue -> screens into plot points.

    - one DataPoint per screen with a gene effect
    - screens without a gene effect are dropped (they have no x position)
    - y is the first-seen index of the screen's tissue

    :param records: parsed upstream records
    :return: NormalizedDataset with the frozen tissue order and the points
    """
    records = list(records)
    tissues = unique_tissues(records)
    index_by_tissue: Dict[str, int] = {t: i for i, t in enumerate(tissues)}

    points: List[DataPoint] = []
    dropped = 0
    for record in records:
        y = index_by_tissue[record.tissue_name]
        for screen in record.screens:
            if screen.gene_effect is None:
                dropped += 1
                continue
            points.append(
                DataPoint(
                    x=screen.gene_effect,
                    y=y,
                    tissue=record.tissue_name,
                    cell_line=screen.cell_line_name,
                    depmap_id=screen.depmap_id,
                    disease=screen.disease_from_source,
                    expression=screen.expression,
                )
            )

    logger.debug(
        "normalize_done",
        extra={"n_tissues": len(tissues), "n_points": len(points), "n_dropped": dropped},
    )
    return NormalizedDataset(tissues=tuple(tissues), points=tuple(points))
