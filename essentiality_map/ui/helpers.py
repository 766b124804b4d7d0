from __future__ import annotations

from typing import Iterable, List, Optional

import dash_bootstrap_components as dbc
from dash import html

from essentiality_map.core.derived import (
    DEPENDENCY_RGB,
    HIGHLIGHT_DEPENDENCY_RGB,
    HIGHLIGHT_NEUTRAL_RGB,
    NEUTRAL_RGB,
    DerivedView,
    rgba,
)
from essentiality_map.core.models import Category, DataPoint, SearchField
from essentiality_map.core.view_state import ViewStateStore
from essentiality_map.ui.ids import tissue_chip_id

_CATEGORY_SWATCH = {
    Category.NEUTRAL: rgba(NEUTRAL_RGB, 1),
    Category.DEPENDENCY: rgba(DEPENDENCY_RGB, 1),
    Category.SELECTED_NEUTRAL: rgba(HIGHLIGHT_NEUTRAL_RGB, 1),
    Category.SELECTED_DEPENDENCY: rgba(HIGHLIGHT_DEPENDENCY_RGB, 1),
}


def get_tissue_options(tissues: Iterable[str]) -> List[dict]:
    # Alphabetical for the menu only; the chart keeps first-seen order.
    return [{"label": t, "value": t} for t in sorted(tissues)]


def get_search_field_options() -> List[dict]:
    return [{"label": f.label, "value": f.value} for f in SearchField]


def get_category_options() -> List[dict]:
    """Legend entries with a colour dot, used as checklist labels."""
    return [
        {
            "label": html.Span(
                [
                    html.Span(
                        className="em-legend-dot",
                        style={"backgroundColor": _CATEGORY_SWATCH[c]},
                    ),
                    c.label,
                ]
            ),
            "value": c.value,
        }
        for c in Category
    ]


def tissue_chips(selected: Iterable[str]) -> List[html.Button]:
    # Styled as bootstrap pills; a click removes the tissue from the filter.
    return [
        html.Button(
            [
                tissue,
                html.Span("×", className="ms-1"),
            ],
            id=tissue_chip_id(tissue),
            n_clicks=0,
            className="badge rounded-pill bg-secondary border-0 me-1 mb-1 em-chip",
            title=f"Remove {tissue}",
        )
        for tissue in selected
    ]


def error_alert(message: Optional[str]):
    if not message:
        return None
    return dbc.Alert(message, color="danger", className="mb-0 mt-2 py-2 small")


def status_text(store: ViewStateStore, derived: Optional[DerivedView] = None) -> str:
    if store.dataset is None:
        return "No data loaded"
    total = len(store.points)
    n_tissues = len(store.tissues)
    if derived is None:
        return f"{total} cell lines across {n_tissues} tissues for {store.gene_id}"
    shown = len(derived.visible)
    text = f"{shown} of {total} cell lines shown · {n_tissues} tissues · {store.gene_id}"
    if store.state.search_term:
        text += f" · {derived.n_highlighted} highlighted"
    return text


def pin_details(point: Optional[DataPoint]):
    if point is None:
        return html.Span("Click a point to pin it.", className="text-muted")

    expression = "N/A" if point.expression is None else f"{point.expression:.2f}"
    rows = [
        ("Tissue", point.tissue),
        ("Cell Line", point.cell_line),
        ("DepMap ID", point.depmap_id),
        ("Disease", point.disease),
        ("Gene Effect", f"{point.gene_effect:.2f}"),
        ("Expression", expression),
    ]
    return html.Dl(
        [
            item
            for label, value in rows
            for item in (html.Dt(label, className="col-5"), html.Dd(value, className="col-7 mb-1"))
        ],
        className="row mb-0 small",
    )
