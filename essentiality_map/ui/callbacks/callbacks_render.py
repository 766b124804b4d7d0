from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

import dash
import plotly.graph_objs as go
from dash import Input, Output

from essentiality_map.core.derived import derive_view
from essentiality_map.ui.callbacks.callbacks_utils import load_store
from essentiality_map.ui.helpers import pin_details, status_text
from essentiality_map.ui.ids import IDs
from essentiality_map.views import EssentialityView

if TYPE_CHECKING:
    from essentiality_map.ui.config import AppConfig

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Helper: Empty/Error Figures
# -----------------------------------------------------------------------------
def _message_figure(title: str, details: Optional[str] = None) -> go.Figure:
    fig = go.Figure()
    text = title if details is None else f"{title}<br><br>{details}"
    fig.add_annotation(
        text=text,
        showarrow=False,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(margin=dict(l=40, r=40, t=40, b=40))
    return fig


def _error_figure(details: str) -> go.Figure:
    return _message_figure("Something went wrong while rendering the chart.", details)


def render_store(store_data: Any):
    """
    Store -> (figure, status text, pin details). Kept apart from the Dash
    decorator so it can be called directly.
    """
    store = load_store(store_data)

    if store.dataset is None:
        if store.fetch_error:
            return (
                _message_figure(f"No data for {store.gene_id}.", store.fetch_error),
                status_text(store),
                pin_details(None),
            )
        if store.loading:
            return (
                _message_figure(f"Loading essentiality data for {store.gene_id}..."),
                status_text(store),
                pin_details(None),
            )
        return (
            _message_figure(
                "No gene selected.",
                "Enter an Ensembl gene ID and press Fetch Data.",
            ),
            status_text(store),
            pin_details(None),
        )

    view = EssentialityView(store.dataset)
    derived = derive_view(store.points, store.state)
    data = view.frame_from_derived(derived)

    logger.info(
        "render_start",
        extra={
            "gene_id": store.gene_id,
            "n_points": len(store.points),
            "n_drawn": len(data),
        },
    )

    if data.empty:
        fig = _message_figure(
            "No data to display.",
            "No cell lines with a gene effect match the current tissue filter.",
        )
    else:
        fig = view.render_figure(data, store.state)

    return fig, status_text(store, derived), pin_details(store.state.pinned_point)


def register_render_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Main figure: store -> figure
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.MAIN_GRAPH, "figure"),
        Output(IDs.Control.STATUS_BAR, "children"),
        Output(IDs.Control.PIN_DETAILS, "children"),
        Input(IDs.Store.VIEW_STORE, "data"),
    )
    def update_main_graph_from_store(store_data: Any):
        try:
            return render_store(store_data)
        except Exception:
            logger.exception("Error in update_main_graph_from_store")
            return (
                _error_figure(
                    "The app hit an unexpected error. "
                    "If this keeps happening, grab the logs and open an issue."
                ),
                dash.no_update,
                dash.no_update,
            )
