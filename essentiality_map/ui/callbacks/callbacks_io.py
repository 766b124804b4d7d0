from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Tuple

import dash
from dash import Input, Output, State, dcc, exceptions

from essentiality_map.core.derived import derive_view
from essentiality_map.core.view_state import ViewStateStore
from essentiality_map.services.export_service import export_filename, points_to_csv
from essentiality_map.ui.callbacks.callbacks_utils import load_store
from essentiality_map.ui.ids import IDs

if TYPE_CHECKING:
    from essentiality_map.ui.config import AppConfig

logger = logging.getLogger(__name__)


def export_visible(store: ViewStateStore) -> Optional[Tuple[str, str]]:
    """(csv text, file name) for the points currently shown; None before any data."""
    if store.dataset is None:
        return None
    visible = derive_view(store.points, store.state).visible
    return points_to_csv(visible), export_filename(store.gene_id)


def register_io_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Export Logic: currently visible points -> CSV
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DOWNLOAD_DATA, "data"),
        Input(IDs.Control.DOWNLOAD_DATA_BTN, "n_clicks"),
        State(IDs.Store.VIEW_STORE, "data"),
        prevent_initial_call=True,
    )
    def download_current_data(n_clicks, store_data: Any):
        if not n_clicks:
            raise exceptions.PreventUpdate

        export = export_visible(load_store(store_data))
        if export is None:
            raise exceptions.PreventUpdate

        content, filename = export
        return dcc.send_string(content, filename)
