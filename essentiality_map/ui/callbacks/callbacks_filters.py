from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List, Optional

import dash
from dash import ALL, Input, Output, State, exceptions

from essentiality_map.core.view_state import ViewStateStore
from essentiality_map.ui.callbacks.callbacks_utils import diff_selection, load_store
from essentiality_map.ui.helpers import get_tissue_options, tissue_chips
from essentiality_map.ui.ids import IDs

if TYPE_CHECKING:
    from essentiality_map.ui.config import AppConfig

logger = logging.getLogger(__name__)


def apply_tissue_selection(store: ViewStateStore, requested: Optional[List[str]]) -> bool:
    """
    Bring the store in line with a full dropdown selection by toggling the
    difference. Returns False when nothing changed.
    """
    added, removed = diff_selection(store.state.selected_tissues, requested)
    # Toggle in reverse so the first new dropdown entry ends up in front.
    for tissue in reversed(added):
        store.set_tissue_filter(tissue)
    for tissue in removed:
        store.set_tissue_filter(tissue)
    return bool(added or removed)


def apply_chip_removal(store: ViewStateStore, tissue: Optional[str]) -> bool:
    """Drop one tissue from the filter; False if it was not selected."""
    if tissue not in store.state.selected_tissues:
        return False
    store.set_tissue_filter(tissue)
    return True


def apply_clear_tissues(store: ViewStateStore) -> bool:
    if not store.state.selected_tissues:
        return False
    store.clear_tissue_filters()
    return True


def apply_search(store: ViewStateStore, term: Optional[str], search_field: Optional[str]) -> bool:
    term = term or ""
    search_field = search_field or store.state.search_field.value
    if term == store.state.search_term and search_field == store.state.search_field.value:
        return False
    store.set_search(term, search_field)
    return True


def apply_category_selection(store: ViewStateStore, requested: Optional[List[str]]) -> bool:
    current = [c.value for c in store.state.selected_categories]
    added, removed = diff_selection(current, requested)
    for category in added + removed:
        store.toggle_category(category)
    return bool(added or removed)


def pinned_from_click(store: ViewStateStore, click_data: Optional[dict]):
    """Resolve a plotly clickData payload to a point of the current dataset."""
    if store.dataset is None or not click_data:
        return None
    points = click_data.get("points") or []
    if not points:
        return None
    customdata = points[0].get("customdata") or []
    if len(customdata) < 5:
        return None
    return store.dataset.find(str(customdata[4]))


def register_filter_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Tissue menu options + chips follow the store
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.TISSUE_SELECT, "options"),
        Output(IDs.Control.TISSUE_CHIPS, "children"),
        Input(IDs.Store.VIEW_STORE, "data"),
    )
    def update_tissue_controls(store_data: Any):
        store = load_store(store_data)
        return get_tissue_options(store.tissues), tissue_chips(store.state.selected_tissues)

    # ---------------------------------------------------------
    # Tissue filter: dropdown, chip removal, clear button
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.VIEW_STORE, "data", allow_duplicate=True),
        Output(IDs.Control.TISSUE_SELECT, "value", allow_duplicate=True),
        Input(IDs.Control.TISSUE_SELECT, "value"),
        Input({"type": IDs.Pattern.TISSUE_CHIP_REMOVE, "index": ALL}, "n_clicks"),
        Input(IDs.Control.CLEAR_TISSUES_BTN, "n_clicks"),
        State(IDs.Store.VIEW_STORE, "data"),
        prevent_initial_call=True,
    )
    def update_tissue_filter(selected, _chip_clicks, _clear_clicks, store_data: Any):
        store = load_store(store_data)
        if store.dataset is None:
            raise exceptions.PreventUpdate

        triggered_id = dash.ctx.triggered_id

        if triggered_id == IDs.Control.CLEAR_TISSUES_BTN:
            if not apply_clear_tissues(store):
                raise exceptions.PreventUpdate

        elif isinstance(triggered_id, dict) and triggered_id.get("type") == IDs.Pattern.TISSUE_CHIP_REMOVE:
            # Chips are re-rendered with n_clicks=0; only a real click counts.
            if not dash.ctx.triggered or not dash.ctx.triggered[0].get("value"):
                raise exceptions.PreventUpdate
            if not apply_chip_removal(store, triggered_id.get("index")):
                raise exceptions.PreventUpdate

        else:
            if not apply_tissue_selection(store, selected):
                raise exceptions.PreventUpdate

        return store.to_dict(), list(store.state.selected_tissues)

    # ---------------------------------------------------------
    # Search term / field
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.VIEW_STORE, "data", allow_duplicate=True),
        Input(IDs.Control.SEARCH_INPUT, "value"),
        Input(IDs.Control.SEARCH_FIELD_SELECT, "value"),
        State(IDs.Store.VIEW_STORE, "data"),
        prevent_initial_call=True,
    )
    def update_search(term: Optional[str], field: Optional[str], store_data: Any):
        store = load_store(store_data)
        if not apply_search(store, term, field):
            raise exceptions.PreventUpdate
        return store.to_dict()

    # ---------------------------------------------------------
    # Category legend
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.VIEW_STORE, "data", allow_duplicate=True),
        Input(IDs.Control.CATEGORY_CHECKLIST, "value"),
        State(IDs.Store.VIEW_STORE, "data"),
        prevent_initial_call=True,
    )
    def update_categories(selected: Optional[List[str]], store_data: Any):
        store = load_store(store_data)
        if not apply_category_selection(store, selected):
            raise exceptions.PreventUpdate
        return store.to_dict()

    # ---------------------------------------------------------
    # Pin: click a point, or unpin
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.VIEW_STORE, "data", allow_duplicate=True),
        Input(IDs.Control.MAIN_GRAPH, "clickData"),
        Input(IDs.Control.CLEAR_PIN_BTN, "n_clicks"),
        State(IDs.Store.VIEW_STORE, "data"),
        prevent_initial_call=True,
    )
    def update_pinned_point(click_data: Optional[dict], _clear_clicks, store_data: Any):
        store = load_store(store_data)

        if dash.ctx.triggered_id == IDs.Control.CLEAR_PIN_BTN:
            if store.state.pinned_point is None:
                raise exceptions.PreventUpdate
            store.set_pinned_point(None)
            return store.to_dict()

        point = pinned_from_click(store, click_data)
        if point is None or point == store.state.pinned_point:
            raise exceptions.PreventUpdate

        logger.debug("pin_point", extra={"depmap_id": point.depmap_id})
        store.set_pinned_point(point)
        return store.to_dict()
