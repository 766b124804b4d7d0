from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Tuple

import dash
from dash import Input, Output, State, exceptions

from essentiality_map.core.exceptions import EssentialityMapError
from essentiality_map.core.models import NormalizedDataset
from essentiality_map.core.normalizer import normalize
from essentiality_map.core.view_state import DEFAULT_SEARCH_FIELD, ViewStateStore
from essentiality_map.services.query_client import validate_gene_id
from essentiality_map.ui.callbacks.callbacks_utils import load_store
from essentiality_map.ui.helpers import error_alert
from essentiality_map.ui.ids import IDs

if TYPE_CHECKING:
    from essentiality_map.ui.config import AppConfig

logger = logging.getLogger(__name__)

GENERIC_FETCH_ERROR = "An error occurred while fetching data."


def begin_fetch(store: ViewStateStore, gene_id: Optional[str]) -> dict:
    """
    Validate the identifier and reset the store for a new gene.

    :return: the pending-fetch token for run_fetch
    :raises ValidationError: blank identifier; the store is left untouched
    """
    gene_id = validate_gene_id(gene_id)
    generation = store.reset_for_new_fetch(gene_id)
    return {"gene_id": gene_id, "generation": generation}


def run_fetch(ctx: AppConfig, pending: dict) -> dict:
    """
    Fetch and normalise the pending gene without touching any store.

    :return: the pending token plus either "dataset" (dict) or "error" (message)
    """
    result = {"gene_id": pending["gene_id"], "generation": pending["generation"], "dataset": None, "error": None}
    try:
        records = ctx.query_client.fetch_essentiality(pending["gene_id"])
        result["dataset"] = normalize(records).to_dict()
    except EssentialityMapError as e:
        result["error"] = str(e) or GENERIC_FETCH_ERROR
    except Exception:
        logger.exception("Unexpected error while fetching", extra={"pending": pending})
        result["error"] = GENERIC_FETCH_ERROR
    return result


def apply_fetch_result(store: ViewStateStore, result: dict) -> Tuple[bool, Optional[str]]:
    """
    Install a run_fetch result into the store as it is now. Filters changed
    while the request was in flight are kept; only the dataset (or the
    failure) is written.

    :return: (committed, error message). committed is False for stale results.
    """
    generation = int(result["generation"])
    error = result.get("error")
    if error:
        return store.fail_fetch(generation, error), error
    dataset = NormalizedDataset.from_dict(result["dataset"])
    return store.commit_fetch(generation, dataset), None


def register_fetch_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # 1. Submit: validate, reset every filter, publish pending fetch
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.VIEW_STORE, "data", allow_duplicate=True),
        Output(IDs.Store.PENDING_FETCH, "data"),
        Output(IDs.Control.FETCH_ERROR, "children", allow_duplicate=True),
        Output(IDs.Control.TISSUE_SELECT, "value", allow_duplicate=True),
        Output(IDs.Control.SEARCH_INPUT, "value"),
        Output(IDs.Control.SEARCH_FIELD_SELECT, "value"),
        Output(IDs.Control.CATEGORY_CHECKLIST, "value"),
        Input(IDs.Control.FETCH_BTN, "n_clicks"),
        Input(IDs.Control.GENE_INPUT, "n_submit"),
        State(IDs.Control.GENE_INPUT, "value"),
        State(IDs.Store.VIEW_STORE, "data"),
        # Runs on page load too, so the default gene is shown straight away.
        prevent_initial_call="initial_duplicate",
    )
    def submit_gene(_n_clicks, _n_submit, gene_id: Optional[str], store_data: Any):
        store = load_store(store_data)
        try:
            pending = begin_fetch(store, gene_id)
        except EssentialityMapError as e:
            logger.info("fetch_rejected", extra={"gene_id": gene_id, "reason": str(e)})
            return (
                dash.no_update,
                dash.no_update,
                error_alert(str(e)),
                dash.no_update,
                dash.no_update,
                dash.no_update,
                dash.no_update,
            )

        logger.info("fetch_begin", extra=pending)
        return (
            store.to_dict(),
            pending,
            None,
            [],
            "",
            DEFAULT_SEARCH_FIELD.value,
            [],
        )

    # ---------------------------------------------------------
    # 2. Run the pending fetch (the only blocking call)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.FETCH_RESULT, "data"),
        Output(IDs.Control.FETCH_STATUS, "children"),
        Input(IDs.Store.PENDING_FETCH, "data"),
        prevent_initial_call=True,
    )
    def fetch_pending(pending: Optional[dict]):
        if not pending or not pending.get("gene_id"):
            raise exceptions.PreventUpdate

        result = run_fetch(ctx, pending)
        if result["error"]:
            return result, f"Failed to load {pending['gene_id']}"
        return result, f"Loaded {pending['gene_id']}"

    # ---------------------------------------------------------
    # 3. Commit into the latest store if still the latest fetch
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.VIEW_STORE, "data", allow_duplicate=True),
        Output(IDs.Control.FETCH_ERROR, "children", allow_duplicate=True),
        Input(IDs.Store.FETCH_RESULT, "data"),
        State(IDs.Store.VIEW_STORE, "data"),
        prevent_initial_call=True,
    )
    def commit_result(result: Optional[dict], store_data: Any):
        if not result:
            raise exceptions.PreventUpdate

        store = load_store(store_data)
        committed, error = apply_fetch_result(store, result)
        if not committed:
            raise exceptions.PreventUpdate

        return store.to_dict(), error_alert(error)
