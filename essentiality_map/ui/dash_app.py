from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import dash_bootstrap_components as dbc
from dash import Dash

from .config import AppConfig
from essentiality_map.config.loader import load_global_config
from essentiality_map.services.query_client import OpenTargetsClient
from essentiality_map.ui.layout.build_layout import build_layout
from essentiality_map.ui.callbacks.callbacks_fetch import register_fetch_callbacks
from essentiality_map.ui.callbacks.callbacks_filters import register_filter_callbacks
from essentiality_map.ui.callbacks.callbacks_io import register_io_callbacks
from essentiality_map.ui.callbacks.callbacks_render import register_render_callbacks

logger = logging.getLogger(__name__)


def create_dash_app(
        config_root: Path | str = Path("config"),
        query_client: Optional[OpenTargetsClient] = None,
) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    global_config = load_global_config(config_root)

    # 2) Initialize Service Layer
    if query_client is None:
        query_client = OpenTargetsClient(
            api_url=global_config.api_url,
            timeout=global_config.request_timeout,
        )

    # 3) App Context
    ctx = AppConfig(
        config_root=config_root,
        global_config=global_config,
        query_client=query_client,
    )
    ctx.validate()

    # Resolve assets relative to this file so styles.css is found from any cwd.
    assets_path = Path(__file__).parent / "assets"

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        assets_folder=str(assets_path),
    )

    app.title = global_config.ui_title

    app.layout = build_layout(ctx)

    # Register callbacks
    register_fetch_callbacks(app, ctx)
    register_filter_callbacks(app, ctx)
    register_render_callbacks(app, ctx)
    register_io_callbacks(app, ctx)

    logger.info(
        "app_created",
        extra={"config_root": str(config_root), "api_url": global_config.api_url},
    )
    return app
