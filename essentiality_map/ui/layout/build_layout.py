from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc

from essentiality_map.ui.ids import IDs
from essentiality_map.ui.layout.build_filter_panel import build_filter_panel
from essentiality_map.ui.layout.build_navbar import build_navbar
from essentiality_map.ui.layout.build_plot_panel import build_plot_panel

if TYPE_CHECKING:
    from essentiality_map.ui.config import AppConfig


def build_layout(ctx: AppConfig):
    navbar = build_navbar(ctx.global_config)
    filter_panel = build_filter_panel()
    plot_panel = build_plot_panel()

    return dbc.Container(
        fluid=True,
        className="em-root",
        children=[
            navbar,

            # Per-tab state; gone on reload
            dcc.Store(id=IDs.Store.VIEW_STORE, storage_type="memory"),
            dcc.Store(id=IDs.Store.PENDING_FETCH, storage_type="memory"),
            dcc.Store(id=IDs.Store.FETCH_RESULT, storage_type="memory"),

            dbc.Row(
                [
                    dbc.Col(
                        filter_panel,
                        md=3,
                        className="mt-3",
                    ),
                    dbc.Col(
                        plot_panel,
                        md=9,
                        className="mt-3",
                    ),
                ],
                className="gx-3",
            ),
        ],
    )
