from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from essentiality_map.config.model import GlobalConfig
from essentiality_map.ui.ids import IDs


def build_navbar(global_config: GlobalConfig) -> dbc.Navbar:
    """Title on the left, gene search form on the right."""
    search_form = html.Div(
        [
            html.Div("Ensembl Gene ID", className="navbar-gene-title"),
            dbc.InputGroup(
                [
                    dbc.Input(
                        id=IDs.Control.GENE_INPUT,
                        value=global_config.default_gene_id,
                        placeholder="Enter Ensembl Gene ID",
                        type="text",
                        debounce=True,
                    ),
                    dbc.Button(
                        "Fetch Data",
                        id=IDs.Control.FETCH_BTN,
                        color="dark",
                        n_clicks=0,
                    ),
                ],
                size="sm",
                className="mt-1",
            ),
            dcc.Loading(
                type="dot",
                children=html.Small(
                    "",
                    id=IDs.Control.FETCH_STATUS,
                    className="text-muted",
                ),
            ),
        ],
        className="ms-auto navbar-gene-block",
        style={
            "minWidth": "320px",
            "maxWidth": "420px",
            "marginRight": "24px",
        },
    )

    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                html.Div(
                    [
                        html.H2(global_config.ui_title, className="mb-0"),
                        html.Small(
                            global_config.subtitle,
                            className="text-muted",
                            id="navbar-subtitle",
                        ),
                    ],
                    className="d-flex flex-column justify-content-center",
                ),
                search_form,
            ],
        ),
        dark=False,
        className="shadow-sm em-navbar",
    )
