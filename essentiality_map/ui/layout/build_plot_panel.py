from __future__ import annotations

import dash_bootstrap_components as dbc

from dash import dcc, html

from essentiality_map.ui.helpers import pin_details
from essentiality_map.ui.ids import IDs


def build_plot_panel() -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Strong("Gene Effect/Tissues Dependency Chart"),
                        html.Small(
                            "No data loaded",
                            id=IDs.Control.STATUS_BAR,
                            className="text-muted ms-auto",
                        ),
                    ],
                    className="d-flex align-items-center",
                ),
                className="p-2",
            ),
            dbc.CardBody(
                [
                    html.Div(id=IDs.Control.FETCH_ERROR),
                    dcc.Loading(
                        id="main-graph-loading",
                        type="default",
                        children=dcc.Graph(
                            id=IDs.Control.MAIN_GRAPH,
                            style={"height": "80vh"},
                            config={"responsive": True},
                        ),
                    ),
                    dbc.Row(
                        [
                            dbc.Col(
                                dbc.Card(
                                    [
                                        dbc.CardHeader(
                                            html.Div(
                                                [
                                                    html.Span("Pinned cell line"),
                                                    dbc.Button(
                                                        "Unpin",
                                                        id=IDs.Control.CLEAR_PIN_BTN,
                                                        color="link",
                                                        size="sm",
                                                        n_clicks=0,
                                                        className="p-0 ms-auto",
                                                    ),
                                                ],
                                                className="d-flex align-items-center",
                                            ),
                                            className="p-2",
                                        ),
                                        dbc.CardBody(
                                            pin_details(None),
                                            id=IDs.Control.PIN_DETAILS,
                                            className="p-2",
                                        ),
                                    ],
                                    className="em-pin-card",
                                ),
                                md=6,
                            ),
                            dbc.Col(
                                html.Div(
                                    [
                                        dbc.Button(
                                            "Download data (CSV)",
                                            id=IDs.Control.DOWNLOAD_DATA_BTN,
                                            color="secondary",
                                            size="sm",
                                            className="mt-2 ms-auto me-2",
                                        ),
                                        dcc.Download(id=IDs.Control.DOWNLOAD_DATA),
                                    ],
                                    className="d-flex justify-content-end align-items-start",
                                ),
                                md=6,
                            ),
                        ],
                        className="mt-2",
                    ),
                ],
                className="em-main-body",
            ),
        ],
        className="em-maincard",
    )
