from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from essentiality_map.core.view_state import DEFAULT_SEARCH_FIELD
from essentiality_map.ui.helpers import get_category_options, get_search_field_options
from essentiality_map.ui.ids import IDs


def build_filter_panel() -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader("Filters", className="fw-semibold"),
            dbc.CardBody(
                [
                    html.Div(
                        id="search-filter-container",
                        children=[
                            html.Label("Search", className="form-label"),
                            dbc.Input(
                                id=IDs.Control.SEARCH_INPUT,
                                type="search",
                                value="",
                                placeholder="Highlight matching cell lines",
                                className="mb-2",
                            ),
                            dcc.Dropdown(
                                id=IDs.Control.SEARCH_FIELD_SELECT,
                                options=get_search_field_options(),
                                value=DEFAULT_SEARCH_FIELD.value,
                                clearable=False,
                                className="mb-3",
                            ),
                        ],
                    ),
                    html.Div(
                        id="tissue-filter-container",
                        children=[
                            html.Label("Filter tissues", className="form-label"),
                            dcc.Dropdown(
                                id=IDs.Control.TISSUE_SELECT,
                                options=[],
                                value=[],
                                multi=True,
                                placeholder="All tissues",
                                className="mb-2",
                            ),
                            html.Div(id=IDs.Control.TISSUE_CHIPS, className="mb-2"),
                            dbc.Button(
                                "Clear tissues",
                                id=IDs.Control.CLEAR_TISSUES_BTN,
                                color="link",
                                size="sm",
                                n_clicks=0,
                                className="p-0 mb-3",
                            ),
                        ],
                    ),
                    html.Div(
                        id="category-filter-container",
                        children=[
                            html.Label("Categories", className="form-label"),
                            dbc.Checklist(
                                id=IDs.Control.CATEGORY_CHECKLIST,
                                options=get_category_options(),
                                value=[],
                                switch=True,
                            ),
                            html.Small(
                                "Points outside the checked categories are greyed out.",
                                className="text-muted",
                            ),
                        ],
                    ),
                ]
            ),
        ],
        className="em-sidebar",
        # Side panel can be dragged wider
        style={"resize": "horizontal", "overflow": "auto", "minWidth": "240px"},
    )
