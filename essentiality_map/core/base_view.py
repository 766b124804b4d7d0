from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import plotly.graph_objs as go

from .models import NormalizedDataset
from .view_state import ViewState


class BaseView(ABC):
    """
    Abstract base class for chart views.

    Defines the contract that every view in the app must follow
    - expose an 'id' - used internally
    - expose a 'label' - used for UI/human-readable applications
    - implement 'compute_data' - used to compute the data given the current ViewState
    - implement 'render_figure' - used to render the figure using Plotly
    """

    id: str = None
    label: str = None

    def __init__(self, dataset: NormalizedDataset):
        self.dataset = dataset

    @abstractmethod
    def compute_data(self, state: ViewState) -> Any:
        """
        Compute the data given the current ViewState
        :param state: the current {@link ViewState} - what filters the user has toggled for
        :return: data: a dataframe containing the data as per the ViewState
        """
        raise NotImplementedError()

    @abstractmethod
    def render_figure(self, data: Any, state: ViewState) -> go.Figure:
        """
        Render the figure given the computed data
        :param data: the data provided by {@link compute_data()}
        :param state: the current {@link ViewState}
        :return: the Plotly figure for these parameters
        """
        raise NotImplementedError()

    @staticmethod
    def empty_figure(message: str) -> go.Figure:
        """
        Standardised 'no data' figure used by all views.
        """
        fig = go.Figure()
        fig.update_layout(
            title=message,
            xaxis={"visible": False},
            yaxis={"visible": False},
        )
        return fig
