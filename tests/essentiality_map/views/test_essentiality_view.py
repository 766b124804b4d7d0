import pandas as pd
import plotly.graph_objs as go

from essentiality_map.core.derived import ESSENTIALITY_THRESHOLD, derive_view
from essentiality_map.core.models import Category, DataPoint, NormalizedDataset, SearchField
from essentiality_map.core.view_state import ViewState
from essentiality_map.views.essentiality_view import EssentialityView


def _make_dataset() -> NormalizedDataset:
    """
    Tiny dataset with:
    - 2 tissues (Lung, Liver) in first-seen order
    - 1 dependency point in Lung, 1 neutral point in Liver
    """
    return NormalizedDataset(
        tissues=("Lung", "Liver"),
        points=(
            DataPoint(x=-2.0, y=0, tissue="Lung", cell_line="HELA-1", depmap_id="ACH-1", disease="NSCLC"),
            DataPoint(x=0.5, y=1, tissue="Liver", cell_line="A549", depmap_id="ACH-2", disease="HCC",
                      expression=1.234),
        ),
    )


def test_compute_data_basic():
    view = EssentialityView(_make_dataset())
    data = view.compute_data(ViewState())

    assert isinstance(data, pd.DataFrame)
    assert list(data["depmap_id"]) == ["ACH-1", "ACH-2"]
    assert list(data["y"]) == [0, 1]
    assert list(data["size"]) == [8, 8]
    assert list(data["expression_text"]) == ["N/A", "1.23"]


def test_compute_data_tissue_filter():
    view = EssentialityView(_make_dataset())
    data = view.compute_data(ViewState(selected_tissues=("Liver",)))

    assert list(data["tissue"]) == ["Liver"]
    assert list(data["x"]) == [0.5]


def test_compute_data_highlight_and_fade():
    view = EssentialityView(_make_dataset())
    state = ViewState(
        search_term="HELA",
        search_field=SearchField.CELL_LINE_NAME,
        selected_categories=(Category.SELECTED_DEPENDENCY,),
    )
    data = view.compute_data(state).set_index("depmap_id")

    assert bool(data.loc["ACH-1", "highlighted"])
    assert bool(data.loc["ACH-1", "matched"])
    assert not bool(data.loc["ACH-2", "highlighted"])
    assert not bool(data.loc["ACH-2", "matched"])
    assert data.loc["ACH-1", "size"] == 12


def test_render_figure_axis_and_threshold():
    ds = _make_dataset()
    view = EssentialityView(ds)
    state = ViewState()
    fig = view.render_figure(view.compute_data(state), state)

    assert isinstance(fig, go.Figure)
    assert len(fig.data) == 1
    assert fig.data[0].type == "scatter"
    assert list(fig.layout.yaxis.ticktext) == ["Lung", "Liver"]
    assert list(fig.layout.yaxis.tickvals) == [0, 1]
    assert fig.layout.xaxis.title.text == "Gene Effect"

    line = fig.layout.shapes[0]
    assert line.x0 == line.x1 == ESSENTIALITY_THRESHOLD
    assert line.y0 == -0.5
    assert line.y1 == len(ds.tissues) - 0.5


def test_render_figure_empty():
    view = EssentialityView(_make_dataset())
    state = ViewState()
    fig = view.render_figure(pd.DataFrame(), state)

    # Should still return a valid Figure (BaseView.empty_figure)
    assert isinstance(fig, go.Figure)
    assert len(fig.data) == 0


def test_frame_from_derived_matches_compute_data():
    ds = _make_dataset()
    view = EssentialityView(ds)
    state = ViewState(search_term="HELA")

    derived = derive_view(ds.points, state)

    pd.testing.assert_frame_equal(view.frame_from_derived(derived), view.compute_data(state))
