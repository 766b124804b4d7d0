from __future__ import annotations

import pytest

from essentiality_map.core.derived import (
    FADED_RGB,
    HIGHLIGHT_DEPENDENCY_RGB,
    HIGHLIGHT_NEUTRAL_RGB,
    RADIUS_DEFAULT,
    RADIUS_HIGHLIGHTED,
    RADIUS_PINNED,
    derive_view,
    is_highlighted,
    matches_category,
)
from essentiality_map.core.models import Category, DataPoint, SearchField
from essentiality_map.core.view_state import ViewState


def _point(x: float, tissue: str = "Lung", cell_line: str = "A549", depmap_id: str = "ACH-1",
           expression=None) -> DataPoint:
    return DataPoint(
        x=x,
        y=0 if tissue == "Lung" else 1,
        tissue=tissue,
        cell_line=cell_line,
        depmap_id=depmap_id,
        disease="Disease",
        expression=expression,
    )


def _make_points():
    return (
        _point(-2.0, "Lung", "HELA-1", "ACH-1"),
        _point(0.5, "Liver", "A549", "ACH-2", expression=1.25),
    )


def test_empty_selections_return_full_dataset():
    points = _make_points()
    derived = derive_view(points, ViewState())

    assert derived.visible == points
    assert [sp.point for sp in derived.points] == list(points)


def test_tissue_filter_keeps_only_selected():
    derived = derive_view(_make_points(), ViewState(selected_tissues=("Liver",)))

    assert len(derived.visible) == 1
    assert derived.visible[0].gene_effect == 0.5
    assert derived.visible[0].tissue == "Liver"
    assert len(derived.points) == 1


def test_search_highlights_case_insensitive_substring():
    state = ViewState(search_term="hela", search_field=SearchField.CELL_LINE_NAME)
    hela, a549 = _make_points()

    assert is_highlighted(hela, state.search_term, state.search_field)
    assert not is_highlighted(a549, state.search_term, state.search_field)


def test_empty_search_term_highlights_nothing():
    for p in _make_points():
        assert not is_highlighted(p, "", SearchField.CELL_LINE_NAME)


def test_search_on_numeric_fields():
    p = _point(-1.5, expression=None)
    assert is_highlighted(p, "-1.5", SearchField.GENE_EFFECT)
    # missing expression never matches
    assert not is_highlighted(p, "N", SearchField.EXPRESSION)
    assert is_highlighted(_point(0.1, expression=2.75), "2.7", SearchField.EXPRESSION)


@pytest.mark.parametrize("x", [-3.0, -1.0, -0.999, 0.0, 2.5])
def test_dependency_and_neutral_are_complementary(x):
    p = _point(x)
    assert matches_category(p, Category.DEPENDENCY, False) != matches_category(p, Category.NEUTRAL, False)


def test_threshold_counts_as_dependency():
    p = _point(-1.0)
    assert matches_category(p, Category.DEPENDENCY, False)
    assert not matches_category(p, Category.NEUTRAL, False)


def test_selected_categories_need_highlight():
    dep = _point(-2.0)
    neu = _point(0.3)
    assert not matches_category(dep, Category.SELECTED_DEPENDENCY, False)
    assert matches_category(dep, Category.SELECTED_DEPENDENCY, True)
    assert not matches_category(dep, Category.SELECTED_NEUTRAL, True)
    assert matches_category(neu, Category.SELECTED_NEUTRAL, True)


def test_category_filter_narrows_visible_and_fades_the_rest():
    state = ViewState(selected_categories=(Category.DEPENDENCY,))
    derived = derive_view(_make_points(), state)

    assert [p.depmap_id for p in derived.visible] == ["ACH-1"]
    # the neutral point stays drawn, faded
    faded = [sp for sp in derived.points if not sp.matched]
    assert len(faded) == 1
    assert faded[0].point.depmap_id == "ACH-2"
    assert faded[0].color == "rgba({}, {}, {}, 0.2)".format(*FADED_RGB)


def test_base_colours():
    derived = derive_view(_make_points(), ViewState())
    dep, neu = derived.points
    assert dep.color == "rgba(239, 68, 68, 0.6)"
    assert dep.border_color == "rgba(239, 68, 68, 1)"
    assert neu.color == "rgba(59, 130, 246, 0.6)"


def test_highlight_colour_overrides_fade():
    state = ViewState(
        search_term="A549",
        search_field=SearchField.CELL_LINE_NAME,
        selected_categories=(Category.DEPENDENCY,),
    )
    derived = derive_view(_make_points(), state)
    neu = next(sp for sp in derived.points if sp.point.depmap_id == "ACH-2")

    assert neu.highlighted
    assert not neu.matched
    assert neu.color == "rgba({}, {}, {}, 0.9)".format(*HIGHLIGHT_NEUTRAL_RGB)

    dep_state = ViewState(search_term="hela", search_field=SearchField.CELL_LINE_NAME)
    dep = derive_view(_make_points(), dep_state).points[0]
    assert dep.color == "rgba({}, {}, {}, 0.9)".format(*HIGHLIGHT_DEPENDENCY_RGB)


def test_radius_pin_beats_highlight():
    points = _make_points()
    state = ViewState(
        search_term="ACH",
        search_field=SearchField.DEPMAP_ID,
        pinned_point=points[0],
    )
    pinned, other = derive_view(points, state).points

    assert pinned.pinned and pinned.radius == RADIUS_PINNED
    assert pinned.border_width == 2
    assert other.radius == RADIUS_HIGHLIGHTED
    assert other.border_width == 1

    plain = derive_view(points, ViewState()).points[1]
    assert plain.radius == RADIUS_DEFAULT


def test_empty_dataset_gives_empty_view():
    derived = derive_view((), ViewState(selected_tissues=("Lung",)))
    assert derived.points == ()
    assert derived.visible == ()
