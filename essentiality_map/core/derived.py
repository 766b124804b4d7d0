from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .models import Category, DataPoint, SearchField
from .view_state import ViewState

ESSENTIALITY_THRESHOLD = -1.0

DEPENDENCY_RGB = (239, 68, 68)
NEUTRAL_RGB = (59, 130, 246)
FADED_RGB = (156, 163, 175)
HIGHLIGHT_DEPENDENCY_RGB = (245, 158, 11)
HIGHLIGHT_NEUTRAL_RGB = (34, 197, 94)

BASE_ALPHA = 0.6
FADED_ALPHA = 0.2
HIGHLIGHT_ALPHA = 0.9

RADIUS_PINNED = 8
RADIUS_HIGHLIGHTED = 6
RADIUS_DEFAULT = 4

BORDER_WIDTH_PINNED = 2
BORDER_WIDTH_DEFAULT = 1


def rgba(rgb: Tuple[int, int, int], alpha: float) -> str:
    r, g, b = rgb
    return f"rgba({r}, {g}, {b}, {alpha})"


def is_dependency(gene_effect: float) -> bool:
    # The threshold itself counts as a dependency.
    return gene_effect <= ESSENTIALITY_THRESHOLD


def is_highlighted(point: DataPoint, search_term: str, search_field: SearchField) -> bool:
    if not search_term:
        return False
    value = search_field.value_of(point)
    return bool(value) and search_term.lower() in value.lower()


def matches_category(point: DataPoint, category: Category, highlighted: bool) -> bool:
    dependency = is_dependency(point.gene_effect)
    if category is Category.NEUTRAL:
        return not dependency
    if category is Category.DEPENDENCY:
        return dependency
    if category is Category.SELECTED_NEUTRAL:
        return highlighted and not dependency
    if category is Category.SELECTED_DEPENDENCY:
        return highlighted and dependency
    raise ValueError(f"Unknown category {category!r}")


@dataclass(frozen=True)
class StyledPoint:
    """A point that survived the tissue filter, with its marker attributes."""

    point: DataPoint
    highlighted: bool
    matched: bool
    pinned: bool
    color: str
    border_color: str
    radius: int
    border_width: int


@dataclass(frozen=True)
class DerivedView:
    """
    Result of applying a ViewState to the base points.

    - points: every point in the selected tissues, styled. Points outside the
      selected categories stay here as faded context.
    - visible: the points that also match the category selection. This is what
      gets counted and exported.
    """

    points: Tuple[StyledPoint, ...] = ()

    @property
    def visible(self) -> Tuple[DataPoint, ...]:
        return tuple(sp.point for sp in self.points if sp.matched)

    @property
    def n_highlighted(self) -> int:
        return sum(1 for sp in self.points if sp.highlighted)


def _fill_rgb(dependency: bool, highlighted: bool, matched: bool) -> Tuple[Tuple[int, int, int], float]:
    if highlighted:
        return (HIGHLIGHT_DEPENDENCY_RGB if dependency else HIGHLIGHT_NEUTRAL_RGB), HIGHLIGHT_ALPHA
    if not matched:
        return FADED_RGB, FADED_ALPHA
    return (DEPENDENCY_RGB if dependency else NEUTRAL_RGB), BASE_ALPHA


def style_point(
        point: DataPoint,
        highlighted: bool,
        matched: bool,
        pinned_id: Optional[str],
) -> StyledPoint:
    rgb, alpha = _fill_rgb(is_dependency(point.gene_effect), highlighted, matched)
    pinned = pinned_id is not None and point.depmap_id == pinned_id

    if pinned:
        radius = RADIUS_PINNED
    elif highlighted:
        radius = RADIUS_HIGHLIGHTED
    else:
        radius = RADIUS_DEFAULT

    return StyledPoint(
        point=point,
        highlighted=highlighted,
        matched=matched,
        pinned=pinned,
        color=rgba(rgb, alpha),
        border_color=rgba(rgb, 1),
        radius=radius,
        border_width=BORDER_WIDTH_PINNED if pinned else BORDER_WIDTH_DEFAULT,
    )


def derive_view(points: Iterable[DataPoint], state: ViewState) -> DerivedView:
    """
    Filter and style the base points for the current ViewState.

    1) tissue: keep points in selected_tissues (all when none selected)
    2) category: mark points matching any selected category (all when none
       selected); unmatched points are kept but faded

    Always works from the full base points, never from a previous result.
    """
    tissues = set(state.selected_tissues)
    categories = state.selected_categories
    pinned_id = state.pinned_point.depmap_id if state.pinned_point is not None else None

    styled = []
    for point in points:
        if tissues and point.tissue not in tissues:
            continue
        highlighted = is_highlighted(point, state.search_term, state.search_field)
        matched = not categories or any(
            matches_category(point, c, highlighted) for c in categories
        )
        styled.append(style_point(point, highlighted, matched, pinned_id))

    return DerivedView(points=tuple(styled))
