from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from .models import Category, DataPoint, NormalizedDataset, SearchField

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_FIELD = SearchField.CELL_LINE_NAME


@dataclass(frozen=True)
class ViewState:
    """
    Represents the current user selection/filters on the chart.

    Fields:

    - selected_tissues: tissues to keep; empty keeps all. Newest first.
    - search_term: text to highlight; empty highlights nothing.
    - search_field: which point field the search term is matched against.
    - selected_categories: legend categories to keep; empty keeps all.
    - pinned_point: point the user clicked, drawn larger.

    Selections are ordered tuples so display order survives a round trip
    through a dcc.Store; they never contain duplicates.
    """

    selected_tissues: Tuple[str, ...] = ()
    search_term: str = ""
    search_field: SearchField = DEFAULT_SEARCH_FIELD
    selected_categories: Tuple[Category, ...] = ()
    pinned_point: Optional[DataPoint] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "selected_tissues": list(self.selected_tissues),
            "search_term": self.search_term,
            "search_field": self.search_field.value,
            "selected_categories": [c.value for c in self.selected_categories],
            "pinned_point": None if self.pinned_point is None else self.pinned_point.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ViewState:
        pinned = data.get("pinned_point")
        return cls(
            selected_tissues=tuple(dict.fromkeys(data.get("selected_tissues", []))),
            search_term=str(data.get("search_term") or ""),
            search_field=SearchField(data.get("search_field", DEFAULT_SEARCH_FIELD.value)),
            selected_categories=tuple(
                dict.fromkeys(Category(c) for c in data.get("selected_categories", []))
            ),
            pinned_point=DataPoint.from_dict(pinned) if pinned else None,
        )


@dataclass
class ViewStateStore:
    """
    Owns the dataset of the current gene and the ViewState over it.

    Every mutation replaces the ViewState; the dataset is never touched by
    filtering, so derived views are always recomputed from the full base points.

    The generation counter is bumped on every new fetch. A fetch result, data or
    failure, is only installed if it carries the latest generation, so a slow
    response for an older gene cannot overwrite a newer one.

    fetch_error is set when the latest fetch failed; the dataset stays empty.
    """

    gene_id: Optional[str] = None
    dataset: Optional[NormalizedDataset] = None
    state: ViewState = field(default_factory=ViewState)
    generation: int = 0
    fetch_error: Optional[str] = None

    @property
    def loading(self) -> bool:
        return self.gene_id is not None and self.dataset is None and self.fetch_error is None

    @property
    def points(self) -> Tuple[DataPoint, ...]:
        return self.dataset.points if self.dataset is not None else ()

    @property
    def tissues(self) -> Tuple[str, ...]:
        return self.dataset.tissues if self.dataset is not None else ()

    # ------------------------------------------------------------------
    # Filter mutations
    # ------------------------------------------------------------------
    def set_tissue_filter(self, tissue: str) -> None:
        """Toggle one tissue; newly selected tissues go to the front."""
        current = self.state.selected_tissues
        if tissue in current:
            selected = tuple(t for t in current if t != tissue)
        else:
            selected = (tissue,) + current
        self.state = replace(self.state, selected_tissues=selected)

    def clear_tissue_filters(self) -> None:
        self.state = replace(self.state, selected_tissues=())

    def set_search(self, term: Optional[str], search_field: SearchField | str) -> None:
        self.state = replace(
            self.state,
            search_term=term or "",
            search_field=SearchField(search_field),
        )

    def toggle_category(self, category: Category | str) -> None:
        category = Category(category)
        current = self.state.selected_categories
        if category in current:
            selected = tuple(c for c in current if c != category)
        else:
            selected = current + (category,)
        self.state = replace(self.state, selected_categories=selected)

    def set_pinned_point(self, point: Optional[DataPoint]) -> None:
        self.state = replace(self.state, pinned_point=point)

    # ------------------------------------------------------------------
    # Fetch lifecycle
    # ------------------------------------------------------------------
    def reset_for_new_fetch(self, gene_id: Optional[str] = None) -> int:
        """
        Drop the dataset and every filter before a new gene is loaded.

        :return: the generation the new fetch must present to commit_fetch
        """
        self.generation += 1
        self.gene_id = gene_id
        self.dataset = None
        self.fetch_error = None
        self.state = ViewState()
        return self.generation

    def commit_fetch(self, generation: int, dataset: NormalizedDataset) -> bool:
        """
        Install a fetched dataset if it belongs to the latest fetch.

        :return: False when the result is stale and was discarded
        """
        if generation != self.generation:
            logger.info(
                "fetch_stale",
                extra={"generation": generation, "latest": self.generation, "gene_id": self.gene_id},
            )
            return False
        self.dataset = dataset
        self.fetch_error = None
        return True

    def fail_fetch(self, generation: int, message: str) -> bool:
        """
        Record that the fetch of this generation failed.

        :return: False when the failure belongs to a superseded fetch
        """
        if generation != self.generation:
            logger.info(
                "fetch_stale",
                extra={"generation": generation, "latest": self.generation, "gene_id": self.gene_id},
            )
            return False
        self.dataset = None
        self.fetch_error = message
        return True

    # ------------------------------------------------------------------
    # dcc.Store round trip
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "gene_id": self.gene_id,
            "generation": self.generation,
            "dataset": None if self.dataset is None else self.dataset.to_dict(),
            "fetch_error": self.fetch_error,
            "state": self.state.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> ViewStateStore:
        if not data:
            return cls()
        dataset = data.get("dataset")
        return cls(
            gene_id=data.get("gene_id"),
            dataset=NormalizedDataset.from_dict(dataset) if dataset else None,
            state=ViewState.from_dict(data.get("state") or {}),
            generation=int(data.get("generation", 0)),
            fetch_error=data.get("fetch_error") or None,
        )

