from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple


@dataclass(frozen=True)
class ScreenResult:
    """
    One DepMap screen: the effect of knocking out the gene in one cell line.
    """
    depmap_id: str
    cell_line_name: str
    disease_from_source: str
    gene_effect: Optional[float] = None
    expression: Optional[float] = None


@dataclass(frozen=True)
class ScreeningRecord:
    """
    All screens reported under one tissue by the upstream API.
    """
    tissue_name: str
    screens: Tuple[ScreenResult, ...] = ()


@dataclass(frozen=True)
class DataPoint:
    """
    A single plotted cell line.

    - x: gene effect (lower is more essential)
    - y: index of the tissue on the tissue axis
    - depmap_id: identity key used for pinning and export rows
    """
    x: float
    y: int
    tissue: str
    cell_line: str
    depmap_id: str
    disease: str
    expression: Optional[float] = None

    @property
    def gene_effect(self) -> float:
        return self.x

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> DataPoint:
        expression = data.get("expression")
        return cls(
            x=float(data["x"]),
            y=int(data["y"]),
            tissue=str(data.get("tissue", "")),
            cell_line=str(data.get("cell_line", "")),
            depmap_id=str(data.get("depmap_id", "")),
            disease=str(data.get("disease", "")),
            expression=None if expression is None else float(expression),
        )


@dataclass(frozen=True)
class NormalizedDataset:
    """
    Output of the normaliser for a single fetch.

    The tissue order fixes every point's y position and must not change for the
    lifetime of the dataset, so the whole object is frozen.
    """
    tissues: Tuple[str, ...] = ()
    points: Tuple[DataPoint, ...] = ()

    def find(self, depmap_id: str) -> Optional[DataPoint]:
        return next((p for p in self.points if p.depmap_id == depmap_id), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tissues": list(self.tissues),
            "points": [p.to_dict() for p in self.points],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> NormalizedDataset:
        return cls(
            tissues=tuple(data.get("tissues", [])),
            points=tuple(DataPoint.from_dict(p) for p in data.get("points", [])),
        )


def format_number(value: float) -> str:
    """Shortest text for a number, without a trailing '.0' on whole values."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _optional_number(value: Optional[float]) -> str:
    return "" if value is None else format_number(value)


class SearchField(str, Enum):
    """Fields a user can search on. Values match the upstream field names."""

    DEPMAP_ID = "depmapId"
    CELL_LINE_NAME = "cellLineName"
    DISEASE_FROM_SOURCE = "diseaseFromSource"
    GENE_EFFECT = "geneEffect"
    EXPRESSION = "expression"

    @property
    def label(self) -> str:
        return _SEARCH_FIELD_LABELS[self]

    def value_of(self, point: DataPoint) -> str:
        """Text of this field on the given point; empty when the value is absent."""
        return _SEARCH_FIELD_ACCESSORS[self](point)


_SEARCH_FIELD_ACCESSORS: Dict[SearchField, Callable[[DataPoint], str]] = {
    SearchField.DEPMAP_ID: lambda p: p.depmap_id,
    SearchField.CELL_LINE_NAME: lambda p: p.cell_line,
    SearchField.DISEASE_FROM_SOURCE: lambda p: p.disease,
    SearchField.GENE_EFFECT: lambda p: format_number(p.gene_effect),
    SearchField.EXPRESSION: lambda p: _optional_number(p.expression),
}

_SEARCH_FIELD_LABELS: Dict[SearchField, str] = {
    SearchField.DEPMAP_ID: "DepMap ID",
    SearchField.CELL_LINE_NAME: "Cell Line",
    SearchField.DISEASE_FROM_SOURCE: "Disease",
    SearchField.GENE_EFFECT: "Gene Effect",
    SearchField.EXPRESSION: "Expression",
}


class Category(str, Enum):
    """Legend categories a user can toggle to narrow the visible points."""

    NEUTRAL = "Neutral"
    DEPENDENCY = "Dependency"
    SELECTED_NEUTRAL = "SelectedNeutral"
    SELECTED_DEPENDENCY = "SelectedDependency"

    @property
    def label(self) -> str:
        return {
            Category.NEUTRAL: "Neutral",
            Category.DEPENDENCY: "Dependency",
            Category.SELECTED_NEUTRAL: "Selected neutral",
            Category.SELECTED_DEPENDENCY: "Selected dependency",
        }[self]
