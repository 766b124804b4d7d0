from __future__ import annotations

from essentiality_map.core.models import ScreeningRecord, ScreenResult
from essentiality_map.core.normalizer import normalize, unique_tissues


def _screen(depmap_id: str, gene_effect, cell_line: str = "CL", expression=None) -> ScreenResult:
    return ScreenResult(
        depmap_id=depmap_id,
        cell_line_name=cell_line,
        disease_from_source="Disease",
        gene_effect=gene_effect,
        expression=expression,
    )


def _make_records():
    """
    Three tissues, Lung repeated later in the response:
    - Lung: 2 screens, one without a gene effect
    - Liver: 1 screen
    - Skin: only a screen without a gene effect
    - Lung (again): 1 screen
    """
    return [
        ScreeningRecord("Lung", (_screen("ACH-1", -1.5, "A549"), _screen("ACH-2", None))),
        ScreeningRecord("Liver", (_screen("ACH-3", 0.25, "HEPG2", expression=3.1),)),
        ScreeningRecord("Skin", (_screen("ACH-4", None),)),
        ScreeningRecord("Lung", (_screen("ACH-5", -0.2, "H1299"),)),
    ]


def test_unique_tissues_first_seen_order():
    assert unique_tissues(_make_records()) == ["Lung", "Liver", "Skin"]


def test_point_count_excludes_missing_gene_effect():
    records = _make_records()
    expected = sum(1 for r in records for s in r.screens if s.gene_effect is not None)

    ds = normalize(records)

    assert len(ds.points) == expected == 3


def test_y_is_first_seen_tissue_index():
    ds = normalize(_make_records())

    assert ds.tissues == ("Lung", "Liver", "Skin")
    for p in ds.points:
        assert p.y == ds.tissues.index(p.tissue)

    # Skin has no plottable screens but keeps its slot on the axis
    assert {p.y for p in ds.points} == {0, 1}


def test_y_values_cover_all_tissues_when_each_has_points():
    records = [
        ScreeningRecord("B", (_screen("1", 0.1),)),
        ScreeningRecord("A", (_screen("2", -2.0),)),
        ScreeningRecord("C", (_screen("3", -0.5),)),
    ]
    ds = normalize(records)

    assert {p.y for p in ds.points} == set(range(len(ds.tissues)))
    # no alphabetical sorting on the axis
    assert ds.tissues == ("B", "A", "C")


def test_fields_are_copied_onto_points():
    ds = normalize(_make_records())
    liver = ds.find("ACH-3")

    assert liver is not None
    assert liver.x == 0.25
    assert liver.gene_effect == 0.25
    assert liver.tissue == "Liver"
    assert liver.cell_line == "HEPG2"
    assert liver.disease == "Disease"
    assert liver.expression == 3.1


def test_normalize_is_deterministic():
    assert normalize(_make_records()) == normalize(_make_records())


def test_normalize_empty_input():
    ds = normalize([])
    assert ds.tissues == ()
    assert ds.points == ()
