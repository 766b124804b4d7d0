from __future__ import annotations

import pytest
import requests

from essentiality_map.core.exceptions import UpstreamError, ValidationError
from essentiality_map.services.query_client import (
    NO_DATA_MESSAGE,
    TRANSPORT_ERROR_MESSAGE,
    OpenTargetsClient,
    parse_essentiality,
)


class _FakeResponse:
    def __init__(self, payload=None, status_code: int = 200, bad_json: bool = False):
        self._payload = payload
        self.status_code = status_code
        self._bad_json = bad_json

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self):
        if self._bad_json:
            raise ValueError("not json")
        return self._payload


class _FakeSession:
    """Stands in for requests.Session; records every POST."""

    def __init__(self, response=None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


def _payload():
    return {
        "data": {
            "target": {
                "depMapEssentiality": [
                    {
                        "tissueName": "Lung",
                        "screens": [
                            {
                                "depmapId": "ACH-000681",
                                "cellLineName": "A549",
                                "diseaseFromSource": "Non-Small Cell Lung Cancer",
                                "geneEffect": -1.2,
                                "expression": 5.5,
                            },
                            {
                                "depmapId": "ACH-000012",
                                "cellLineName": "HCC827",
                                "diseaseFromSource": "Non-Small Cell Lung Cancer",
                                "geneEffect": None,
                                "expression": None,
                            },
                        ],
                    },
                    {"tissueName": "Liver", "screens": []},
                ]
            }
        }
    }


def _client(session) -> OpenTargetsClient:
    return OpenTargetsClient(api_url="https://example.test/graphql", timeout=5, session=session)


@pytest.mark.parametrize("gene_id", ["", "   ", None])
def test_blank_gene_id_raises_before_any_request(gene_id):
    session = _FakeSession(_FakeResponse(_payload()))

    with pytest.raises(ValidationError):
        _client(session).fetch_essentiality(gene_id)

    assert len(session.calls) == 0


def test_fetch_sends_one_query_with_variable():
    session = _FakeSession(_FakeResponse(_payload()))

    records = _client(session).fetch_essentiality("  ENSG00000139618 ")

    assert len(session.calls) == 1
    call = session.calls[0]
    assert call["url"] == "https://example.test/graphql"
    assert call["timeout"] == 5
    assert call["json"]["variables"] == {"ensemblId": "ENSG00000139618"}
    assert "depMapEssentiality" in call["json"]["query"]
    for field in ("depmapId", "cellLineName", "diseaseFromSource", "geneEffect", "expression"):
        assert field in call["json"]["query"]

    assert [r.tissue_name for r in records] == ["Lung", "Liver"]
    a549 = records[0].screens[0]
    assert a549.depmap_id == "ACH-000681"
    assert a549.gene_effect == -1.2
    assert a549.expression == 5.5
    assert records[0].screens[1].gene_effect is None


def test_transport_failure_is_upstream_error():
    session = _FakeSession(error=requests.ConnectionError("boom"))

    with pytest.raises(UpstreamError, match=TRANSPORT_ERROR_MESSAGE):
        _client(session).fetch_essentiality("ENSG1")


def test_http_error_status_is_upstream_error():
    session = _FakeSession(_FakeResponse({}, status_code=502))

    with pytest.raises(UpstreamError, match=TRANSPORT_ERROR_MESSAGE):
        _client(session).fetch_essentiality("ENSG1")


def test_invalid_json_is_upstream_error():
    session = _FakeSession(_FakeResponse(bad_json=True))

    with pytest.raises(UpstreamError):
        _client(session).fetch_essentiality("ENSG1")


def test_api_error_message_is_passed_through():
    payload = {"errors": [{"message": "Invalid ensemblId"}, {"message": "second"}], "data": None}

    with pytest.raises(UpstreamError) as excinfo:
        parse_essentiality(payload)

    assert str(excinfo.value) == "Invalid ensemblId"


@pytest.mark.parametrize(
    "payload",
    [
        {"data": None},
        {"data": {"target": None}},
        {"data": {"target": {"depMapEssentiality": None}}},
        {"data": {"target": {"depMapEssentiality": []}}},
    ],
)
def test_missing_or_empty_data_is_upstream_error(payload):
    with pytest.raises(UpstreamError, match=NO_DATA_MESSAGE):
        parse_essentiality(payload)


def test_non_numeric_gene_effect_is_upstream_error():
    payload = _payload()
    payload["data"]["target"]["depMapEssentiality"][0]["screens"][0]["geneEffect"] = "strong"

    with pytest.raises(UpstreamError):
        parse_essentiality(payload)
