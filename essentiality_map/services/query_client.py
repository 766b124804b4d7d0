from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from essentiality_map.core.exceptions import UpstreamError, ValidationError
from essentiality_map.core.models import ScreeningRecord, ScreenResult
from essentiality_map.services.http_utils import create_session

logger = logging.getLogger(__name__)

OPEN_TARGETS_GQL = "https://api.platform.opentargets.org/api/v4/graphql"
DEFAULT_TIMEOUT = 30.0

DEPMAP_QUERY = """
query Depmap($ensemblId: String!) {
  target(ensemblId: $ensemblId) {
    depMapEssentiality {
      tissueName
      screens {
        depmapId
        cellLineName
        diseaseFromSource
        geneEffect
        expression
      }
    }
  }
}
"""

TRANSPORT_ERROR_MESSAGE = "Failed to fetch data from Open Targets API"
NO_DATA_MESSAGE = "No essentiality data found for this gene"


def validate_gene_id(gene_id: Optional[str]) -> str:
    """
    Normalise a user supplied gene identifier.

    :raises ValidationError: if the identifier is missing or blank
    """
    cleaned = (gene_id or "").strip()
    if not cleaned:
        raise ValidationError("Please provide a valid Ensembl ID.")
    return cleaned


def _optional_float(value: Any, field_name: str) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise UpstreamError(f"Malformed screen record: '{field_name}' is not a number")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise UpstreamError(f"Malformed screen record: '{field_name}' is not a number")


def _parse_screen(raw: Dict[str, Any]) -> ScreenResult:
    return ScreenResult(
        depmap_id=str(raw.get("depmapId") or ""),
        cell_line_name=str(raw.get("cellLineName") or ""),
        disease_from_source=str(raw.get("diseaseFromSource") or ""),
        gene_effect=_optional_float(raw.get("geneEffect"), "geneEffect"),
        expression=_optional_float(raw.get("expression"), "expression"),
    )


def parse_essentiality(payload: Any) -> List[ScreeningRecord]:
    """
    Turn a GraphQL response envelope into ScreeningRecords.

    :raises UpstreamError: for API error payloads and missing/empty data
    """
    if not isinstance(payload, dict):
        raise UpstreamError(TRANSPORT_ERROR_MESSAGE)

    errors = payload.get("errors")
    if errors:
        first = errors[0] if isinstance(errors, list) else errors
        message = first.get("message") if isinstance(first, dict) else None
        raise UpstreamError(message or "The Open Targets API returned an error.")

    data = payload.get("data") or {}
    target = data.get("target") or {}
    records = target.get("depMapEssentiality")
    if not records:
        raise UpstreamError(NO_DATA_MESSAGE)

    parsed: List[ScreeningRecord] = []
    for raw in records:
        if not isinstance(raw, dict):
            raise UpstreamError("Malformed essentiality record")
        screens = tuple(_parse_screen(s) for s in (raw.get("screens") or []) if isinstance(s, dict))
        parsed.append(ScreeningRecord(tissue_name=str(raw.get("tissueName") or ""), screens=screens))
    return parsed


class OpenTargetsClient:
    """
    Fetches DepMap essentiality screens for one gene from the Open Targets
    Platform GraphQL API.

    Stateless per call: each fetch is a single POST, no retry, no caching.
    """

    def __init__(
            self,
            api_url: str = OPEN_TARGETS_GQL,
            timeout: float = DEFAULT_TIMEOUT,
            session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url
        self.timeout = timeout
        self.session = session if session is not None else create_session()

    def fetch_essentiality(self, gene_id: Optional[str]) -> List[ScreeningRecord]:
        """
        :param gene_id: Ensembl gene identifier, e.g. ENSG00000139618
        :return: one ScreeningRecord per tissue, in response order
        :raises ValidationError: blank identifier (no request is made)
        :raises UpstreamError: transport, HTTP or API failure, or no data
        """
        gene_id = validate_gene_id(gene_id)

        logger.info("fetch_start", extra={"gene_id": gene_id, "api_url": self.api_url})

        try:
            response = self.session.post(
                self.api_url,
                json={"query": DEPMAP_QUERY, "variables": {"ensemblId": gene_id}},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("fetch_transport_error", extra={"gene_id": gene_id, "error": str(e)})
            raise UpstreamError(TRANSPORT_ERROR_MESSAGE) from e

        if not response.ok:
            logger.warning(
                "fetch_http_error",
                extra={"gene_id": gene_id, "status_code": response.status_code},
            )
            raise UpstreamError(TRANSPORT_ERROR_MESSAGE)

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamError("The Open Targets API returned an invalid response.") from e

        records = parse_essentiality(payload)

        logger.info(
            "fetch_done",
            extra={
                "gene_id": gene_id,
                "n_tissues": len(records),
                "n_screens": sum(len(r.screens) for r in records),
            },
        )
        return records
