from __future__ import annotations

from dataclasses import dataclass

from essentiality_map.services.query_client import DEFAULT_TIMEOUT, OPEN_TARGETS_GQL

DEFAULT_GENE_ID = "ENSG00000139618"


@dataclass
class GlobalConfig:
    """
    Parsed global.json.

    - api_url: GraphQL endpoint serving depMapEssentiality
    - default_gene_id: gene shown (and fetched) when the page first loads
    - request_timeout: seconds before a fetch is abandoned
    """
    ui_title: str = "Gene Essentiality Map"
    subtitle: str = "DepMap gene effect by tissue"
    api_url: str = OPEN_TARGETS_GQL
    default_gene_id: str = DEFAULT_GENE_ID
    request_timeout: float = DEFAULT_TIMEOUT
