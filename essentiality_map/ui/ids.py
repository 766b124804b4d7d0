from __future__ import annotations

__all__ = ["IDs", "tissue_chip_id"]


class IDs:
    class Store:
        VIEW_STORE = "view-store"
        PENDING_FETCH = "pending-fetch"
        FETCH_RESULT = "fetch-result"

    class Control:
        # Gene search form
        GENE_INPUT = "gene-input"
        FETCH_BTN = "fetch-btn"
        FETCH_ERROR = "fetch-error"
        FETCH_STATUS = "fetch-status"

        # Search / highlight
        SEARCH_INPUT = "search-input"
        SEARCH_FIELD_SELECT = "search-field-select"

        # Tissue filter
        TISSUE_SELECT = "tissue-select"
        TISSUE_CHIPS = "tissue-chips"
        CLEAR_TISSUES_BTN = "clear-tissues-btn"

        # Category legend
        CATEGORY_CHECKLIST = "category-checklist"

        # Graph + pin + downloads
        MAIN_GRAPH = "main-graph"
        PIN_DETAILS = "pin-details"
        CLEAR_PIN_BTN = "clear-pin-btn"
        DOWNLOAD_DATA = "download-data"
        DOWNLOAD_DATA_BTN = "download-data-btn"

        # Status bar
        STATUS_BAR = "status-bar"

    class Pattern:
        # pattern-matching "type" strings
        TISSUE_CHIP_REMOVE = "tissue-chip-remove"


def tissue_chip_id(tissue: str) -> dict:
    return {"type": IDs.Pattern.TISSUE_CHIP_REMOVE, "index": tissue}
