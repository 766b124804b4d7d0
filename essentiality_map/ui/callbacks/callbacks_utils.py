from __future__ import annotations
import logging
from typing import Any, Iterable, List, Tuple

from essentiality_map.core.view_state import ViewStateStore

logger = logging.getLogger(__name__)


def load_store(data: Any) -> ViewStateStore:
    """
    Rebuild the store from dcc.Store data. Anything unreadable gives an empty
    store rather than breaking the callback.
    """
    if not isinstance(data, dict) or not data:
        return ViewStateStore()
    try:
        return ViewStateStore.from_dict(data)
    except (KeyError, TypeError, ValueError):
        logger.exception("Invalid view-store data: %r", data)
        return ViewStateStore()


def diff_selection(current: Iterable[str], requested: Iterable[str]) -> Tuple[List[str], List[str]]:
    """
    Compare the store's selection with a full selection coming from a widget.

    :return: (added, removed), each in widget/store order
    """
    current = list(current)
    requested = list(requested or [])
    added = [v for v in requested if v not in current]
    removed = [v for v in current if v not in requested]
    return added, removed
