"""
Core domain layer: data model, normaliser, view state store and the
derived-data filter
"""

from .models import Category, DataPoint, NormalizedDataset, ScreeningRecord, ScreenResult, SearchField
from .normalizer import normalize
from .view_state import ViewState, ViewStateStore
from .derived import DerivedView, derive_view
from .base_view import BaseView

__all__ = [
    "Category",
    "DataPoint",
    "NormalizedDataset",
    "ScreeningRecord",
    "ScreenResult",
    "SearchField",
    "normalize",
    "ViewState",
    "ViewStateStore",
    "DerivedView",
    "derive_view",
    "BaseView",
]
