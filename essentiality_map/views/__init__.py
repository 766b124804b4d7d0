from .essentiality_view import EssentialityView

__all__ = ["EssentialityView"]
