"""Summary view — diff-set model and line renderer."""

from jjview.summary.model import DiffCategoryState, DiffFile, RenderedDocument, SummaryModel
from jjview.summary.view import SummaryView, format_change_id

__all__ = [
    "DiffCategoryState",
    "DiffFile",
    "RenderedDocument",
    "SummaryModel",
    "SummaryView",
    "format_change_id",
]
