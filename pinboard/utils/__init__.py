"""Utility functions package."""

from pinboard.utils.pagination import has_more, offset
from pinboard.utils.uploads import discard_upload, save_upload

__all__ = [
    "discard_upload",
    "has_more",
    "offset",
    "save_upload",
]
