# ABOUTME: Core layer: pagination engine, image resolution, response lookup helpers, facet models
# ABOUTME: Transport-agnostic algorithms shared by every page accessor

"""
Core Layer: the algorithmic pieces behind the page facade

- pagination: Cursor / aggregate / paginate over continuation tokens
- images: primary image resolution heuristic
- lookup: safe nested access into raw API responses
- models: pydantic models for facet results

Data Flow: Transport JSON -> core -> caller-facing shapes
"""

from .images import IMAGE_FIELD_KEYS, resolve_main_image
from .lookup import bare_filename, first_value, get_path
from .models import Coordinates, ImageCandidate, ImageInfo, InfoboxData, LangLink, PageReference, Section
from .pagination import Batch, Cursor, aggregate, mediawiki_continuation, paginate, query_shape

__all__ = [
    # Pagination
    "Batch",
    "Cursor",
    "aggregate",
    "mediawiki_continuation",
    "paginate",
    "query_shape",
    # Images
    "IMAGE_FIELD_KEYS",
    "resolve_main_image",
    # Lookup
    "bare_filename",
    "first_value",
    "get_path",
    # Models
    "Coordinates",
    "ImageCandidate",
    "ImageInfo",
    "InfoboxData",
    "LangLink",
    "PageReference",
    "Section",
]
