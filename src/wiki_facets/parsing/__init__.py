# ABOUTME: Parsers for wikitext and plain-text extracts
# ABOUTME: Infobox/table parsing, coordinate extraction, and section splitting

from .content import parse_content
from .coordinates import parse_coordinates
from .infobox import parse_infobox

__all__ = ["parse_content", "parse_coordinates", "parse_infobox"]
