# ABOUTME: Wikitext infobox and table parser built on mwparserfromhell
# ABOUTME: Produces InfoboxData: flat general fields from the first infobox template plus parsed tables

import re

import mwparserfromhell
from mwparserfromhell.nodes import Tag, Template
from mwparserfromhell.wikicode import Wikicode

from wiki_facets.core.models import FieldValue, InfoboxData

FILE_NAMESPACES = ("file:", "image:", "datei:", "archivo:", "fichier:", "bild:")
LINE_BREAK = re.compile(r"<br\s*/?>", re.IGNORECASE)
IMAGE_EXTENSION = re.compile(r"\.(png|jpe?g|gif|svg|webp|tiff?)$", re.IGNORECASE)


def clean_text(s: str) -> str:
    return re.sub(r"\s+", " ", s or "").strip()


def _is_coord(template: Template) -> bool:
    return str(template.name).strip().lower().startswith("coord")


def _field_value(value: Wikicode) -> FieldValue | None:
    """Reduce a template parameter value to plain text, a file title, or a list of either."""
    if any(_is_coord(t) for t in value.filter_templates(recursive=False)):
        return str(value).strip()

    for link in value.filter_wikilinks():
        title = str(link.title).strip()
        if title.lower().startswith(FILE_NAMESPACES):
            return title

    parts = [clean_text(mwparserfromhell.parse(p).strip_code()) for p in LINE_BREAK.split(str(value))]
    parts = [p for p in parts if p]
    if not parts:
        return _template_value(value)
    return parts if len(parts) > 1 else parts[0]


def _template_value(value: Wikicode) -> str | None:
    """Value made only of templates: the first file-like template argument, else the raw wikitext."""
    templates = value.filter_templates()
    if not templates:
        return None
    for tmpl in templates:
        for param in tmpl.params:
            candidate = clean_text(param.value.strip_code())
            if candidate.lower().startswith(FILE_NAMESPACES) or IMAGE_EXTENSION.search(candidate):
                return candidate
    return clean_text(str(value)) or None


def parse_general(code: Wikicode) -> dict[str, FieldValue]:
    """Named parameters of the first template whose name mentions 'infobox'."""
    out: dict[str, FieldValue] = {}
    for tmpl in code.filter_templates():
        name = str(tmpl.name).strip().lower()
        if "infobox" not in name:
            continue
        for param in tmpl.params:
            if not param.showkey:
                continue
            value = _field_value(param.value)
            if value:
                out[str(param.name).strip()] = value
        break
    return out


def _tag_name(node: Tag) -> str:
    return str(node.tag).strip().lower()


def _table_rows(table: Tag) -> list[list[Tag]]:
    """Group a table's cells into rows; cells before the first row marker form an implicit row."""
    rows: list[list[Tag]] = []
    pending: list[Tag] = []
    for node in table.contents.nodes:
        if not isinstance(node, Tag):
            continue
        tag = _tag_name(node)
        if tag in ("td", "th"):
            pending.append(node)
        elif tag == "tr":
            if pending:
                rows.append(pending)
                pending = []
            cells = [c for c in node.contents.nodes if isinstance(c, Tag) and _tag_name(c) in ("td", "th")]
            if cells:
                rows.append(cells)
    if pending:
        rows.append(pending)
    return rows


def parse_table(table: Tag) -> list[dict[str, str]]:
    """Rows of a wikitext table as dicts keyed by header text (or column index without a header row)."""
    rows = _table_rows(table)
    if not rows:
        return []

    headers: list[str] | None = None
    if all(_tag_name(cell) == "th" for cell in rows[0]):
        headers = [clean_text(cell.contents.strip_code()) for cell in rows[0]]
        rows = rows[1:]

    parsed = []
    for row in rows:
        values = [clean_text(cell.contents.strip_code()) for cell in row]
        keys = [
            headers[i] if headers and i < len(headers) and headers[i] else str(i) for i in range(len(values))
        ]
        parsed.append(dict(zip(keys, values)))
    return parsed


def parse_tables(code: Wikicode) -> list[list[dict[str, str]]]:
    return [parse_table(t) for t in code.filter_tags(matches=lambda node: _tag_name(node) == "table")]


def parse_infobox(wikitext: str | None) -> InfoboxData:
    """Parse page wikitext into infobox fields and tables. Empty input yields empty data."""
    code = mwparserfromhell.parse(wikitext or "")
    return InfoboxData(general=parse_general(code), tables=parse_tables(code))
