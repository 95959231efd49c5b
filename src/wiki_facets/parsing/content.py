# ABOUTME: Splits plain-text page extracts into nested sections by "== Heading ==" markers
# ABOUTME: Heading depth (number of '=') decides nesting; text before the first heading is dropped

import re

from wiki_facets.core.models import Section

HEADING = re.compile(r"^(={2,6})\s*(.+?)\s*\1\s*$", re.MULTILINE)


def parse_content(text: str | None) -> list[Section]:
    """Nested sections of an ``explaintext`` extract.

    >>> [s.title for s in parse_content("Intro\\n== History ==\\nOld.\\n=== Early ===\\nOlder.")]
    ['History']
    """
    if not text:
        return []

    root: list[Section] = []
    # (depth, section) pairs from outermost to innermost open section
    stack: list[tuple[int, Section]] = []

    matches = list(HEADING.finditer(text))
    for i, match in enumerate(matches):
        depth = len(match.group(1))
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        section = Section(title=match.group(2), content=text[match.end() : end].strip())

        while stack and stack[-1][0] >= depth:
            stack.pop()
        if stack:
            stack[-1][1].items.append(section)
        else:
            root.append(section)
        stack.append((depth, section))

    return root
