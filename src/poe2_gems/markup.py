"""
Parsers for raw PoE2 wiki markup.

Works on the wikitext returned by the revisions API rather than rendered
HTML. Pulls key/value fields out of the gem's Item template, scrapes the
recommended support section, strips inline markup for display and
matches gems by tag.
"""

import re
from collections.abc import Iterable

from poe2_gems.exceptions import NoTagsError
from poe2_gems.types import GemRecord, SupportGem, SupportReference

ITEM_TEMPLATE_MARKER = "{{Item"

_TEMPLATE_END = "}}"
_FIELD_PREFIX = "|"

# Headings may be spaced and nested (`== Recommended Support Gems ==`, `===...`).
RECOMMENDED_SECTION_MARKERS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\{\{\s*Recommended supports", re.IGNORECASE),
    re.compile(r"^[ \t]*=+[ \t]*Recommended Support Gems", re.IGNORECASE | re.MULTILINE),
)
RECOMMENDED_SECTION_KEYWORD = "recommended support"

_INLINE_LINK_RE = re.compile(r"\{\{il\|([^|}]*)(?:\|[^}]*)?\}\}", re.IGNORECASE)

_COLOR_MACRO_RE = re.compile(r"\{\{c\|.*?\|(.*?)\}\}")
_WIKI_LINK_RE = re.compile(r"\[\[(?:[^|\]]*\|)?([^\]]+)\]\]")
_HTML_TAG_RE = re.compile(r"<.*?>")
_NBSP = "&nbsp;"


def parse_template(markup: str, marker: str = ITEM_TEMPLATE_MARKER) -> GemRecord | None:
    """
    Extract the fields of the first template block opened by ``marker``.

    Lines are read from the marker until a line that is exactly ``}}`` (or
    end of input if the template is never closed). A line containing ``=``
    starts a field: everything before the first ``=`` is the key, the rest
    is the value, so values keep any ``=`` of their own. A line without
    ``=`` that does not start with ``|`` continues the previous field on a
    new line, which is how multi-line stat text is written.

    A key declared twice keeps only the last value.

    Nested templates are not brace-counted; only the closing line matters.
    """
    start = markup.find(marker)
    if start == -1:
        return None

    record: GemRecord = {}
    current_key = ""

    for line in markup[start:].split("\n"):
        stripped = line.strip()
        if stripped == _TEMPLATE_END:
            break

        if "=" in line:
            key_part, _, value_part = line.partition("=")
            key = key_part.replace(_FIELD_PREFIX, "", 1).strip()
            if key:
                current_key = key
                record[key] = value_part.strip()
        elif current_key and not stripped.startswith(_FIELD_PREFIX):
            record[current_key] += "\n" + stripped

    return record


def _find_section_start(markup: str, markers: Iterable[str | re.Pattern[str]]) -> int:
    for marker in markers:
        if isinstance(marker, str):
            marker = re.compile(re.escape(marker), re.IGNORECASE)
        match = marker.search(markup)
        if match:
            return match.start()
    return -1


def extract_supports(
    markup: str,
    section_markers: Iterable[str | re.Pattern[str]] = RECOMMENDED_SECTION_MARKERS,
    keyword: str = RECOMMENDED_SECTION_KEYWORD,
) -> list[SupportReference]:
    """
    Collect gems linked from the recommended supports section of a page.

    The section has no closing delimiter, so scanning stops at the next
    ``==`` heading that is not about recommendations, or at a bare ``}}``.
    Every ``{{il|Name}}`` or ``{{il|Name|Label}}`` in between contributes
    ``Name``, deduplicated in order of first appearance.
    """
    start = _find_section_start(markup, section_markers)
    if start == -1:
        return []

    keyword = keyword.lower()
    names: dict[str, None] = {}

    for line in markup[start:].split("\n"):
        stripped = line.strip()
        if stripped == _TEMPLATE_END:
            break
        if stripped.startswith("==") and keyword not in " ".join(stripped.lower().split()):
            break

        for match in _INLINE_LINK_RE.finditer(line):
            name = match.group(1).strip()
            if name:
                names.setdefault(name, None)

    return [SupportReference(name) for name in names]


def clean_text(raw: str) -> str:
    # Order matters: colour macros first so their pipes never reach the link pattern.
    text = _COLOR_MACRO_RE.sub(r"\1", raw)
    text = _WIKI_LINK_RE.sub(r"\1", text)
    text = _HTML_TAG_RE.sub("", text)
    return text.replace(_NBSP, " ")


def parse_tags(tag_field: str | None) -> list[str]:
    if not tag_field or not tag_field.strip():
        raise NoTagsError(tag_field)

    tags = [tag.strip() for tag in tag_field.split(",")]
    tags = [tag for tag in tags if tag]
    if not tags:
        raise NoTagsError(tag_field)
    return tags


def is_compatible(tags: Iterable[str], candidate_tags: str) -> bool:
    return any(tag in candidate_tags for tag in tags)


def filter_compatible(tags: list[str], candidates: Iterable[SupportGem]) -> list[SupportGem]:
    """Keep candidates whose tag string contains any of ``tags``, in upstream order."""
    return [c for c in candidates if is_compatible(tags, c.get("gem_tags") or "")]
