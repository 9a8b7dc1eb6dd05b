"""
Type definitions for wiki-derived gem data.

Gem records are schema-less: whatever fields the page's Item template
declares end up in the mapping, so consumers must tolerate missing keys.
"""

from typing import NamedTuple, TypedDict

GemRecord = dict[str, str]

RECOMMENDED_NOTE = "recommended support"


class SupportGem(TypedDict):
    name: str
    gem_tags: str
    description: str


class SupportReference(NamedTuple):
    name: str
    note: str = RECOMMENDED_NOTE
