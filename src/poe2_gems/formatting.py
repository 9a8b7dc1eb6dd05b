"""
Text rendering for tool responses.

Produces the markdown-ish blocks the calling assistant reads: a gem summary,
the full field dump, and bulleted support gem listings. Missing template
fields fall back to placeholders instead of failing.
"""

import json

from poe2_gems.markup import clean_text
from poe2_gems.types import GemRecord, SupportGem, SupportReference

FULL_DATA_PREFIX = "FULL_DATA_JSON: "

_NOT_AVAILABLE = "N/A"


def _field(record: GemRecord, key: str, default: str = _NOT_AVAILABLE) -> str:
    return record.get(key) or default


def format_gem_summary(record: GemRecord, gem_name: str) -> str:
    stat_text = clean_text(record.get("stat_text", ""))
    description = clean_text(_field(record, "gem_description"))

    lines = [
        f"# {_field(record, 'name', gem_name)}",
        f"**Tags:** {_field(record, 'gem_tags')}",
        f"**Description:** {description}",
        f"**Requirement:** {_field(record, 'equipment_requirement')}",
        f"**Cooldown:** {_field(record, 'static_cooldown', 'None')}s",
        "",
        "### Detailed Stats",
        stat_text,
        "",
        "### Progression Preview",
        f"- Level 1: Multiplier {_field(record, 'level1_damage_multiplier')}%",
        f"- Level 20: Multiplier {_field(record, 'level20_damage_multiplier')}%",
    ]
    return "\n".join(lines).strip()


def format_full_data(record: GemRecord) -> str:
    return FULL_DATA_PREFIX + json.dumps(record, indent=2, ensure_ascii=False)


def format_compatible_supports(gem_name: str, tag_field: str, supports: list[SupportGem]) -> str:
    entries = [
        f"* **{s.get('name') or '?'}** ({s.get('gem_tags') or ''})\n"
        f"  _{clean_text(s.get('description') or '')}_"
        for s in supports
    ]
    header = f"### Compatible Supports for {gem_name}\nBased on tags: **{tag_field}**"
    return header + "\n\n" + "\n\n".join(entries)


def format_recommended_supports(gem_name: str, supports: list[SupportReference]) -> str:
    entries = [f"* **{s.name}** - {s.note}" for s in supports]
    return f"### Recommended Supports for {gem_name}\n\n" + "\n".join(entries)
