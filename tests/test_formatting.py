"""Tests for formatting module."""

import json

from poe2_gems import formatting
from poe2_gems.types import SupportReference


def test_gem_summary_renders_fields():
    record = {
        "name": "Gas Grenade",
        "gem_tags": "Attack, AoE, Grenade",
        "gem_description": "Fires a [[grenade]] that releases gas.",
        "equipment_requirement": "Crossbow",
        "static_cooldown": "4",
        "stat_text": "{{c|gem|Impact}} radius increased<br>Lasts&nbsp;8 seconds",
        "level1_damage_multiplier": "100",
        "level20_damage_multiplier": "250",
    }

    summary = formatting.format_gem_summary(record, "gas grenade")

    assert summary.startswith("# Gas Grenade\n")
    assert "**Tags:** Attack, AoE, Grenade" in summary
    assert "**Description:** Fires a grenade that releases gas." in summary
    assert "**Requirement:** Crossbow" in summary
    assert "**Cooldown:** 4s" in summary
    assert "### Detailed Stats\nImpact radius increasedLasts 8 seconds" in summary
    assert "- Level 1: Multiplier 100%" in summary
    assert "- Level 20: Multiplier 250%" in summary


def test_gem_summary_tolerates_missing_fields():
    summary = formatting.format_gem_summary({}, "Mystery Gem")

    assert summary.startswith("# Mystery Gem\n")
    assert "**Tags:** N/A" in summary
    assert "**Description:** N/A" in summary
    assert "**Requirement:** N/A" in summary
    assert "**Cooldown:** Nones" in summary
    assert "- Level 20: Multiplier N/A%" in summary
    assert summary.endswith("N/A%")


def test_full_data_keeps_raw_markup():
    record = {"name": "Gas Grenade", "stat_text": "{{c|gem|Impact}} radius"}

    text = formatting.format_full_data(record)

    assert text.startswith("FULL_DATA_JSON: ")
    assert json.loads(text.removeprefix("FULL_DATA_JSON: ")) == record


def test_compatible_supports_listing():
    supports = [
        {"name": "Scattershot", "gem_tags": "Support, Attack", "description": "More [[projectile]]s"},
        {"name": "Magnified Effect", "gem_tags": "Support, AoE", "description": "Bigger area"},
    ]

    text = formatting.format_compatible_supports("Gas Grenade", "Attack, AoE", supports)

    assert text == (
        "### Compatible Supports for Gas Grenade\n"
        "Based on tags: **Attack, AoE**\n\n"
        "* **Scattershot** (Support, Attack)\n  _More projectiles_\n\n"
        "* **Magnified Effect** (Support, AoE)\n  _Bigger area_"
    )


def test_recommended_supports_listing():
    supports = [SupportReference("Fire Support"), SupportReference("Cold Support")]

    text = formatting.format_recommended_supports("Gas Grenade", supports)

    assert text == (
        "### Recommended Supports for Gas Grenade\n\n"
        "* **Fire Support** - recommended support\n"
        "* **Cold Support** - recommended support"
    )
