"""A small catalog of 2024 feats in raw rules-data shape.

Entries follow the 5etools feat file layout (``prerequisite``, ``ability``,
``category``, ``repeatable``) and are parsed with
:meth:`~dnd_advancement.models.feats.FeatDefinition.from_raw`.
"""

from __future__ import annotations

from typing import Any


_ALL_ABILITIES = ["str", "dex", "con", "int", "wis", "cha"]


RAW_FEATS: list[dict[str, Any]] = [
    # Origin feats
    {
        "name": "Alert",
        "source": "XPHB",
        "category": "O",
        "entries": ["Add your Proficiency Bonus to Initiative and swap Initiative with an ally."],
    },
    {
        "name": "Lucky",
        "source": "XPHB",
        "category": "O",
        "entries": ["Gain Luck Points equal to your Proficiency Bonus to gain Advantage."],
    },
    {
        "name": "Tough",
        "source": "XPHB",
        "category": "O",
        "entries": ["Your Hit Point maximum increases by twice your character level."],
    },
    # General feats
    {
        "name": "Ability Score Improvement",
        "source": "XPHB",
        "category": "G",
        "prerequisite": [{"level": 4}],
        "repeatable": True,
        "ability": [{"choose": {"from": _ALL_ABILITIES, "amount": 1, "count": 2}, "hidden": True}],
        "entries": ["Increase one ability score by 2, or two ability scores by 1."],
    },
    {
        "name": "Actor",
        "source": "XPHB",
        "category": "G",
        "prerequisite": [{"level": 4, "ability": [{"cha": 13}]}],
        "ability": [{"cha": 1}],
        "entries": ["Advantage on Deception and Performance checks to pass yourself off as someone else."],
    },
    {
        "name": "Great Weapon Master",
        "source": "XPHB",
        "category": "G",
        "prerequisite": [{"level": 4, "ability": [{"str": 13}]}],
        "ability": [{"str": 1}],
        "entries": ["Heavy weapon hits deal extra damage equal to your Proficiency Bonus."],
    },
    {
        "name": "Sharpshooter",
        "source": "XPHB",
        "category": "G",
        "prerequisite": [{"level": 4, "ability": [{"dex": 13}]}],
        "ability": [{"dex": 1}],
        "entries": ["Ranged attacks ignore cover and suffer no long-range Disadvantage."],
    },
    {
        "name": "Grappler",
        "source": "XPHB",
        "category": "G",
        "prerequisite": [{"level": 4, "ability": [{"str": 13}]}],
        "ability": [{"choose": {"from": ["str", "dex"]}}],
        "entries": ["Punch and grab in one motion, with Advantage against creatures you grapple."],
    },
    {
        "name": "Inspiring Leader",
        "source": "XPHB",
        "category": "G",
        "prerequisite": [{"level": 4, "ability": [{"cha": 13}]}],
        "ability": [{"choose": {"from": ["wis", "cha"]}}],
        "entries": ["Grant Temporary Hit Points to allies after a Short or Long Rest."],
    },
    {
        "name": "Resilient",
        "source": "XPHB",
        "category": "G",
        "prerequisite": [{"level": 4}],
        "ability": [{"choose": {"from": _ALL_ABILITIES}}],
        "entries": ["Gain Saving Throw proficiency with the chosen ability."],
    },
    {
        "name": "Skill Expert",
        "source": "XPHB",
        "category": "G",
        "prerequisite": [{"level": 4}],
        "ability": [{"choose": {"from": _ALL_ABILITIES}}],
        "entries": ["Gain one skill proficiency and Expertise in one skill."],
    },
    {
        "name": "Elemental Adept",
        "source": "XPHB",
        "category": "G",
        "prerequisite": [
            {
                "level": 4,
                "otherSummary": {
                    "entry": "Spellcasting or Pact Magic Feature",
                    "entrySummary": "Spellcasting or Pact Magic",
                },
            }
        ],
        "repeatable": True,
        "ability": [{"choose": {"from": ["int", "wis", "cha"]}}],
        "entries": ["Spells you cast ignore Resistance to a chosen damage type."],
    },
    # Fighting style feats
    {
        "name": "Archery",
        "source": "XPHB",
        "category": "FS",
        "prerequisite": [{"feature": ["Fighting Style"]}],
        "entries": ["Gain a +2 bonus to attack rolls you make with Ranged weapons."],
    },
    {
        "name": "Defense",
        "source": "XPHB",
        "category": "FS",
        "prerequisite": [{"feature": ["Fighting Style"]}],
        "entries": ["While wearing armor, you gain a +1 bonus to Armor Class."],
    },
    # Epic boons
    {
        "name": "Boon of Combat Prowess",
        "source": "XPHB",
        "category": "EB",
        "prerequisite": [{"level": 19}],
        "ability": [{"choose": {"from": _ALL_ABILITIES}}],
        "entries": ["Once per turn, turn a missed attack roll into a hit."],
    },
    {
        "name": "Boon of Fortitude",
        "source": "XPHB",
        "category": "EB",
        "prerequisite": [{"level": 19}],
        "ability": [{"choose": {"from": _ALL_ABILITIES}}],
        "entries": ["Your Hit Point maximum increases by 40."],
    },
]


__all__ = ["RAW_FEATS"]
