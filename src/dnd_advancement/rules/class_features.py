"""Class feature and subclass reference data (2024 rules).

Static data backing :class:`~dnd_advancement.rules.provider.StaticRulesProvider`.
Feature tables are keyed by class id and class level; levels without new
features are omitted.
"""

from __future__ import annotations


# =============================================================================
# Class Features by Level
# =============================================================================

ASI = "Ability Score Improvement"
SUBCLASS_FEATURE = "Subclass Feature"

CLASS_FEATURES: dict[str, dict[int, tuple[str, ...]]] = {
    "barbarian": {
        1: ("Rage", "Unarmored Defense", "Weapon Mastery"),
        2: ("Danger Sense", "Reckless Attack"),
        3: ("Barbarian Subclass", "Primal Knowledge"),
        4: (ASI,),
        5: ("Extra Attack", "Fast Movement"),
        6: (SUBCLASS_FEATURE,),
        7: ("Feral Instinct", "Instinctive Pounce"),
        8: (ASI,),
        9: ("Brutal Strike",),
        10: (SUBCLASS_FEATURE,),
        11: ("Relentless Rage",),
        12: (ASI,),
        13: ("Improved Brutal Strike",),
        14: (SUBCLASS_FEATURE,),
        15: ("Persistent Rage",),
        16: (ASI,),
        17: ("Improved Brutal Strike",),
        18: ("Indomitable Might",),
        19: ("Epic Boon",),
        20: ("Primal Champion",),
    },
    "bard": {
        1: ("Bardic Inspiration", "Spellcasting"),
        2: ("Expertise", "Jack of All Trades"),
        3: ("Bard Subclass",),
        4: (ASI,),
        5: ("Font of Inspiration",),
        6: (SUBCLASS_FEATURE,),
        7: ("Countercharm",),
        8: (ASI,),
        9: ("Expertise",),
        10: ("Magical Secrets",),
        12: (ASI,),
        14: (SUBCLASS_FEATURE,),
        16: (ASI,),
        18: ("Superior Inspiration",),
        19: ("Epic Boon",),
        20: ("Words of Creation",),
    },
    "cleric": {
        1: ("Spellcasting", "Divine Order", "Cleric Subclass"),
        2: ("Channel Divinity",),
        4: (ASI,),
        5: ("Sear Undead",),
        6: (SUBCLASS_FEATURE,),
        7: ("Blessed Strikes",),
        8: (ASI,),
        10: ("Divine Intervention",),
        12: (ASI,),
        14: ("Improved Blessed Strikes",),
        16: (ASI,),
        17: (SUBCLASS_FEATURE,),
        19: ("Epic Boon",),
        20: ("Greater Divine Intervention",),
    },
    "druid": {
        1: ("Spellcasting", "Druidic", "Primal Order"),
        2: ("Wild Shape", "Wild Companion", "Druid Subclass"),
        4: (ASI,),
        5: ("Wild Resurgence",),
        6: (SUBCLASS_FEATURE,),
        7: ("Elemental Fury",),
        8: (ASI,),
        10: (SUBCLASS_FEATURE,),
        12: (ASI,),
        14: (SUBCLASS_FEATURE,),
        15: ("Improved Elemental Fury",),
        16: (ASI,),
        18: ("Beast Spells",),
        19: ("Epic Boon",),
        20: ("Archdruid",),
    },
    "fighter": {
        1: ("Fighting Style", "Second Wind", "Weapon Mastery"),
        2: ("Action Surge", "Tactical Mind"),
        3: ("Fighter Subclass",),
        4: (ASI,),
        5: ("Extra Attack", "Tactical Shift"),
        6: (ASI,),
        7: (SUBCLASS_FEATURE,),
        8: (ASI,),
        9: ("Indomitable", "Tactical Master"),
        10: (SUBCLASS_FEATURE,),
        11: ("Two Extra Attacks",),
        12: (ASI,),
        13: ("Indomitable", "Studied Attacks"),
        14: (ASI,),
        15: (SUBCLASS_FEATURE,),
        16: (ASI,),
        17: ("Action Surge", "Indomitable"),
        18: (SUBCLASS_FEATURE,),
        19: ("Epic Boon",),
        20: ("Three Extra Attacks",),
    },
    "monk": {
        1: ("Martial Arts", "Unarmored Defense"),
        2: ("Monk's Focus", "Unarmored Movement", "Uncanny Metabolism"),
        3: ("Deflect Attacks", "Monk Subclass"),
        4: (ASI, "Slow Fall"),
        5: ("Extra Attack", "Stunning Strike"),
        6: ("Empowered Strikes", SUBCLASS_FEATURE),
        7: ("Evasion",),
        8: (ASI,),
        9: ("Acrobatic Movement",),
        10: ("Heightened Focus", "Self-Restoration"),
        11: (SUBCLASS_FEATURE,),
        12: (ASI,),
        13: ("Deflect Energy",),
        14: ("Disciplined Survivor",),
        15: ("Perfect Focus",),
        16: (ASI,),
        17: (SUBCLASS_FEATURE,),
        18: ("Superior Defense",),
        19: ("Epic Boon",),
        20: ("Body and Mind",),
    },
    "paladin": {
        1: ("Lay On Hands", "Spellcasting", "Weapon Mastery"),
        2: ("Fighting Style", "Paladin's Smite"),
        3: ("Channel Divinity", "Paladin Subclass"),
        4: (ASI,),
        5: ("Extra Attack", "Faithful Steed"),
        6: ("Aura of Protection",),
        7: (SUBCLASS_FEATURE,),
        8: (ASI,),
        9: ("Abjure Foes",),
        10: ("Aura of Courage",),
        11: ("Radiant Strikes",),
        12: (ASI,),
        14: ("Restoring Touch",),
        15: (SUBCLASS_FEATURE,),
        16: (ASI,),
        18: ("Aura Expansion",),
        19: ("Epic Boon",),
        20: (SUBCLASS_FEATURE,),
    },
    "ranger": {
        1: ("Spellcasting", "Favored Enemy", "Weapon Mastery"),
        2: ("Deft Explorer", "Fighting Style"),
        3: ("Ranger Subclass",),
        4: (ASI,),
        5: ("Extra Attack",),
        6: ("Roving",),
        7: (SUBCLASS_FEATURE,),
        8: (ASI,),
        9: ("Expertise",),
        10: ("Tireless",),
        11: (SUBCLASS_FEATURE,),
        12: (ASI,),
        13: ("Relentless Hunter",),
        14: ("Nature's Veil",),
        15: (SUBCLASS_FEATURE,),
        16: (ASI,),
        17: ("Precise Hunter",),
        18: ("Feral Senses",),
        19: ("Epic Boon",),
        20: ("Foe Slayer",),
    },
    "rogue": {
        1: ("Expertise", "Sneak Attack", "Thieves' Cant", "Weapon Mastery"),
        2: ("Cunning Action",),
        3: ("Rogue Subclass", "Steady Aim"),
        4: (ASI,),
        5: ("Cunning Strike", "Uncanny Dodge"),
        6: ("Expertise",),
        7: ("Evasion", "Reliable Talent"),
        8: (ASI,),
        9: (SUBCLASS_FEATURE,),
        10: (ASI,),
        11: ("Improved Cunning Strike",),
        12: (ASI,),
        13: (SUBCLASS_FEATURE,),
        14: ("Devious Strikes",),
        15: ("Slippery Mind",),
        16: (ASI,),
        17: (SUBCLASS_FEATURE,),
        18: ("Elusive",),
        19: ("Epic Boon",),
        20: ("Stroke of Luck",),
    },
    "sorcerer": {
        1: ("Spellcasting", "Innate Sorcery", "Sorcerer Subclass"),
        2: ("Font of Magic", "Metamagic"),
        4: (ASI,),
        5: ("Sorcerous Restoration",),
        6: (SUBCLASS_FEATURE,),
        7: ("Sorcery Incarnate",),
        8: (ASI,),
        10: ("Metamagic",),
        12: (ASI,),
        14: (SUBCLASS_FEATURE,),
        16: (ASI,),
        17: ("Metamagic",),
        18: (SUBCLASS_FEATURE,),
        19: ("Epic Boon",),
        20: ("Arcane Apotheosis",),
    },
    "warlock": {
        1: ("Eldritch Invocations", "Pact Magic", "Warlock Subclass"),
        2: ("Magical Cunning",),
        4: (ASI,),
        6: (SUBCLASS_FEATURE,),
        8: (ASI,),
        9: ("Contact Patron",),
        10: (SUBCLASS_FEATURE,),
        11: ("Mystic Arcanum",),
        12: (ASI,),
        14: (SUBCLASS_FEATURE,),
        16: (ASI,),
        19: ("Epic Boon",),
        20: ("Eldritch Master",),
    },
    "wizard": {
        1: ("Spellcasting", "Ritual Adept", "Arcane Recovery"),
        2: ("Scholar", "Wizard Subclass"),
        4: (ASI,),
        5: ("Memorize Spell",),
        6: (SUBCLASS_FEATURE,),
        8: (ASI,),
        10: (SUBCLASS_FEATURE,),
        12: (ASI,),
        14: (SUBCLASS_FEATURE,),
        16: (ASI,),
        18: ("Spell Mastery",),
        19: ("Epic Boon",),
        20: ("Signature Spells",),
    },
}


FEATURE_DESCRIPTIONS: dict[str, str] = {
    "Action Surge": "Take one additional action on your turn, once per short or long rest.",
    "Tactical Mind": "Expend a use of Second Wind to add 1d10 to a failed ability check.",
    "Extra Attack": "Attack twice whenever you take the Attack action on your turn.",
    "Fighting Style": "Gain a Fighting Style feat of your choice.",
    "Metamagic": "Learn Metamagic options that twist your spells to suit your needs.",
    "Eldritch Invocations": "Learn eldritch invocations, fragments of forbidden knowledge.",
    "Expertise": "Gain Expertise in two of your skill proficiencies.",
    "Ability Score Improvement": "Gain the Ability Score Improvement feat or another feat.",
    "Epic Boon": "Gain an Epic Boon feat or another feat.",
    "Wild Shape": "Assume the form of a beast you have learned.",
    "Channel Divinity": "Channel divine energy to fuel magical effects.",
    "Cunning Action": "Take the Dash, Disengage or Hide action as a Bonus Action.",
    "Font of Magic": "Tap into sorcery points to create spell slots or fuel Metamagic.",
    "Scholar": "Gain Expertise in one knowledge skill you are proficient in.",
}


# =============================================================================
# Subclasses
# =============================================================================

SUBCLASSES: dict[str, tuple[tuple[str, str], ...]] = {
    "barbarian": (
        ("Path of the Berserker", "XPHB"),
        ("Path of the Wild Heart", "XPHB"),
        ("Path of the World Tree", "XPHB"),
        ("Path of the Zealot", "XPHB"),
        ("Path of the Totem Warrior", "PHB"),
    ),
    "bard": (
        ("College of Dance", "XPHB"),
        ("College of Glamour", "XPHB"),
        ("College of Lore", "XPHB"),
        ("College of Valor", "XPHB"),
    ),
    "cleric": (
        ("Life Domain", "XPHB"),
        ("Light Domain", "XPHB"),
        ("Trickery Domain", "XPHB"),
        ("War Domain", "XPHB"),
    ),
    "druid": (
        ("Circle of the Land", "XPHB"),
        ("Circle of the Moon", "XPHB"),
        ("Circle of the Sea", "XPHB"),
        ("Circle of the Stars", "XPHB"),
    ),
    "fighter": (
        ("Battle Master", "XPHB"),
        ("Champion", "XPHB"),
        ("Eldritch Knight", "XPHB"),
        ("Psi Warrior", "XPHB"),
    ),
    "monk": (
        ("Warrior of Mercy", "XPHB"),
        ("Warrior of Shadow", "XPHB"),
        ("Warrior of the Elements", "XPHB"),
        ("Warrior of the Open Hand", "XPHB"),
    ),
    "paladin": (
        ("Oath of Devotion", "XPHB"),
        ("Oath of Glory", "XPHB"),
        ("Oath of the Ancients", "XPHB"),
        ("Oath of Vengeance", "XPHB"),
    ),
    "ranger": (
        ("Beast Master", "XPHB"),
        ("Fey Wanderer", "XPHB"),
        ("Gloom Stalker", "XPHB"),
        ("Hunter", "XPHB"),
    ),
    "rogue": (
        ("Arcane Trickster", "XPHB"),
        ("Assassin", "XPHB"),
        ("Soulknife", "XPHB"),
        ("Thief", "XPHB"),
    ),
    "sorcerer": (
        ("Aberrant Sorcery", "XPHB"),
        ("Clockwork Sorcery", "XPHB"),
        ("Draconic Sorcery", "XPHB"),
        ("Wild Magic Sorcery", "XPHB"),
    ),
    "warlock": (
        ("Archfey Patron", "XPHB"),
        ("Celestial Patron", "XPHB"),
        ("Fiend Patron", "XPHB"),
        ("Great Old One Patron", "XPHB"),
    ),
    "wizard": (
        ("Abjurer", "XPHB"),
        ("Diviner", "XPHB"),
        ("Evoker", "XPHB"),
        ("Illusionist", "XPHB"),
    ),
}


__all__ = [
    "ASI",
    "SUBCLASS_FEATURE",
    "CLASS_FEATURES",
    "FEATURE_DESCRIPTIONS",
    "SUBCLASSES",
]
