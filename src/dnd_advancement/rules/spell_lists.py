"""Class spell lists (2024 rules).

Maps each spell, grouped by spell level, to the classes whose spell list
includes it. Level 0 entries are cantrips.
"""

from __future__ import annotations

from dnd_advancement.models.content import SpellInfo


_BARD = "bard"
_CLERIC = "cleric"
_DRUID = "druid"
_PALADIN = "paladin"
_RANGER = "ranger"
_SORCERER = "sorcerer"
_WARLOCK = "warlock"
_WIZARD = "wizard"

_ARCANE = (_BARD, _SORCERER, _WARLOCK, _WIZARD)


SPELL_CLASSES: dict[int, dict[str, tuple[str, ...]]] = {
    0: {
        "Acid Splash": (_SORCERER, _WIZARD),
        "Blade Ward": _ARCANE,
        "Chill Touch": (_SORCERER, _WARLOCK, _WIZARD),
        "Dancing Lights": (_BARD, _SORCERER, _WIZARD),
        "Druidcraft": (_DRUID,),
        "Eldritch Blast": (_WARLOCK,),
        "Elementalism": (_DRUID, _SORCERER, _WIZARD),
        "Fire Bolt": (_SORCERER, _WIZARD),
        "Friends": _ARCANE,
        "Guidance": (_CLERIC, _DRUID),
        "Light": (_BARD, _CLERIC, _SORCERER, _WIZARD),
        "Mage Hand": _ARCANE,
        "Mending": (_BARD, _CLERIC, _DRUID, _SORCERER, _WIZARD),
        "Message": (_BARD, _SORCERER, _WIZARD),
        "Mind Sliver": (_SORCERER, _WARLOCK, _WIZARD),
        "Minor Illusion": _ARCANE,
        "Poison Spray": (_DRUID, _SORCERER, _WARLOCK, _WIZARD),
        "Prestidigitation": _ARCANE,
        "Produce Flame": (_DRUID,),
        "Ray of Frost": (_SORCERER, _WIZARD),
        "Resistance": (_CLERIC, _DRUID),
        "Sacred Flame": (_CLERIC,),
        "Shillelagh": (_DRUID,),
        "Shocking Grasp": (_SORCERER, _WIZARD),
        "Spare the Dying": (_CLERIC,),
        "Starry Wisp": (_BARD, _DRUID),
        "Thaumaturgy": (_CLERIC,),
        "Thorn Whip": (_DRUID,),
        "Thunderclap": (_BARD, _DRUID, _SORCERER, _WIZARD),
        "True Strike": _ARCANE,
        "Vicious Mockery": (_BARD,),
    },
    1: {
        "Alarm": (_RANGER, _WIZARD),
        "Animal Friendship": (_BARD, _DRUID, _RANGER),
        "Armor of Agathys": (_WARLOCK,),
        "Arms of Hadar": (_WARLOCK,),
        "Bane": (_BARD, _CLERIC),
        "Bless": (_CLERIC, _PALADIN),
        "Burning Hands": (_SORCERER, _WIZARD),
        "Charm Person": (_BARD, _DRUID, _SORCERER, _WARLOCK, _WIZARD),
        "Chromatic Orb": (_SORCERER, _WIZARD),
        "Command": (_BARD, _CLERIC, _PALADIN),
        "Comprehend Languages": _ARCANE,
        "Cure Wounds": (_BARD, _CLERIC, _DRUID, _PALADIN, _RANGER),
        "Detect Magic": (_BARD, _CLERIC, _DRUID, _PALADIN, _RANGER, _SORCERER, _WIZARD),
        "Disguise Self": (_BARD, _SORCERER, _WIZARD),
        "Dissonant Whispers": (_BARD,),
        "Divine Favor": (_PALADIN,),
        "Ensnaring Strike": (_RANGER,),
        "Entangle": (_DRUID, _RANGER),
        "Expeditious Retreat": (_SORCERER, _WARLOCK, _WIZARD),
        "Faerie Fire": (_BARD, _DRUID),
        "False Life": (_SORCERER, _WIZARD),
        "Feather Fall": (_BARD, _SORCERER, _WIZARD),
        "Find Familiar": (_WIZARD,),
        "Fog Cloud": (_DRUID, _RANGER, _SORCERER, _WIZARD),
        "Goodberry": (_DRUID, _RANGER),
        "Grease": (_SORCERER, _WIZARD),
        "Guiding Bolt": (_CLERIC,),
        "Healing Word": (_BARD, _CLERIC, _DRUID),
        "Hellish Rebuke": (_WARLOCK,),
        "Heroism": (_BARD, _PALADIN),
        "Hex": (_WARLOCK,),
        "Hunter's Mark": (_RANGER,),
        "Identify": (_BARD, _WIZARD),
        "Inflict Wounds": (_CLERIC,),
        "Jump": (_DRUID, _RANGER, _SORCERER, _WIZARD),
        "Longstrider": (_BARD, _DRUID, _RANGER, _WIZARD),
        "Mage Armor": (_SORCERER, _WIZARD),
        "Magic Missile": (_SORCERER, _WIZARD),
        "Protection from Evil and Good": (_CLERIC, _PALADIN, _WARLOCK, _WIZARD),
        "Sanctuary": (_CLERIC,),
        "Shield": (_SORCERER, _WIZARD),
        "Shield of Faith": (_CLERIC, _PALADIN),
        "Silent Image": (_BARD, _SORCERER, _WIZARD),
        "Sleep": (_BARD, _SORCERER, _WIZARD),
        "Speak with Animals": (_BARD, _DRUID, _RANGER, _WARLOCK),
        "Thunderwave": (_BARD, _DRUID, _SORCERER, _WIZARD),
        "Unseen Servant": (_BARD, _WARLOCK, _WIZARD),
        "Witch Bolt": (_SORCERER, _WARLOCK, _WIZARD),
    },
    2: {
        "Aid": (_BARD, _CLERIC, _DRUID, _PALADIN, _RANGER),
        "Alter Self": (_SORCERER, _WIZARD),
        "Barkskin": (_DRUID, _RANGER),
        "Blur": (_SORCERER, _WIZARD),
        "Calm Emotions": (_BARD, _CLERIC),
        "Cloud of Daggers": _ARCANE,
        "Darkness": (_SORCERER, _WARLOCK, _WIZARD),
        "Detect Thoughts": (_BARD, _SORCERER, _WIZARD),
        "Flaming Sphere": (_DRUID, _SORCERER, _WIZARD),
        "Heat Metal": (_BARD, _DRUID),
        "Hold Person": (_BARD, _CLERIC, _DRUID, _SORCERER, _WARLOCK, _WIZARD),
        "Invisibility": _ARCANE,
        "Lesser Restoration": (_BARD, _CLERIC, _DRUID, _PALADIN, _RANGER),
        "Magic Weapon": (_PALADIN, _RANGER, _SORCERER, _WIZARD),
        "Mirror Image": (_BARD, _SORCERER, _WARLOCK, _WIZARD),
        "Misty Step": (_SORCERER, _WARLOCK, _WIZARD),
        "Moonbeam": (_DRUID,),
        "Pass without Trace": (_DRUID, _RANGER),
        "Scorching Ray": (_SORCERER, _WIZARD),
        "Shatter": _ARCANE,
        "Silence": (_BARD, _CLERIC, _RANGER),
        "Spike Growth": (_DRUID, _RANGER),
        "Spiritual Weapon": (_CLERIC,),
        "Suggestion": _ARCANE,
        "Web": (_SORCERER, _WIZARD),
    },
    3: {
        "Counterspell": (_SORCERER, _WARLOCK, _WIZARD),
        "Dispel Magic": (_BARD, _CLERIC, _DRUID, _PALADIN, _RANGER, _SORCERER, _WARLOCK, _WIZARD),
        "Fear": _ARCANE,
        "Fireball": (_SORCERER, _WIZARD),
        "Fly": (_SORCERER, _WARLOCK, _WIZARD),
        "Haste": (_SORCERER, _WIZARD),
        "Hypnotic Pattern": _ARCANE,
        "Lightning Bolt": (_SORCERER, _WIZARD),
        "Mass Healing Word": (_BARD, _CLERIC),
        "Revivify": (_CLERIC, _DRUID, _PALADIN, _RANGER),
        "Spirit Guardians": (_CLERIC,),
        "Vampiric Touch": (_SORCERER, _WARLOCK, _WIZARD),
    },
    4: {
        "Banishment": (_CLERIC, _PALADIN, _SORCERER, _WARLOCK, _WIZARD),
        "Dimension Door": _ARCANE,
        "Greater Invisibility": (_BARD, _SORCERER, _WIZARD),
        "Polymorph": (_BARD, _DRUID, _SORCERER, _WIZARD),
        "Wall of Fire": (_DRUID, _SORCERER, _WIZARD),
    },
    5: {
        "Cone of Cold": (_DRUID, _SORCERER, _WIZARD),
        "Greater Restoration": (_BARD, _CLERIC, _DRUID, _PALADIN, _RANGER),
        "Hold Monster": _ARCANE,
        "Mass Cure Wounds": (_BARD, _CLERIC, _DRUID),
        "Wall of Force": (_WIZARD,),
    },
    6: {
        "Chain Lightning": (_SORCERER, _WIZARD),
        "Disintegrate": (_SORCERER, _WIZARD),
        "Heal": (_CLERIC, _DRUID),
        "Mass Suggestion": _ARCANE,
    },
    7: {
        "Etherealness": _ARCANE + (_CLERIC,),
        "Finger of Death": (_SORCERER, _WARLOCK, _WIZARD),
        "Plane Shift": (_CLERIC, _DRUID, _SORCERER, _WARLOCK, _WIZARD),
        "Teleport": (_BARD, _SORCERER, _WIZARD),
    },
    8: {
        "Dominate Monster": _ARCANE,
        "Feeblemind": (_BARD, _DRUID, _WARLOCK, _WIZARD),
        "Power Word Stun": _ARCANE,
    },
    9: {
        "Foresight": (_BARD, _DRUID, _WARLOCK, _WIZARD),
        "Power Word Kill": _ARCANE,
        "True Polymorph": (_BARD, _WARLOCK, _WIZARD),
        "Wish": (_SORCERER, _WIZARD),
    },
}


def spells_for_class(class_id: str) -> tuple[SpellInfo, ...]:
    """Get every spell on a class list, ordered by level then name.

    Args:
        class_id: Class slug id (e.g., 'wizard').

    Returns:
        Spells of all levels, cantrips included.
    """
    return tuple(
        SpellInfo(name=name, level=level)
        for level, spells in sorted(SPELL_CLASSES.items())
        for name, classes in sorted(spells.items())
        if class_id in classes
    )


__all__ = ["SPELL_CLASSES", "spells_for_class"]
