"""Catalog of class features that require a player choice.

Choices are attached either to a class (keyed by class id) or to a
subclass (keyed by subclass id, e.g. ``battle-master``). A choice becomes
available at exactly one class level.
"""

from __future__ import annotations

from dnd_advancement.models.content import FeatureChoice, FeatureChoiceOption
from dnd_advancement.models.enums import ChoiceKind
from dnd_advancement.models.keys import slugify


def _options(*entries: tuple[str, str]) -> tuple[FeatureChoiceOption, ...]:
    return tuple(
        FeatureChoiceOption(key=slugify(name), name=name, description=description)
        for name, description in entries
    )


def _pick(
    options: tuple[FeatureChoiceOption, ...], *keys: str
) -> tuple[FeatureChoiceOption, ...]:
    return tuple(option for option in options if option.key in keys)


# =============================================================================
# Option Lists
# =============================================================================

FIGHTING_STYLES = _options(
    ("Archery", "+2 bonus to attack rolls made with ranged weapons."),
    ("Blind Fighting", "Blindsight with a range of 10 feet."),
    ("Defense", "+1 bonus to AC while wearing armor."),
    ("Dueling", "+2 damage with a one-handed melee weapon and no other weapon."),
    ("Great Weapon Fighting", "Treat 1s and 2s on two-handed weapon damage dice as 3s."),
    ("Interception", "Reduce damage to a nearby ally by 1d10 + proficiency bonus."),
    ("Protection", "Impose disadvantage on an attack against an adjacent ally."),
    ("Thrown Weapon Fighting", "+2 damage with thrown weapons; draw them as part of the attack."),
    ("Two-Weapon Fighting", "Add your ability modifier to off-hand attack damage."),
    ("Unarmed Fighting", "Unarmed strikes deal 1d6 + Strength, 1d8 with both hands free."),
)

MANEUVERS = _options(
    ("Commander's Strike", "Direct an ally to attack, adding a superiority die to damage."),
    ("Disarming Attack", "Add a superiority die to damage; the target may drop a held item."),
    ("Distracting Strike", "Add a superiority die to damage; the next ally attack has advantage."),
    ("Evasive Footwork", "Add a superiority die to AC while moving."),
    ("Feinting Attack", "Gain advantage and add a superiority die to your next attack."),
    ("Goading Attack", "The target has disadvantage attacking anyone but you."),
    ("Lunging Attack", "Increase reach by 5 feet and add a superiority die to damage."),
    ("Maneuvering Attack", "An ally may move half speed without provoking."),
    ("Menacing Attack", "The target must save or be frightened."),
    ("Parry", "Reduce melee damage taken by a superiority die + Dexterity modifier."),
    ("Precision Attack", "Add a superiority die to an attack roll."),
    ("Pushing Attack", "Push the target up to 15 feet away."),
    ("Rally", "An ally gains temporary hit points."),
    ("Riposte", "Attack a creature that misses you."),
    ("Sweeping Attack", "Deal superiority die damage to a second creature."),
    ("Tactical Assessment", "Add a superiority die to Investigation, History or Insight."),
    ("Trip Attack", "Knock the target prone."),
)

METAMAGIC = _options(
    ("Careful Spell", "Chosen creatures succeed on the spell's saving throw."),
    ("Distant Spell", "Double the spell's range."),
    ("Empowered Spell", "Reroll damage dice up to your Charisma modifier."),
    ("Extended Spell", "Double the spell's duration."),
    ("Heightened Spell", "One target has disadvantage on its first save."),
    ("Quickened Spell", "Cast the spell as a Bonus Action."),
    ("Seeking Spell", "Reroll a missed spell attack."),
    ("Subtle Spell", "Cast without verbal or somatic components."),
    ("Transmuted Spell", "Change the spell's damage type."),
    ("Twinned Spell", "Target a second creature with a single-target spell."),
)

ELDRITCH_INVOCATIONS = _options(
    ("Agonizing Blast", "Add your Charisma modifier to eldritch blast damage."),
    ("Armor of Shadows", "Cast mage armor on yourself at will."),
    ("Beast Speech", "Cast speak with animals at will."),
    ("Beguiling Influence", "Gain proficiency in Deception and Persuasion."),
    ("Devil's Sight", "See normally in darkness up to 120 feet."),
    ("Eldritch Mind", "Advantage on saves to maintain Concentration."),
    ("Eldritch Sight", "Cast detect magic at will."),
    ("Eldritch Spear", "Eldritch blast range becomes 300 feet."),
    ("Eyes of the Rune Keeper", "Read all writing."),
    ("Fiendish Vigor", "Cast false life on yourself at will."),
    ("Gaze of Two Minds", "Perceive through a willing humanoid's senses."),
    ("Grasp of Hadar", "Pull a creature 10 feet closer on an eldritch blast hit."),
    ("Lance of Lethargy", "Reduce a creature's speed on an eldritch blast hit."),
    ("Mask of Many Faces", "Cast disguise self at will."),
    ("Misty Visions", "Cast silent image at will."),
    ("One with Shadows", "Become invisible in dim light or darkness."),
    ("Otherworldly Leap", "Cast jump on yourself at will."),
    ("Repelling Blast", "Push a creature 10 feet away on an eldritch blast hit."),
    ("Thirsting Blade", "Attack twice with your pact weapon."),
    ("Whispers of the Grave", "Cast speak with dead at will."),
    ("Witch Sight", "See the true form of shapechangers and invisible creatures."),
)

SKILLS = _options(
    ("Acrobatics", "Balance, tumbling and aerial maneuvers."),
    ("Animal Handling", "Calm, control or intuit animals."),
    ("Arcana", "Magical lore, spells, items and planes."),
    ("Athletics", "Climbing, jumping, swimming and grappling."),
    ("Deception", "Lying, disguising and misleading others."),
    ("History", "Historical events, people and cultures."),
    ("Insight", "Determine true intentions."),
    ("Intimidation", "Threaten, coerce or frighten."),
    ("Investigation", "Find clues and make deductions."),
    ("Medicine", "Diagnose, stabilize and treat ailments."),
    ("Nature", "Plants, animals, terrain and weather."),
    ("Perception", "Spot, hear or detect presence."),
    ("Performance", "Entertain through music, dance or acting."),
    ("Persuasion", "Influence with tact and diplomacy."),
    ("Religion", "Deities, rites and religious organizations."),
    ("Sleight of Hand", "Pick pockets, plant items, manual trickery."),
    ("Stealth", "Hide and move silently."),
    ("Survival", "Track, forage and navigate the wilderness."),
)

TOTEM_SPIRITS = _options(
    ("Bear", "Resistance to all damage except psychic while raging."),
    ("Eagle", "Opportunity attacks against you have disadvantage while raging."),
    ("Elk", "Walking speed increases by 15 feet while raging."),
    ("Tiger", "Longer jumps while raging."),
    ("Wolf", "Allies have advantage against enemies next to you while raging."),
)

PACT_BOONS = _options(
    ("Pact of the Blade", "Conjure a pact weapon."),
    ("Pact of the Chain", "Learn find familiar with special forms."),
    ("Pact of the Tome", "Receive a Book of Shadows with three cantrips."),
    ("Pact of the Talisman", "Add 1d4 to failed ability checks."),
)

LAND_TYPES = _options(
    ("Arctic", "Tundra, glaciers and frozen wastes."),
    ("Coast", "Beaches, cliffs and coastal waters."),
    ("Desert", "Dunes, badlands and salt flats."),
    ("Forest", "Woodlands, groves and jungles."),
    ("Grassland", "Plains, prairies and savannas."),
    ("Mountain", "Peaks, passes and alpine slopes."),
    ("Swamp", "Marshes, bogs and wetlands."),
    ("Underdark", "Subterranean caves and caverns."),
)


# =============================================================================
# Choices by Class and Subclass
# =============================================================================

def _single(feature_name: str, level: int, options: tuple[FeatureChoiceOption, ...]) -> FeatureChoice:
    return FeatureChoice(feature_name=feature_name, level=level, options=options)


def _multiple(
    feature_name: str, level: int, count: int, options: tuple[FeatureChoiceOption, ...]
) -> FeatureChoice:
    return FeatureChoice(
        feature_name=feature_name,
        level=level,
        kind=ChoiceKind.MULTIPLE,
        count=count,
        options=options,
    )


CLASS_FEATURE_CHOICES: dict[str, tuple[FeatureChoice, ...]] = {
    "fighter": (
        _single("Fighting Style", 1, FIGHTING_STYLES),
        _single("Fighting Style (Additional)", 10, FIGHTING_STYLES),
    ),
    "paladin": (
        _single(
            "Fighting Style",
            2,
            _pick(
                FIGHTING_STYLES,
                "defense", "dueling", "great-weapon-fighting",
                "protection", "blind-fighting", "interception",
            ),
        ),
    ),
    "ranger": (
        _single(
            "Fighting Style",
            2,
            _pick(
                FIGHTING_STYLES,
                "archery", "defense", "dueling",
                "thrown-weapon-fighting", "two-weapon-fighting", "blind-fighting",
            ),
        ),
    ),
    "rogue": (
        _multiple("Expertise", 1, 2, SKILLS),
        _multiple("Expertise (Additional)", 6, 2, SKILLS),
    ),
    "bard": (
        _multiple("Expertise", 2, 2, SKILLS),
        _multiple("Expertise (Additional)", 9, 2, SKILLS),
    ),
    "sorcerer": (
        _multiple("Metamagic", 2, 2, METAMAGIC),
        _multiple("Metamagic (Additional)", 10, 1, METAMAGIC),
        _multiple("Metamagic (Additional)", 17, 1, METAMAGIC),
    ),
    "warlock": (
        _multiple("Eldritch Invocation", 2, 2, ELDRITCH_INVOCATIONS),
        _single("Pact Boon", 3, PACT_BOONS),
        *(
            _multiple("Eldritch Invocation (Additional)", level, 1, ELDRITCH_INVOCATIONS)
            for level in (5, 7, 9, 12, 15, 18)
        ),
    ),
}

SUBCLASS_FEATURE_CHOICES: dict[str, tuple[FeatureChoice, ...]] = {
    "battle-master": (
        _multiple("Combat Superiority: Maneuvers", 3, 3, MANEUVERS),
        *(
            _multiple("Maneuvers (Additional)", level, 2, MANEUVERS)
            for level in (7, 10, 15)
        ),
    ),
    "path-of-the-totem-warrior": (
        _single("Totem Spirit", 3, TOTEM_SPIRITS),
        _single("Aspect of the Beast", 6, TOTEM_SPIRITS),
        _single("Totemic Attunement", 14, TOTEM_SPIRITS),
    ),
    "circle-of-the-land": (
        _single("Land Type", 2, LAND_TYPES),
    ),
}


__all__ = [
    "FIGHTING_STYLES",
    "MANEUVERS",
    "METAMAGIC",
    "ELDRITCH_INVOCATIONS",
    "SKILLS",
    "TOTEM_SPIRITS",
    "PACT_BOONS",
    "LAND_TYPES",
    "CLASS_FEATURE_CHOICES",
    "SUBCLASS_FEATURE_CHOICES",
]
