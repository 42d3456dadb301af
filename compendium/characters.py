"""Default 5e character sheet.

A new sheet starts at level 0 with every ability at 10, proficiency bonus
+2, no proficiencies, and empty inventory. The id is the slugified name
plus a short random suffix so two "Gareth"s don't collide on disk.

Skills map to the ability that drives them:
  strength     athletics
  dexterity    acrobatics, sleight-of-hand, stealth
  intelligence arcana, history, investigation, nature, religion
  wisdom       animal-handling, insight, medicine, perception, survival
  charisma     deception, intimidation, performance, persuasion
"""

import random
import string

from compendium.storage import slugify

ABILITIES = (
    "strength",
    "dexterity",
    "constitution",
    "intelligence",
    "wisdom",
    "charisma",
)

SKILL_ABILITIES = {
    "acrobatics": "dexterity",
    "animal-handling": "wisdom",
    "arcana": "intelligence",
    "athletics": "strength",
    "deception": "charisma",
    "history": "intelligence",
    "insight": "wisdom",
    "intimidation": "charisma",
    "investigation": "intelligence",
    "medicine": "wisdom",
    "nature": "intelligence",
    "perception": "wisdom",
    "performance": "charisma",
    "persuasion": "charisma",
    "religion": "intelligence",
    "sleight-of-hand": "dexterity",
    "stealth": "dexterity",
    "survival": "wisdom",
}


def ability_modifier(score: int) -> int:
    """10-11 → 0, 12-13 → +1, 8-9 → -1."""
    return (score - 10) // 2


def new_character_id(name: str) -> str:
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=4))
    base = slugify(name) if name.strip() else "character"
    return f"{base}-{suffix}"


def new_character(name: str) -> dict:
    """Create a blank character sheet dict for name."""
    scores = {ability: 10 for ability in ABILITIES}
    return {
        "id": new_character_id(name),
        "name": name,
        "classes": [],
        "race": "",
        "size": "Medium",
        "background": "",
        "alignment": "true-neutral",
        "experience": 0,
        "proficiencyBonus": 2,
        "inspiration": False,
        "abilityScores": scores,
        "savingThrows": {
            ability: {"proficient": False, "modifier": ability_modifier(score)}
            for ability, score in scores.items()
        },
        "skills": {
            skill: {
                "proficiency": "none",
                "modifier": ability_modifier(scores[ability]),
            }
            for skill, ability in SKILL_ABILITIES.items()
        },
        "combat": {
            "maxHitPoints": 1,
            "currentHitPoints": 1,
            "temporaryHitPoints": 0,
            "armorClass": 10,
            "initiative": ability_modifier(scores["dexterity"]),
            "speed": 30,
            "hitDicePools": [],
            "deathSaves": {"successes": 0, "failures": 0},
        },
        "levelStack": [],
        "weapons": [],
        "armor": [],
        "equipment": [],
        "currency": {"platinum": 0, "gold": 0, "electrum": 0, "silver": 0, "copper": 0},
        "features": [],
        "languages": ["Common"],
        "otherProficiencies": [],
    }
