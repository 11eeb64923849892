"""
Character catalog and ability registry.

This module loads character definitions from characters.json and maps
every ability identifier ('<character>.<slot>') to its implementation.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from mayhem.types import AbilityId, CharacterId
from mayhem.abilities import (
    Ability,
    UniformDamageAbility,
    StealShieldAbility,
    DestroyShieldAbility,
    ShatterShieldsAbility,
    IgnoreShieldsAbility,
    DoubleAttackAbility,
    DestroyAllShieldsAbility,
    RedrawHandsAbility,
    RecoverDiscardAbility,
    StealTopCardsAbility,
    RotateHealthAbility,
    DrainAbility,
    ShieldControlAbility,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Definitions
# =============================================================================


@dataclass(frozen=True, slots=True)
class AbilityDef:
    """A named ability slot of a character."""

    id: AbilityId
    """Registry key, '<character>.<slot>'."""

    slot: int
    name: str
    text: str
    ability: Ability


@dataclass(frozen=True, slots=True)
class CharacterDef:
    """Immutable definition of a playable character."""

    id: CharacterId
    name: str
    abilities: tuple[AbilityDef, ...]

    def ability_ids(self) -> tuple[AbilityId, ...]:
        return tuple(a.id for a in self.abilities)


def ability_id(character_id: str, slot: int) -> AbilityId:
    return AbilityId(f"{character_id}.{slot}")


# =============================================================================
# JSON Loading and Parsing
# =============================================================================

# Path to the characters.json file (next to this module)
CHARACTERS_JSON_PATH = Path(__file__).parent / "characters.json"


def _parse_ability(ability_data: dict[str, Any]) -> Ability:
    """Parse an ability dictionary into an Ability object."""
    ability_type = ability_data["type"]

    match ability_type:
        case "UniformDamageAbility":
            return UniformDamageAbility(amount=int(ability_data["amount"]))

        case "StealShieldAbility":
            return StealShieldAbility()

        case "DestroyShieldAbility":
            return DestroyShieldAbility()

        case "ShatterShieldsAbility":
            return ShatterShieldsAbility()

        case "IgnoreShieldsAbility":
            return IgnoreShieldsAbility()

        case "DoubleAttackAbility":
            return DoubleAttackAbility()

        case "DestroyAllShieldsAbility":
            return DestroyAllShieldsAbility()

        case "RedrawHandsAbility":
            return RedrawHandsAbility(count=int(ability_data.get("count", 3)))

        case "RecoverDiscardAbility":
            return RecoverDiscardAbility()

        case "StealTopCardsAbility":
            return StealTopCardsAbility()

        case "RotateHealthAbility":
            return RotateHealthAbility()

        case "DrainAbility":
            return DrainAbility(amount=int(ability_data.get("amount", 1)))

        case "ShieldControlAbility":
            return ShieldControlAbility()

        case _:
            raise ValueError(f"Unknown ability type: {ability_type}")


def _parse_character_def(character_data: dict[str, Any]) -> CharacterDef:
    """Parse a character dictionary into a CharacterDef object."""
    character_id = character_data["id"]
    abilities = tuple(
        AbilityDef(
            id=ability_id(character_id, a["slot"]),
            slot=a["slot"],
            name=a["name"],
            text=a.get("text", ""),
            ability=_parse_ability(a),
        )
        for a in character_data.get("abilities", [])
    )

    slots = [a.slot for a in abilities]
    if len(set(slots)) != len(slots):
        raise ValueError(f"Duplicate ability slot for character: {character_id}")

    return CharacterDef(
        id=CharacterId(character_id),
        name=character_data["name"],
        abilities=abilities,
    )


def _load_characters_from_json(path: Path = CHARACTERS_JSON_PATH) -> tuple[CharacterDef, ...]:
    """Load all character definitions from the JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    characters = tuple(_parse_character_def(c) for c in data["characters"])
    logger.debug("Loaded %d characters from %s", len(characters), path)
    return characters


def _build_ability_registry(characters: tuple[CharacterDef, ...]) -> dict[AbilityId, Ability]:
    return {a.id: a.ability for c in characters for a in c.abilities}


# =============================================================================
# Character Data (loaded from JSON)
# =============================================================================

# Load characters once at module import time
ALL_CHARACTERS: tuple[CharacterDef, ...] = _load_characters_from_json()

# Registries for quick lookup by ID
CHARACTER_REGISTRY: dict[CharacterId, CharacterDef] = {c.id: c for c in ALL_CHARACTERS}
ABILITY_REGISTRY: dict[AbilityId, Ability] = _build_ability_registry(ALL_CHARACTERS)


# =============================================================================
# Public API Functions
# =============================================================================


def get_character(character_id: CharacterId) -> CharacterDef | None:
    """Get a character definition by ID."""
    return CHARACTER_REGISTRY.get(character_id)


def get_ability(ability_id: AbilityId) -> Ability:
    """Get an ability implementation by ID, raising KeyError if unknown."""
    ability = ABILITY_REGISTRY.get(ability_id)
    if ability is None:
        raise KeyError(f"Ability not found: {ability_id}")
    return ability


def character_abilities(character_id: CharacterId) -> tuple[AbilityDef, ...]:
    """The ability slots of a character (empty for unknown characters)."""
    character = CHARACTER_REGISTRY.get(character_id)
    if character is None:
        return ()
    return character.abilities


def reload_characters(path: Path = CHARACTERS_JSON_PATH) -> None:
    """
    Reload character definitions from a JSON file.

    Useful for development and testing balance changes.
    """
    global ALL_CHARACTERS, CHARACTER_REGISTRY, ABILITY_REGISTRY

    ALL_CHARACTERS = _load_characters_from_json(path)
    CHARACTER_REGISTRY = {c.id: c for c in ALL_CHARACTERS}
    ABILITY_REGISTRY = _build_ability_registry(ALL_CHARACTERS)
