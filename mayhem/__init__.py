"""
Mayhem - Ability Resolution Engine

A turn-based multiplayer card game engine where character abilities mutate
shared combat resources (health, shields, hand, deck, discard pile).
This package contains pure game logic with no I/O beyond the bundled
character catalog.
"""

from mayhem.types import (
    PlayerName,
    CardId,
    CharacterId,
    AbilityId,
    TurnNumber,
    ActorKind,
    AbilityKind,
    GamePhase,
    GameResult,
)
from mayhem.models import (
    Card,
    TurnModifiers,
    Player,
    make_deck,
)
from mayhem.mediator import ShieldMediator
from mayhem.combat import resolve_attack, heal
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
from mayhem.characters import (
    CharacterDef,
    AbilityDef,
    get_ability,
    get_character,
)
from mayhem.controller import TurnController, Match, MatchConfig

__all__ = [
    # Types
    "PlayerName",
    "CardId",
    "CharacterId",
    "AbilityId",
    "TurnNumber",
    "ActorKind",
    "AbilityKind",
    "GamePhase",
    "GameResult",
    # Models
    "Card",
    "TurnModifiers",
    "Player",
    "make_deck",
    # Mediator & combat
    "ShieldMediator",
    "resolve_attack",
    "heal",
    # Abilities
    "Ability",
    "UniformDamageAbility",
    "StealShieldAbility",
    "DestroyShieldAbility",
    "ShatterShieldsAbility",
    "IgnoreShieldsAbility",
    "DoubleAttackAbility",
    "DestroyAllShieldsAbility",
    "RedrawHandsAbility",
    "RecoverDiscardAbility",
    "StealTopCardsAbility",
    "RotateHealthAbility",
    "DrainAbility",
    "ShieldControlAbility",
    # Catalog
    "CharacterDef",
    "AbilityDef",
    "get_ability",
    "get_character",
    # Controller
    "TurnController",
    "Match",
    "MatchConfig",
]
