"""
Event types for the game engine.

Events form a typed log of everything that happens during a match.
Each event carries a one-line ``message`` for presentation layers; the
message is advisory, the player state is authoritative.
"""

from dataclasses import dataclass

from mayhem.types import (
    PlayerName,
    CardId,
    TurnNumber,
    GameResult,
)


# =============================================================================
# Turn Events
# =============================================================================


@dataclass(frozen=True, slots=True)
class TurnStartedEvent:
    """A player's turn has begun."""

    turn: TurnNumber
    """The turn number that started."""

    player: PlayerName
    """Whose turn it is."""

    @property
    def event_type(self) -> str:
        return "turn_started"

    @property
    def message(self) -> str:
        return f"Turn {self.turn}: {self.player} to act."


@dataclass(frozen=True, slots=True)
class TurnEndedEvent:
    """A player's turn has ended."""

    turn: TurnNumber
    """The turn number that ended."""

    player: PlayerName
    """Whose turn ended."""

    @property
    def event_type(self) -> str:
        return "turn_ended"

    @property
    def message(self) -> str:
        return f"{self.player} ended turn {self.turn}."


@dataclass(frozen=True, slots=True)
class ModifiersClearedEvent:
    """Turn-scoped flags were reset at a turn boundary."""

    player: PlayerName

    @property
    def event_type(self) -> str:
        return "modifiers_cleared"

    @property
    def message(self) -> str:
        return f"{self.player}'s turn modifiers wore off."


# =============================================================================
# Combat Events
# =============================================================================


@dataclass(frozen=True, slots=True)
class DamageDealtEvent:
    """Damage reached a player's health."""

    source: PlayerName | None
    """The attacker (None for sourceless damage)."""

    target: PlayerName
    """The player who lost health."""

    amount: int
    """Health lost."""

    remaining_health: int
    """Health after the hit (may be negative)."""

    @property
    def event_type(self) -> str:
        return "damage_dealt"

    @property
    def message(self) -> str:
        return f"{self.target} took {self.amount} damage ({self.remaining_health} left)."


@dataclass(frozen=True, slots=True)
class ShieldsAbsorbedEvent:
    """Shields soaked up part of an attack."""

    target: PlayerName
    absorbed: int
    remaining_shields: int

    @property
    def event_type(self) -> str:
        return "shields_absorbed"

    @property
    def message(self) -> str:
        return f"{self.target}'s shields absorbed {self.absorbed} damage."


@dataclass(frozen=True, slots=True)
class DoubleAttackTriggeredEvent:
    """A shield break triggered the attacker's second strike."""

    attacker: PlayerName
    target: PlayerName

    @property
    def event_type(self) -> str:
        return "double_attack_triggered"

    @property
    def message(self) -> str:
        return f"{self.attacker} broke {self.target}'s shields and strikes again!"


@dataclass(frozen=True, slots=True)
class HealedEvent:
    """A player regained health."""

    player: PlayerName
    amount: int
    """Health actually restored (after the max-health cap)."""

    @property
    def event_type(self) -> str:
        return "healed"

    @property
    def message(self) -> str:
        return f"{self.player} healed {self.amount}."


# =============================================================================
# Resource Events
# =============================================================================


@dataclass(frozen=True, slots=True)
class ShieldsChangedEvent:
    """A player's shield counter was changed by an ability."""

    player: PlayerName
    old_shields: int
    new_shields: int
    actor: PlayerName | None
    """Who made the change."""

    @property
    def event_type(self) -> str:
        return "shields_changed"

    @property
    def message(self) -> str:
        return f"{self.player}'s shields: {self.old_shields} -> {self.new_shields}."


@dataclass(frozen=True, slots=True)
class ShieldChangeBlockedEvent:
    """A shield change was refused because another player controls them."""

    player: PlayerName
    actor: PlayerName | None
    controller: PlayerName

    @property
    def event_type(self) -> str:
        return "shield_change_blocked"

    @property
    def message(self) -> str:
        return f"{self.player}'s shields are controlled by {self.controller}."


@dataclass(frozen=True, slots=True)
class HealthRedistributedEvent:
    """Health values were rotated around the roster."""

    players: tuple[PlayerName, ...]
    old_health: tuple[int, ...]
    new_health: tuple[int, ...]

    @property
    def event_type(self) -> str:
        return "health_redistributed"

    @property
    def message(self) -> str:
        return "Health totals rotated around the table."


# =============================================================================
# Card Events
# =============================================================================


@dataclass(frozen=True, slots=True)
class CardDrawnEvent:
    """A card moved from a deck to a hand."""

    player: PlayerName
    """The player whose hand received the card."""

    card_id: CardId

    from_player: PlayerName | None = None
    """Owner of the deck, when drawn from someone else's deck."""

    @property
    def event_type(self) -> str:
        return "card_drawn"

    @property
    def message(self) -> str:
        if self.from_player is not None:
            return f"{self.player} took a card from {self.from_player}'s deck."
        return f"{self.player} drew a card."


@dataclass(frozen=True, slots=True)
class CardDiscardedEvent:
    """A card moved from a hand to its owner's discard pile."""

    player: PlayerName
    card_id: CardId

    @property
    def event_type(self) -> str:
        return "card_discarded"

    @property
    def message(self) -> str:
        return f"{self.player} discarded {self.card_id}."


@dataclass(frozen=True, slots=True)
class CardRecoveredEvent:
    """A card moved from a discard pile back to hand."""

    player: PlayerName
    card_id: CardId

    @property
    def event_type(self) -> str:
        return "card_recovered"

    @property
    def message(self) -> str:
        return f"{self.player} recovered {self.card_id} from the discard pile."


# =============================================================================
# Modifier & Delegation Events
# =============================================================================


@dataclass(frozen=True, slots=True)
class ModifierSetEvent:
    """A turn-scoped flag was switched on."""

    player: PlayerName
    modifier: str
    """Field name on TurnModifiers."""

    @property
    def event_type(self) -> str:
        return "modifier_set"

    @property
    def message(self) -> str:
        return f"{self.player} gained {self.modifier.replace('_', ' ')} this turn."


@dataclass(frozen=True, slots=True)
class ShieldControlGrantedEvent:
    """A delegate took control of another player's shields."""

    delegate: PlayerName
    owner: PlayerName

    @property
    def event_type(self) -> str:
        return "shield_control_granted"

    @property
    def message(self) -> str:
        return f"{self.delegate} controls {self.owner}'s shields until their next turn."


@dataclass(frozen=True, slots=True)
class ShieldControlRevokedEvent:
    """A delegation ended."""

    delegate: PlayerName
    owner: PlayerName

    @property
    def event_type(self) -> str:
        return "shield_control_revoked"

    @property
    def message(self) -> str:
        return f"{self.owner} regained control of their shields from {self.delegate}."


# =============================================================================
# Ability Events
# =============================================================================


@dataclass(frozen=True, slots=True)
class AbilityUsedEvent:
    """An ability resolved; carries its outcome line."""

    player: PlayerName
    summary: str

    @property
    def event_type(self) -> str:
        return "ability_used"

    @property
    def message(self) -> str:
        return self.summary


@dataclass(frozen=True, slots=True)
class AbilityFizzledEvent:
    """An ability found no valid target and changed nothing."""

    player: PlayerName
    reason: str

    @property
    def event_type(self) -> str:
        return "ability_fizzled"

    @property
    def message(self) -> str:
        return f"{self.player}'s ability had no effect: {self.reason}."


@dataclass(frozen=True, slots=True)
class AbilityRejectedEvent:
    """The invoker is not allowed to use this ability."""

    player: PlayerName
    reason: str

    @property
    def event_type(self) -> str:
        return "ability_rejected"

    @property
    def message(self) -> str:
        return self.reason


@dataclass(frozen=True, slots=True)
class ActionInvalidEvent:
    """A controller action was invalid and rejected."""

    player: PlayerName
    reason: str

    @property
    def event_type(self) -> str:
        return "action_invalid"

    @property
    def message(self) -> str:
        return f"Invalid action by {self.player}: {self.reason}."


# =============================================================================
# Match Events
# =============================================================================


@dataclass(frozen=True, slots=True)
class MatchStartedEvent:
    """The match has started."""

    players: tuple[PlayerName, ...]

    @property
    def event_type(self) -> str:
        return "match_started"

    @property
    def message(self) -> str:
        return f"Match started: {', '.join(self.players)}."


@dataclass(frozen=True, slots=True)
class PlayerDefeatedEvent:
    """A player's health dropped to zero or below."""

    player: PlayerName

    @property
    def event_type(self) -> str:
        return "player_defeated"

    @property
    def message(self) -> str:
        return f"{self.player} has been defeated."


@dataclass(frozen=True, slots=True)
class MatchEndedEvent:
    """The match has ended."""

    result: GameResult
    winner: PlayerName | None

    @property
    def event_type(self) -> str:
        return "match_ended"

    @property
    def message(self) -> str:
        if self.winner is None:
            return "The match ended in a draw."
        return f"{self.winner} wins the match!"


# =============================================================================
# Event Union Type
# =============================================================================

GameEvent = (
    TurnStartedEvent
    | TurnEndedEvent
    | ModifiersClearedEvent
    | DamageDealtEvent
    | ShieldsAbsorbedEvent
    | DoubleAttackTriggeredEvent
    | HealedEvent
    | ShieldsChangedEvent
    | ShieldChangeBlockedEvent
    | HealthRedistributedEvent
    | CardDrawnEvent
    | CardDiscardedEvent
    | CardRecoveredEvent
    | ModifierSetEvent
    | ShieldControlGrantedEvent
    | ShieldControlRevokedEvent
    | AbilityUsedEvent
    | AbilityFizzledEvent
    | AbilityRejectedEvent
    | ActionInvalidEvent
    | MatchStartedEvent
    | PlayerDefeatedEvent
    | MatchEndedEvent
)
