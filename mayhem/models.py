"""
Data models for the game engine.

Cards are frozen; players are mutable and changed in place by abilities
and combat. Every container move transfers the same Card object between
a player's deck, hand and discard pile, one card at a time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence, TYPE_CHECKING

from mayhem.types import (
    CardId,
    CharacterId,
    PlayerName,
    ActorKind,
    MAX_HEALTH,
)

if TYPE_CHECKING:
    from mayhem.mediator import ShieldMediator

logger = logging.getLogger(__name__)


# =============================================================================
# Cards
# =============================================================================


@dataclass(frozen=True, slots=True, eq=False)
class Card:
    """
    A single physical card.

    Identity matters: two cards with the same id are still distinct objects,
    so equality is by identity.
    """

    card_id: CardId
    """Identifier of the card's definition."""

    name: str = ""
    """Display name."""

    def __str__(self) -> str:
        return self.name or self.card_id


def make_deck(card_ids: Iterable[str]) -> list[Card]:
    """Create a deck with one fresh Card per id, top of deck first."""
    return [Card(card_id=CardId(cid), name=cid.replace("_", " ").title()) for cid in card_ids]


# =============================================================================
# Turn Modifiers
# =============================================================================


@dataclass(slots=True)
class TurnModifiers:
    """
    Per-player state that outlives the ability call that set it.

    The flags are cleared by the turn controller at the end of the owner's
    turn; ``shields_controlled_by`` mirrors the mediator's table.
    """

    ignore_shields: bool = False
    """This player's attacks bypass shields."""

    double_attack_on_shield_destroy: bool = False
    """Breaking a target's last shield triggers a second full hit."""

    shields_controlled_by: Player | None = None
    """The delegate currently holding authority over these shields."""

    def clear(self) -> None:
        """Reset the turn-scoped flags (delegation is owned by the mediator)."""
        self.ignore_shields = False
        self.double_attack_on_shield_destroy = False

    @property
    def any_active(self) -> bool:
        return self.ignore_shields or self.double_attack_on_shield_destroy


# =============================================================================
# Player
# =============================================================================


@dataclass(slots=True, eq=False)
class Player:
    """
    A participant in a match.

    Equality is identity: the roster holds each player exactly once.
    """

    name: PlayerName
    """Unique name within the match."""

    health: int = MAX_HEALTH
    """Current health. May go negative until the defeat check runs."""

    max_health: int = MAX_HEALTH
    """Healing never raises health above this."""

    shields: int = 0
    """Damage-absorbing counter, never negative."""

    hand: list[Card] = field(default_factory=list)
    deck: list[Card] = field(default_factory=list)
    """Undrawn cards; index 0 is the top."""

    discard: list[Card] = field(default_factory=list)
    """Spent cards; index 0 is the oldest discard."""

    modifiers: TurnModifiers = field(default_factory=TurnModifiers)
    kind: ActorKind = ActorKind.HUMAN
    character_id: CharacterId | None = None
    mediator: ShieldMediator | None = field(default=None, repr=False)

    def __str__(self) -> str:
        return self.name

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    @property
    def is_defeated(self) -> bool:
        return self.health <= 0

    def lose_health(self, amount: int) -> int:
        """Reduce health by amount (not clamped). Returns the amount lost."""
        _check_amount(amount)
        self.health -= amount
        return amount

    def heal(self, amount: int) -> int:
        """
        Restore health up to max_health.

        Returns:
            The health actually restored
        """
        _check_amount(amount)
        restored = max(0, min(amount, self.max_health - self.health))
        self.health += restored
        return restored

    # -------------------------------------------------------------------------
    # Shields
    # -------------------------------------------------------------------------

    @property
    def can_hold_delegation(self) -> bool:
        """Whether this participant may be granted control of others' shields."""
        return self.mediator is not None and self.kind is not ActorKind.NEUTRAL

    def shields_changeable_by(self, actor: Player | None) -> bool:
        """Ask the mediator whether actor may currently change these shields."""
        if self.mediator is None:
            return True
        return self.mediator.is_authorized(self, actor)

    def set_shields(self, value: int, actor: Player | None = None) -> int:
        """
        Set the shield counter if actor is authorized.

        Returns:
            The signed change applied (0 when blocked)
        """
        _check_amount(value)
        if not self.shields_changeable_by(actor):
            logger.debug(
                "Blocked shield change on %s by %s", self.name, actor.name if actor else None
            )
            return 0
        delta = value - self.shields
        self.shields = value
        return delta

    def add_shields(self, amount: int, actor: Player | None = None) -> int:
        _check_amount(amount)
        return self.set_shields(self.shields + amount, actor)

    def remove_shields(self, amount: int, actor: Player | None = None) -> int:
        """Remove up to amount shields. Returns the (non-negative) number removed."""
        _check_amount(amount)
        return -self.set_shields(max(0, self.shields - amount), actor)

    def absorb(self, damage: int) -> int:
        """
        Spend shields against incoming damage.

        Returns:
            The damage absorbed
        """
        _check_amount(damage)
        absorbed = min(self.shields, damage)
        self.shields -= absorbed
        return absorbed

    # -------------------------------------------------------------------------
    # Cards
    # -------------------------------------------------------------------------

    def draw(self, count: int = 1) -> list[Card]:
        """
        Draw up to count cards from the top of the deck.

        Drawing from an exhausted deck is not an error; fewer cards are drawn.
        """
        _check_amount(count)
        drawn: list[Card] = []
        for _ in range(count):
            if not self.deck:
                logger.debug("%s's deck is empty, drew %d of %d", self.name, len(drawn), count)
                break
            card = self.deck.pop(0)
            self.hand.append(card)
            drawn.append(card)
        return drawn

    def take_top_of_deck(self) -> Card | None:
        """Remove and return the top card of the deck (None if empty)."""
        if not self.deck:
            return None
        return self.deck.pop(0)

    def discard_card(self, card: Card) -> None:
        """Move a card from hand to the discard pile."""
        for i, held in enumerate(self.hand):
            if held is card:
                del self.hand[i]
                self.discard.append(card)
                return
        raise ValueError(f"{card} is not in {self.name}'s hand")

    def discard_hand(self) -> list[Card]:
        """Discard every card in hand, in hand order."""
        discarded = list(self.hand)
        for card in discarded:
            self.discard_card(card)
        return discarded

    def recover_discard(self) -> Card | None:
        """Move the oldest discarded card back into hand (None if pile is empty)."""
        if not self.discard:
            return None
        card = self.discard.pop(0)
        self.hand.append(card)
        return card

    # -------------------------------------------------------------------------
    # Turn modifiers
    # -------------------------------------------------------------------------

    def clear_turn_modifiers(self) -> bool:
        """
        Reset ignore-shields and double-attack flags.

        Returns:
            Whether any flag was active
        """
        was_active = self.modifiers.any_active
        self.modifiers.clear()
        return was_active


def _check_amount(amount: int) -> None:
    if amount < 0:
        raise ValueError(f"Amount must be non-negative, got {amount}")


def opponents_of(roster: Sequence[Player], player: Player) -> list[Player]:
    """Every roster member except player, in seating order."""
    return [p for p in roster if p is not player]
