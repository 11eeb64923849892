"""
Character abilities.

Each ability is a stateless, frozen dataclass exposing
``apply(roster, invoker) -> list[GameEvent]``. Anything that must outlive
the call is written onto a player's TurnModifiers or into the match's
ShieldMediator, never onto the ability.

An ability with no valid target is not an error: it changes nothing and
reports an AbilityFizzledEvent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from mayhem.types import AbilityKind, REDRAW_COUNT
from mayhem.models import Player, opponents_of
from mayhem.combat import resolve_attack, heal
from mayhem.events import (
    GameEvent,
    AbilityUsedEvent,
    AbilityFizzledEvent,
    AbilityRejectedEvent,
    ShieldsChangedEvent,
    ShieldChangeBlockedEvent,
    HealthRedistributedEvent,
    CardDrawnEvent,
    CardDiscardedEvent,
    CardRecoveredEvent,
    ModifierSetEvent,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Uniform Damage
# =============================================================================


@dataclass(frozen=True, slots=True)
class UniformDamageAbility:
    """Hit every other player for a fixed amount."""

    amount: int
    """Damage dealt to each opponent."""

    @property
    def kind(self) -> AbilityKind:
        return AbilityKind.UNIFORM_DAMAGE

    def apply(self, roster: Sequence[Player], invoker: Player) -> list[GameEvent]:
        events: list[GameEvent] = []
        for opponent in opponents_of(roster, invoker):
            events.extend(resolve_attack(invoker, opponent, self.amount))

        return _used(events, invoker, f"Every opponent took {self.amount} damage.")


# =============================================================================
# Steal One Resource
# =============================================================================


@dataclass(frozen=True, slots=True)
class StealShieldAbility:
    """Take one shield from the first shielded opponent."""

    @property
    def kind(self) -> AbilityKind:
        return AbilityKind.STEAL_ONE

    def apply(self, roster: Sequence[Player], invoker: Player) -> list[GameEvent]:
        if not invoker.shields_changeable_by(invoker):
            return _fizzled(invoker, "the invoker's own shields are controlled by someone else")

        opponent = _first_shielded_opponent(roster, invoker)
        if opponent is None:
            return _fizzled(invoker, "no opponent has shields to steal")

        events = _change_shields(opponent, opponent.shields - 1, invoker)
        events.extend(_change_shields(invoker, invoker.shields + 1, invoker))
        return _used(events, invoker, f"{invoker.name} stole a shield from {opponent.name}.")


@dataclass(frozen=True, slots=True)
class DestroyShieldAbility:
    """Destroy one shield of the first shielded opponent."""

    @property
    def kind(self) -> AbilityKind:
        return AbilityKind.STEAL_ONE

    def apply(self, roster: Sequence[Player], invoker: Player) -> list[GameEvent]:
        opponent = _first_shielded_opponent(roster, invoker)
        if opponent is None:
            return _fizzled(invoker, "no opponent has shields to destroy")

        events = _change_shields(opponent, opponent.shields - 1, invoker)
        return _used(events, invoker, f"{invoker.name} destroyed a shield of {opponent.name}.")


@dataclass(frozen=True, slots=True)
class ShatterShieldsAbility:
    """
    Destroy all shields of the first shielded opponent and heal that much.
    """

    @property
    def kind(self) -> AbilityKind:
        return AbilityKind.STEAL_ONE

    def apply(self, roster: Sequence[Player], invoker: Player) -> list[GameEvent]:
        opponent = _first_shielded_opponent(roster, invoker)
        if opponent is None:
            return _fizzled(invoker, "no opponent has shields to shatter")

        shattered = opponent.shields
        events = _change_shields(opponent, 0, invoker)
        events.extend(heal(invoker, shattered))
        return _used(
            events,
            invoker,
            f"{invoker.name} shattered {opponent.name}'s shields and healed {shattered}.",
        )


# =============================================================================
# Self Buffs (turn-scoped flags)
# =============================================================================


@dataclass(frozen=True, slots=True)
class IgnoreShieldsAbility:
    """The invoker's attacks bypass shields for the rest of the turn."""

    @property
    def kind(self) -> AbilityKind:
        return AbilityKind.SELF_BUFF

    def apply(self, roster: Sequence[Player], invoker: Player) -> list[GameEvent]:
        invoker.modifiers.ignore_shields = True
        events: list[GameEvent] = [ModifierSetEvent(player=invoker.name, modifier="ignore_shields")]
        return _used(events, invoker, f"{invoker.name}'s attacks ignore shields this turn.")


@dataclass(frozen=True, slots=True)
class DoubleAttackAbility:
    """Breaking a target's last shield this turn triggers a second hit."""

    @property
    def kind(self) -> AbilityKind:
        return AbilityKind.SELF_BUFF

    def apply(self, roster: Sequence[Player], invoker: Player) -> list[GameEvent]:
        invoker.modifiers.double_attack_on_shield_destroy = True
        events: list[GameEvent] = [
            ModifierSetEvent(player=invoker.name, modifier="double_attack_on_shield_destroy")
        ]
        return _used(events, invoker, f"{invoker.name} will strike twice when a shield breaks.")


# =============================================================================
# Mass Resets
# =============================================================================


@dataclass(frozen=True, slots=True)
class DestroyAllShieldsAbility:
    """Set every player's shields to zero, invoker included."""

    @property
    def kind(self) -> AbilityKind:
        return AbilityKind.MASS_RESET

    def apply(self, roster: Sequence[Player], invoker: Player) -> list[GameEvent]:
        events: list[GameEvent] = []
        for player in roster:
            events.extend(_change_shields(player, 0, invoker))

        return _used(events, invoker, f"{invoker.name} destroyed every shield in play.")


@dataclass(frozen=True, slots=True)
class RedrawHandsAbility:
    """Every player discards their hand and draws fresh cards."""

    count: int = REDRAW_COUNT
    """Cards each player draws after discarding."""

    @property
    def kind(self) -> AbilityKind:
        return AbilityKind.MASS_RESET

    def apply(self, roster: Sequence[Player], invoker: Player) -> list[GameEvent]:
        events: list[GameEvent] = []
        for player in roster:
            for card in player.discard_hand():
                events.append(CardDiscardedEvent(player=player.name, card_id=card.card_id))
            for card in player.draw(self.count):
                events.append(CardDrawnEvent(player=player.name, card_id=card.card_id))

        return _used(
            events,
            invoker,
            f"{invoker.name} made everyone discard their hand and draw {self.count}.",
        )


# =============================================================================
# Resource Recovery
# =============================================================================


@dataclass(frozen=True, slots=True)
class RecoverDiscardAbility:
    """Return the oldest card of the invoker's discard pile to hand."""

    @property
    def kind(self) -> AbilityKind:
        return AbilityKind.RECOVERY

    def apply(self, roster: Sequence[Player], invoker: Player) -> list[GameEvent]:
        card = invoker.recover_discard()
        if card is None:
            return _fizzled(invoker, "the discard pile is empty")

        events: list[GameEvent] = [CardRecoveredEvent(player=invoker.name, card_id=card.card_id)]
        return _used(events, invoker, f"{invoker.name} recovered {card} from the discard pile.")


@dataclass(frozen=True, slots=True)
class StealTopCardsAbility:
    """Take the top card of every opponent's deck into the invoker's hand."""

    @property
    def kind(self) -> AbilityKind:
        return AbilityKind.STEAL_EACH

    def apply(self, roster: Sequence[Player], invoker: Player) -> list[GameEvent]:
        events: list[GameEvent] = []
        for opponent in opponents_of(roster, invoker):
            card = opponent.take_top_of_deck()
            if card is None:
                continue
            invoker.hand.append(card)
            events.append(
                CardDrawnEvent(player=invoker.name, card_id=card.card_id, from_player=opponent.name)
            )

        if not events:
            return _fizzled(invoker, "every opponent's deck is empty")
        return _used(events, invoker, f"{invoker.name} took a card from each opponent's deck.")


# =============================================================================
# Redistribution & Trade-offs
# =============================================================================


@dataclass(frozen=True, slots=True)
class RotateHealthAbility:
    """
    Rotate health totals one seat along the roster.

    Player i receives the pre-rotation health of player i-1 (wrapping), so
    the total health at the table is unchanged.
    """

    @property
    def kind(self) -> AbilityKind:
        return AbilityKind.REDISTRIBUTION

    def apply(self, roster: Sequence[Player], invoker: Player) -> list[GameEvent]:
        if len(roster) < 2:
            return _fizzled(invoker, "there is nobody to trade health with")

        old_health = tuple(p.health for p in roster)
        new_health = old_health[-1:] + old_health[:-1]
        assert len(new_health) == len(roster)

        for player, health in zip(roster, new_health):
            player.health = health

        events: list[GameEvent] = [
            HealthRedistributedEvent(
                players=tuple(p.name for p in roster),
                old_health=old_health,
                new_health=new_health,
            )
        ]
        return _used(events, invoker, f"{invoker.name} swapped everyone's health around.")


@dataclass(frozen=True, slots=True)
class DrainAbility:
    """For each opponent: heal the invoker and hit the opponent."""

    amount: int = 1
    """Health drained per opponent."""

    @property
    def kind(self) -> AbilityKind:
        return AbilityKind.TRADE_OFF

    def apply(self, roster: Sequence[Player], invoker: Player) -> list[GameEvent]:
        events: list[GameEvent] = []
        drained = 0
        for opponent in opponents_of(roster, invoker):
            events.extend(heal(invoker, self.amount))
            events.extend(resolve_attack(invoker, opponent, self.amount))
            drained += 1

        if drained == 0:
            return _fizzled(invoker, "there are no opponents to drain")
        return _used(
            events, invoker, f"{invoker.name} healed {drained} time(s) and hit each opponent."
        )


# =============================================================================
# Delegated Control
# =============================================================================


@dataclass(frozen=True, slots=True)
class ShieldControlAbility:
    """The invoker controls every other player's shields until their next turn."""

    @property
    def kind(self) -> AbilityKind:
        return AbilityKind.DELEGATED_CONTROL

    def apply(self, roster: Sequence[Player], invoker: Player) -> list[GameEvent]:
        if not invoker.can_hold_delegation or invoker.mediator is None:
            logger.warning("%s cannot take control of shields", invoker.name)
            return [
                AbilityRejectedEvent(
                    player=invoker.name,
                    reason="Only a player in a match can take control of shields.",
                )
            ]

        events = invoker.mediator.set_shields_controlled_by_player(invoker, True)
        return _used(events, invoker, f"{invoker.name} controls the shields until their next turn.")


# Type alias for all ability types
Ability = (
    UniformDamageAbility
    | StealShieldAbility
    | DestroyShieldAbility
    | ShatterShieldsAbility
    | IgnoreShieldsAbility
    | DoubleAttackAbility
    | DestroyAllShieldsAbility
    | RedrawHandsAbility
    | RecoverDiscardAbility
    | StealTopCardsAbility
    | RotateHealthAbility
    | DrainAbility
    | ShieldControlAbility
)


# =============================================================================
# Helpers
# =============================================================================


def first_opponent(
    roster: Sequence[Player],
    invoker: Player,
    predicate: Callable[[Player], bool],
) -> Player | None:
    """The first opponent in seating order satisfying predicate."""
    for opponent in roster:
        if opponent is not invoker and predicate(opponent):
            return opponent
    return None


def _first_shielded_opponent(roster: Sequence[Player], invoker: Player) -> Player | None:
    # Shields held under someone else's control are not a valid target.
    return first_opponent(
        roster,
        invoker,
        lambda p: p.shields > 0 and p.shields_changeable_by(invoker),
    )


def _change_shields(target: Player, value: int, actor: Player) -> list[GameEvent]:
    """Set target's shields on behalf of actor, reporting the outcome."""
    old = target.shields
    if max(0, value) == old:
        return []
    if not target.shields_changeable_by(actor):
        assert target.mediator is not None
        controller = target.mediator.controller_of(target)
        assert controller is not None
        return [
            ShieldChangeBlockedEvent(
                player=target.name, actor=actor.name, controller=controller.name
            )
        ]

    target.set_shields(max(0, value), actor)
    if target.shields == old:
        return []
    return [
        ShieldsChangedEvent(
            player=target.name,
            old_shields=old,
            new_shields=target.shields,
            actor=actor.name,
        )
    ]


def _used(events: list[GameEvent], invoker: Player, summary: str) -> list[GameEvent]:
    logger.info(summary)
    events.append(AbilityUsedEvent(player=invoker.name, summary=summary))
    return events


def _fizzled(invoker: Player, reason: str) -> list[GameEvent]:
    logger.info("%s's ability fizzled: %s", invoker.name, reason)
    return [AbilityFizzledEvent(player=invoker.name, reason=reason)]
