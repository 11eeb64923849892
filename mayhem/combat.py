"""
Combat resolution.

Applies damage and healing, consulting the attacker's turn modifiers.
Shield absorption is the shields doing their job, so it is not routed
through the mediator; ability-driven shield changes are (see abilities).
"""

from __future__ import annotations

import logging

from mayhem.models import Player
from mayhem.events import (
    GameEvent,
    DamageDealtEvent,
    ShieldsAbsorbedEvent,
    DoubleAttackTriggeredEvent,
    HealedEvent,
)

logger = logging.getLogger(__name__)


def resolve_attack(attacker: Player | None, target: Player, damage: int) -> list[GameEvent]:
    """
    Resolve one attack of ``damage`` from attacker against target.

    Sequence:
    1. attacker.ignore_shields: full damage to health, shields untouched
    2. otherwise shields absorb first, one point per shield
    3. if this attack broke the last shield and the attacker has
       double_attack_on_shield_destroy, a second full hit lands
    4. leftover damage reduces health (not clamped)

    The attacker's flags are left as they are; the turn controller clears them.

    Args:
        attacker: The attacking player (None for sourceless damage)
        target: The player being hit
        damage: Damage of a single application

    Returns:
        Events generated, in order
    """
    if damage < 0:
        raise ValueError(f"Damage must be non-negative, got {damage}")

    events = _apply_hit(attacker, target, damage)

    if (
        attacker is not None
        and attacker.modifiers.double_attack_on_shield_destroy
        and any(isinstance(e, ShieldsAbsorbedEvent) and e.remaining_shields == 0 for e in events)
    ):
        events.append(DoubleAttackTriggeredEvent(attacker=attacker.name, target=target.name))
        logger.debug("Double attack: %s hits %s again for %d", attacker.name, target.name, damage)
        events.extend(_apply_hit(attacker, target, damage))

    return events


def _apply_hit(attacker: Player | None, target: Player, damage: int) -> list[GameEvent]:
    """A single damage application with no follow-up."""
    events: list[GameEvent] = []
    remaining = damage

    bypass = attacker is not None and attacker.modifiers.ignore_shields
    if not bypass and target.shields > 0 and remaining > 0:
        absorbed = target.absorb(remaining)
        remaining -= absorbed
        events.append(
            ShieldsAbsorbedEvent(
                target=target.name,
                absorbed=absorbed,
                remaining_shields=target.shields,
            )
        )

    if remaining > 0:
        target.lose_health(remaining)
        events.append(
            DamageDealtEvent(
                source=attacker.name if attacker is not None else None,
                target=target.name,
                amount=remaining,
                remaining_health=target.health,
            )
        )

    return events


def heal(player: Player, amount: int) -> list[GameEvent]:
    """Heal a player (capped at max health)."""
    restored = player.heal(amount)
    if restored == 0:
        return []
    return [HealedEvent(player=player.name, amount=restored)]
