"""
Shield control mediator.

One ShieldMediator exists per match. It holds only an authorization table
mapping a shield owner to the single player currently allowed to change
those shields. The shield counters themselves live on Player; the
mediator never touches them.
"""

from __future__ import annotations

import logging

from mayhem.types import PlayerName
from mayhem.models import Player
from mayhem.events import (
    GameEvent,
    ShieldControlGrantedEvent,
    ShieldControlRevokedEvent,
)

logger = logging.getLogger(__name__)


class ShieldMediator:
    """
    Arbitrates who may change whose shields.

    Usage:
        mediator = ShieldMediator()
        for player in roster:
            mediator.register(player)
        events = mediator.set_shields_controlled_by_player(delilah, True)
        ...
        events = mediator.revoke_expired(delilah)  # at the start of her turn
    """

    def __init__(self) -> None:
        self._players: dict[PlayerName, Player] = {}
        self._delegates: dict[PlayerName, Player] = {}

    def register(self, player: Player) -> None:
        """Attach a player to this mediator."""
        if player.name in self._players and self._players[player.name] is not player:
            raise ValueError(f"Duplicate player name: {player.name}")
        self._players[player.name] = player
        player.mediator = self

    @property
    def players(self) -> tuple[Player, ...]:
        return tuple(self._players.values())

    def controller_of(self, owner: Player) -> Player | None:
        """The delegate holding authority over owner's shields, if any."""
        return self._delegates.get(owner.name)

    def is_authorized(self, owner: Player, actor: Player | None) -> bool:
        """
        Whether actor may change owner's shields right now.

        Without a delegation anyone may; with one, only the delegate may.
        """
        delegate = self._delegates.get(owner.name)
        if delegate is None:
            return True
        return actor is delegate

    def set_shields_controlled_by_player(
        self, delegate: Player, active: bool
    ) -> list[GameEvent]:
        """
        Grant or revoke delegate's control over every other player's shields.

        Granting replaces any existing delegation of the same owner, so each
        owner has at most one delegate.

        Returns:
            Grant or revoke events, in seating order
        """
        if not active:
            return self._revoke(delegate)

        if not delegate.can_hold_delegation or delegate.mediator is not self:
            raise ValueError(f"{delegate.name} cannot hold shield delegation")

        events: list[GameEvent] = []
        for owner in self._players.values():
            if owner is delegate:
                continue
            previous = self._delegates.get(owner.name)
            if previous is delegate:
                continue
            if previous is not None:
                events.append(ShieldControlRevokedEvent(delegate=previous.name, owner=owner.name))
            self._delegates[owner.name] = delegate
            owner.modifiers.shields_controlled_by = delegate
            events.append(ShieldControlGrantedEvent(delegate=delegate.name, owner=owner.name))

        logger.info("%s now controls shields of %d player(s)", delegate.name, len(events))
        return events

    def revoke_expired(self, player_starting_turn: Player) -> list[GameEvent]:
        """Clear delegations held by a player whose turn is beginning."""
        return self._revoke(player_starting_turn)

    def _revoke(self, delegate: Player) -> list[GameEvent]:
        events: list[GameEvent] = []
        for owner_name, held_by in list(self._delegates.items()):
            if held_by is not delegate:
                continue
            del self._delegates[owner_name]
            owner = self._players[owner_name]
            owner.modifiers.shields_controlled_by = None
            events.append(ShieldControlRevokedEvent(delegate=delegate.name, owner=owner_name))

        if events:
            logger.debug("Revoked %d delegation(s) held by %s", len(events), delegate.name)
        return events
