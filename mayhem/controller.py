"""
Turn Controller - runs turn boundaries and invokes abilities.

The controller owns the bookkeeping the abilities rely on:
- Revoking shield delegations when the delegate's turn starts
- Clearing turn-scoped flags when the owner's turn ends
- Checking for defeats and the end of the match

Players are changed in place; every operation returns the events it produced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from mayhem.types import (
    PlayerName,
    AbilityId,
    CharacterId,
    TurnNumber,
    ActorKind,
    GamePhase,
    GameResult,
    MAX_HEALTH,
    STARTING_HAND_SIZE,
    MIN_PLAYERS,
)
from mayhem.models import Player, make_deck
from mayhem.mediator import ShieldMediator
from mayhem.combat import resolve_attack
from mayhem.characters import get_ability, character_abilities
from mayhem.events import (
    GameEvent,
    MatchStartedEvent,
    MatchEndedEvent,
    TurnStartedEvent,
    TurnEndedEvent,
    ModifiersClearedEvent,
    CardDrawnEvent,
    PlayerDefeatedEvent,
    ActionInvalidEvent,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Match State
# =============================================================================


@dataclass(frozen=True, slots=True)
class MatchConfig:
    """Tunable match settings."""

    max_health: int = MAX_HEALTH
    """Starting and maximum health of every player."""

    starting_hand_size: int = STARTING_HAND_SIZE
    """Cards each player draws at match start."""


@dataclass(slots=True)
class Match:
    """
    A match in progress.

    ``players`` keeps seating order for the whole match; defeated players
    stay in it and are filtered out by ``TurnController.active_roster``.
    """

    players: list[Player]
    mediator: ShieldMediator
    turn: TurnNumber = TurnNumber(0)
    current_index: int = 0
    phase: GamePhase = GamePhase.SETUP
    result: GameResult = GameResult.IN_PROGRESS
    winner: PlayerName | None = None
    defeated: set[PlayerName] = field(default_factory=set)

    def get_player(self, name: str) -> Player | None:
        for player in self.players:
            if player.name == name:
                return player
        return None

    @property
    def current_player(self) -> Player:
        return self.players[self.current_index]


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of validating an action."""

    valid: bool
    """Whether the action is valid."""

    reason: str
    """Explanation (for invalid actions)."""


# =============================================================================
# Controller
# =============================================================================


class TurnController:
    """
    Drives a match one turn at a time.

    Usage:
        controller = TurnController()
        match, events = controller.create_match(players)
        events = controller.start_turn(match)
        events = controller.use_ability(match, AbilityId("azzan.1"))
        events = controller.end_turn(match)
    """

    def create_match(
        self,
        players: Sequence[Player],
        config: MatchConfig = MatchConfig(),
    ) -> tuple[Match, list[GameEvent]]:
        """
        Seat the players, attach a fresh mediator and deal starting hands.

        Args:
            players: Players in seating order (decks already filled)
            config: Match settings

        Returns:
            Tuple of (match, events)
        """
        if len(players) < MIN_PLAYERS:
            raise ValueError(f"A match needs at least {MIN_PLAYERS} players, got {len(players)}")

        names = [p.name for p in players]
        if len(set(names)) != len(names):
            raise ValueError(f"Player names must be unique: {names}")

        events: list[GameEvent] = [MatchStartedEvent(players=tuple(names))]
        mediator = ShieldMediator()

        for player in players:
            player.max_health = config.max_health
            player.health = config.max_health
            mediator.register(player)

        for player in players:
            for card in player.draw(config.starting_hand_size):
                events.append(CardDrawnEvent(player=player.name, card_id=card.card_id))

        match = Match(players=list(players), mediator=mediator)
        logger.info("Match created with %d players", len(players))
        return match, events

    def active_roster(self, match: Match) -> list[Player]:
        """Players still in the match, in seating order."""
        return [p for p in match.players if p.name not in match.defeated]

    def start_turn(self, match: Match) -> list[GameEvent]:
        """
        Begin the current player's turn.

        - Increments the turn number
        - Revokes shield delegations the current player holds
        """
        if match.phase == GamePhase.GAME_OVER:
            return []

        match.phase = GamePhase.TURN_START
        match.turn = TurnNumber(match.turn + 1)
        player = match.current_player

        events: list[GameEvent] = [TurnStartedEvent(turn=match.turn, player=player.name)]
        events.extend(match.mediator.revoke_expired(player))

        match.phase = GamePhase.ACTION
        logger.debug("Turn %d started for %s", match.turn, player.name)
        return events

    def validate_ability(self, match: Match, ability_id: AbilityId) -> ValidationResult:
        """
        Check whether the current player may use an ability.

        Players without a character may use any registered ability.
        """
        if match.phase != GamePhase.ACTION:
            return ValidationResult(valid=False, reason=f"Not in action phase ({match.phase.name})")

        try:
            get_ability(ability_id)
        except KeyError:
            return ValidationResult(valid=False, reason=f"Unknown ability: {ability_id}")

        player = match.current_player
        if player.character_id is not None:
            owned = {a.id for a in character_abilities(player.character_id)}
            if ability_id not in owned:
                return ValidationResult(
                    valid=False,
                    reason=f"{ability_id} does not belong to {player.character_id}",
                )

        return ValidationResult(valid=True, reason="")

    def use_ability(self, match: Match, ability_id: AbilityId) -> list[GameEvent]:
        """Apply an ability of the current player to the active roster."""
        player = match.current_player
        result = self.validate_ability(match, ability_id)
        if not result.valid:
            logger.warning("Rejected %s for %s: %s", ability_id, player.name, result.reason)
            return [ActionInvalidEvent(player=player.name, reason=result.reason)]

        ability = get_ability(ability_id)
        return ability.apply(self.active_roster(match), player)

    def attack(self, match: Match, target_name: str, damage: int) -> list[GameEvent]:
        """The current player attacks one opponent."""
        player = match.current_player
        target = match.get_player(target_name)

        reason = ""
        if match.phase != GamePhase.ACTION:
            reason = f"Not in action phase ({match.phase.name})"
        elif target is None or target.name in match.defeated:
            reason = f"No active player named {target_name}"
        elif target is player:
            reason = "Cannot attack yourself"

        if reason:
            return [ActionInvalidEvent(player=player.name, reason=reason)]

        assert target is not None
        return resolve_attack(player, target, damage)

    def end_turn(self, match: Match) -> list[GameEvent]:
        """
        Finish the current player's turn.

        - Clears ignore-shields and double-attack flags
        - Checks for defeated players and the end of the match
        - Passes the turn to the next player still standing
        """
        if match.phase == GamePhase.GAME_OVER:
            return []

        match.phase = GamePhase.TURN_END
        player = match.current_player
        events: list[GameEvent] = []

        if player.clear_turn_modifiers():
            events.append(ModifiersClearedEvent(player=player.name))
        events.append(TurnEndedEvent(turn=match.turn, player=player.name))

        events.extend(self._check_defeats(match))

        if match.phase != GamePhase.GAME_OVER:
            match.current_index = self._next_index(match)
            match.phase = GamePhase.TURN_START

        return events

    def _check_defeats(self, match: Match) -> list[GameEvent]:
        events: list[GameEvent] = []

        for player in match.players:
            if player.name in match.defeated or not player.is_defeated:
                continue
            match.defeated.add(player.name)
            events.append(PlayerDefeatedEvent(player=player.name))
            events.extend(match.mediator.set_shields_controlled_by_player(player, False))
            logger.info("%s was defeated", player.name)

        standing = self.active_roster(match)
        if len(standing) <= 1:
            match.phase = GamePhase.GAME_OVER
            if standing:
                match.result = GameResult.WINNER
                match.winner = standing[0].name
            else:
                match.result = GameResult.DRAW
            events.append(MatchEndedEvent(result=match.result, winner=match.winner))

        return events

    def _next_index(self, match: Match) -> int:
        count = len(match.players)
        for step in range(1, count + 1):
            index = (match.current_index + step) % count
            if match.players[index].name not in match.defeated:
                return index
        return match.current_index


# =============================================================================
# Utility Functions
# =============================================================================


def create_test_match(
    names: Sequence[str] = ("alice", "bob", "carol"),
    health: Sequence[int] | None = None,
    shields: Sequence[int] | None = None,
    characters: Sequence[str | None] | None = None,
    deck_size: int = 0,
    kinds: Sequence[ActorKind] | None = None,
) -> Match:
    """
    Create a Match for testing purposes.

    The match is already in the first player's action phase and no cards
    have been dealt; each deck holds ``deck_size`` distinct cards.
    """
    mediator = ShieldMediator()
    players: list[Player] = []

    for i, name in enumerate(names):
        player = Player(
            name=PlayerName(name),
            health=health[i] if health is not None else MAX_HEALTH,
            shields=shields[i] if shields is not None else 0,
            deck=make_deck(f"{name}_card_{n}" for n in range(deck_size)),
            kind=kinds[i] if kinds is not None else ActorKind.HUMAN,
            character_id=(
                CharacterId(characters[i])
                if characters is not None and characters[i] is not None
                else None
            ),
        )
        mediator.register(player)
        players.append(player)

    return Match(
        players=players,
        mediator=mediator,
        turn=TurnNumber(1),
        phase=GamePhase.ACTION,
    )
