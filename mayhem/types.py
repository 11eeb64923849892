"""
Core type definitions for the game engine.

This module defines:
- NewType IDs for strong typing of identifiers
- Enums for actors, ability patterns and game phases
- Protocols for extensibility
- Game constants
"""

from enum import Enum, auto
from typing import NewType, Literal, Protocol, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from mayhem.models import Player
    from mayhem.events import GameEvent

# =============================================================================
# Strong ID Types (NewType for compile-time safety)
# =============================================================================

PlayerName = NewType("PlayerName", str)
"""Name of a player, unique within a match."""

CardId = NewType("CardId", str)
"""Identifier for a card definition (e.g., 'sword', 'shield_wall')."""

CharacterId = NewType("CharacterId", str)
"""Identifier for a character (e.g., 'azzan', 'blorp')."""

AbilityId = NewType("AbilityId", str)
"""Ability identifier in the form '<character>.<slot>' (e.g., 'azzan.1')."""

TurnNumber = NewType("TurnNumber", int)
"""Turn counter, starting at 1."""


# =============================================================================
# Enums
# =============================================================================


class ActorKind(Enum):
    """Who drives a participant in the match."""

    HUMAN = auto()
    """Controlled by a person."""

    AI = auto()
    """Controlled by a bot."""

    NEUTRAL = auto()
    """A non-player participant. Cannot hold delegated control."""


class AbilityKind(Enum):
    """Recurring ability patterns."""

    UNIFORM_DAMAGE = auto()
    STEAL_ONE = auto()
    """Act on the first matching opponent only."""

    STEAL_EACH = auto()
    """Take from every opponent that has something to give."""

    SELF_BUFF = auto()
    MASS_RESET = auto()
    RECOVERY = auto()
    REDISTRIBUTION = auto()
    TRADE_OFF = auto()
    DELEGATED_CONTROL = auto()


class GamePhase(Enum):
    """Phases of a single player's turn."""

    SETUP = auto()
    """Match created, no turn started yet."""

    TURN_START = auto()
    """Turn-boundary bookkeeping is running."""

    ACTION = auto()
    """The current player may use abilities and attack."""

    TURN_END = auto()
    """Turn flags are being cleared and defeats checked."""

    GAME_OVER = auto()
    """At most one player is left standing."""


class GameResult(Enum):
    """Possible match outcomes."""

    IN_PROGRESS = auto()
    WINNER = auto()
    """Exactly one player remains."""

    DRAW = auto()
    """Every remaining player was defeated at the same time."""


# =============================================================================
# Protocols
# =============================================================================


class AbilityProtocol(Protocol):
    """Protocol for character abilities."""

    @property
    def kind(self) -> AbilityKind:
        """The pattern this ability follows."""
        ...

    def apply(
        self,
        roster: Sequence["Player"],
        invoker: "Player",
    ) -> list["GameEvent"]:
        """
        Apply this ability to the roster.

        Args:
            roster: All active players in seating order (invoker included)
            invoker: The player using the ability

        Returns:
            Events generated, in order
        """
        ...


# =============================================================================
# Constants
# =============================================================================

MAX_HEALTH: Literal[10] = 10
"""Starting and maximum health of a player."""

STARTING_HAND_SIZE: Literal[3] = 3
"""Number of cards drawn at match start."""

REDRAW_COUNT: Literal[3] = 3
"""Cards drawn by each player after a forced hand discard."""

MIN_PLAYERS: Literal[2] = 2
"""Smallest roster that can start a match."""
