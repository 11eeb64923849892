"""
Tests for the entity model primitives.

Covers health, shield and card-container bookkeeping on Player.
"""

import pytest

from mayhem.types import PlayerName, ActorKind
from mayhem.models import Card, Player, TurnModifiers, make_deck, opponents_of
from mayhem.mediator import ShieldMediator


def make_player(name: str = "alice", **kwargs) -> Player:
    """Helper to create a Player for tests."""
    return Player(name=PlayerName(name), **kwargs)


class TestHealth:
    """Tests for damage and healing primitives."""

    def test_lose_health_can_go_negative(self) -> None:
        """Health is not clamped; the defeat check happens elsewhere."""
        player = make_player(health=2)
        player.lose_health(5)

        assert player.health == -3
        assert player.is_defeated

    def test_zero_health_is_defeated(self) -> None:
        player = make_player(health=1)
        player.lose_health(1)
        assert player.is_defeated

    def test_heal_caps_at_max_health(self) -> None:
        player = make_player(health=8, max_health=10)

        restored = player.heal(5)

        assert restored == 2
        assert player.health == 10

    def test_heal_at_full_health_restores_nothing(self) -> None:
        player = make_player()
        assert player.heal(3) == 0
        assert player.health == 10

    def test_negative_amount_is_a_defect(self) -> None:
        player = make_player()
        with pytest.raises(ValueError):
            player.lose_health(-1)
        with pytest.raises(ValueError):
            player.heal(-1)


class TestShields:
    """Tests for shield primitives."""

    def test_remove_shields_never_goes_below_zero(self) -> None:
        player = make_player(shields=1)

        removed = player.remove_shields(3)

        assert removed == 1
        assert player.shields == 0

    def test_add_shields(self) -> None:
        player = make_player(shields=1)
        assert player.add_shields(2) == 2
        assert player.shields == 3

    def test_absorb_consumes_shields_up_to_damage(self) -> None:
        player = make_player(shields=2)

        assert player.absorb(3) == 2
        assert player.shields == 0

    def test_set_shields_rejects_negative(self) -> None:
        player = make_player()
        with pytest.raises(ValueError):
            player.set_shields(-1)

    def test_change_blocked_when_controlled_by_someone_else(self) -> None:
        """A delegated owner's shields only change on the delegate's behalf."""
        mediator = ShieldMediator()
        owner = make_player("owner", shields=2)
        delegate = make_player("delegate")
        outsider = make_player("outsider")
        for p in (owner, delegate, outsider):
            mediator.register(p)
        mediator.set_shields_controlled_by_player(delegate, True)

        assert owner.remove_shields(1, actor=outsider) == 0
        assert owner.shields == 2

        assert owner.remove_shields(1, actor=delegate) == 1
        assert owner.shields == 1

    def test_neutral_actor_cannot_hold_delegation(self) -> None:
        mediator = ShieldMediator()
        neutral = make_player("trap", kind=ActorKind.NEUTRAL)
        mediator.register(neutral)

        assert not neutral.can_hold_delegation

    def test_unregistered_player_cannot_hold_delegation(self) -> None:
        assert not make_player().can_hold_delegation


class TestCards:
    """Tests for deck, hand and discard moves."""

    def test_draw_moves_from_front_of_deck(self) -> None:
        deck = make_deck(["a", "b", "c"])
        player = make_player(deck=list(deck))

        drawn = player.draw(2)

        assert drawn == deck[:2]
        assert player.hand == deck[:2]
        assert player.deck == deck[2:]

    def test_draw_from_short_deck_draws_what_is_left(self) -> None:
        deck = make_deck(["a"])
        player = make_player(deck=list(deck))

        drawn = player.draw(3)

        assert drawn == deck
        assert player.deck == []

    def test_draw_from_empty_deck_is_noop(self) -> None:
        player = make_player()
        assert player.draw(3) == []
        assert player.hand == []

    def test_discard_card_moves_same_object(self) -> None:
        card = Card(card_id="sword")
        player = make_player(hand=[card])

        player.discard_card(card)

        assert player.hand == []
        assert player.discard[0] is card

    def test_discard_card_not_in_hand_raises(self) -> None:
        player = make_player()
        with pytest.raises(ValueError):
            player.discard_card(Card(card_id="ghost"))

    def test_cards_with_same_id_are_distinct(self) -> None:
        first, second = Card(card_id="sword"), Card(card_id="sword")
        player = make_player(hand=[first, second])

        player.discard_card(second)

        assert player.hand == [first]
        assert player.discard[0] is second

    def test_discard_hand_keeps_hand_order(self) -> None:
        cards = make_deck(["a", "b"])
        player = make_player(hand=list(cards))

        player.discard_hand()

        assert player.hand == []
        assert player.discard == cards

    def test_recover_discard_takes_oldest(self) -> None:
        first, second = make_deck(["first", "second"])
        player = make_player(discard=[first, second])

        recovered = player.recover_discard()

        assert recovered is first
        assert player.hand == [first]
        assert player.discard == [second]

    def test_recover_from_empty_discard_returns_none(self) -> None:
        assert make_player().recover_discard() is None

    def test_take_top_of_deck(self) -> None:
        deck = make_deck(["a", "b"])
        player = make_player(deck=list(deck))

        assert player.take_top_of_deck() is deck[0]
        assert player.deck == deck[1:]
        assert make_player().take_top_of_deck() is None


class TestTurnModifiers:
    """Tests for turn-scoped flag bookkeeping."""

    def test_clear_resets_flags_but_not_delegation(self) -> None:
        delegate = make_player("delegate")
        modifiers = TurnModifiers(
            ignore_shields=True,
            double_attack_on_shield_destroy=True,
            shields_controlled_by=delegate,
        )

        modifiers.clear()

        assert not modifiers.ignore_shields
        assert not modifiers.double_attack_on_shield_destroy
        assert modifiers.shields_controlled_by is delegate

    def test_clear_turn_modifiers_reports_activity(self) -> None:
        player = make_player()
        assert not player.clear_turn_modifiers()

        player.modifiers.ignore_shields = True
        assert player.clear_turn_modifiers()
        assert not player.modifiers.ignore_shields


def test_opponents_of_preserves_seating_order() -> None:
    a, b, c = make_player("a"), make_player("b"), make_player("c")
    assert opponents_of([a, b, c], b) == [a, c]
