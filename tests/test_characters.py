"""
Tests for the character catalog and ability registry.
"""

import json

import pytest

from mayhem import characters
from mayhem.types import AbilityId, AbilityKind, CharacterId
from mayhem.abilities import (
    UniformDamageAbility,
    ShieldControlAbility,
    RedrawHandsAbility,
)
from mayhem.characters import (
    ABILITY_REGISTRY,
    ALL_CHARACTERS,
    get_ability,
    get_character,
    character_abilities,
    _parse_ability,
)


class TestCatalog:
    """Tests for the bundled characters.json."""

    def test_every_ability_id_resolves(self) -> None:
        for character in ALL_CHARACTERS:
            for ability_def in character.abilities:
                assert get_ability(ability_def.id) is ability_def.ability

    def test_ability_ids_are_character_dot_slot(self) -> None:
        azzan = get_character(CharacterId("azzan"))
        assert azzan is not None
        assert azzan.ability_ids() == (AbilityId("azzan.1"), AbilityId("azzan.2"))

    def test_parameters_are_loaded(self) -> None:
        assert get_ability(AbilityId("azzan.1")) == UniformDamageAbility(amount=3)
        assert get_ability(AbilityId("sutha.2")) == RedrawHandsAbility(count=3)
        assert isinstance(get_ability(AbilityId("delilah.2")), ShieldControlAbility)

    def test_registry_covers_all_characters(self) -> None:
        expected = {a.id for c in ALL_CHARACTERS for a in c.abilities}
        assert set(ABILITY_REGISTRY) == expected
        assert len(ALL_CHARACTERS) == 6

    def test_unknown_ability_raises_key_error(self) -> None:
        with pytest.raises(KeyError):
            get_ability(AbilityId("nobody.1"))

    def test_unknown_character(self) -> None:
        assert get_character(CharacterId("nobody")) is None
        assert character_abilities(CharacterId("nobody")) == ()


class TestParsing:
    """Tests for JSON parsing."""

    def test_unknown_ability_type_raises(self) -> None:
        with pytest.raises(ValueError):
            _parse_ability({"type": "TeleportAbility"})

    def test_reload_from_custom_file(self, tmp_path) -> None:
        data = {
            "characters": [
                {
                    "id": "tester",
                    "name": "Tester",
                    "abilities": [
                        {"slot": 1, "type": "UniformDamageAbility", "name": "Poke", "amount": 1}
                    ],
                }
            ]
        }
        path = tmp_path / "characters.json"
        path.write_text(json.dumps(data), encoding="utf-8")

        try:
            characters.reload_characters(path)
            assert characters.get_ability(AbilityId("tester.1")) == UniformDamageAbility(amount=1)
            assert characters.get_character(CharacterId("azzan")) is None
        finally:
            characters.reload_characters()

        assert characters.get_character(CharacterId("azzan")) is not None

    def test_duplicate_slot_raises(self, tmp_path) -> None:
        data = {
            "characters": [
                {
                    "id": "twin",
                    "name": "Twin",
                    "abilities": [
                        {"slot": 1, "type": "IgnoreShieldsAbility", "name": "A"},
                        {"slot": 1, "type": "DoubleAttackAbility", "name": "B"},
                    ],
                }
            ]
        }
        path = tmp_path / "characters.json"
        path.write_text(json.dumps(data), encoding="utf-8")

        with pytest.raises(ValueError):
            characters.reload_characters(path)
        characters.reload_characters()


class TestAbilityKinds:
    """Each catalog ability reports the pattern it follows."""

    @pytest.mark.parametrize(
        ("ability_id", "kind"),
        [
            ("azzan.1", AbilityKind.UNIFORM_DAMAGE),
            ("azzan.2", AbilityKind.STEAL_ONE),
            ("blorp.1", AbilityKind.SELF_BUFF),
            ("blorp.2", AbilityKind.STEAL_ONE),
            ("blorp.3", AbilityKind.SELF_BUFF),
            ("delilah.2", AbilityKind.DELEGATED_CONTROL),
            ("lia.1", AbilityKind.MASS_RESET),
            ("lia.2", AbilityKind.RECOVERY),
            ("minsc_and_boo.1", AbilityKind.STEAL_EACH),
            ("minsc_and_boo.2", AbilityKind.REDISTRIBUTION),
            ("sutha.1", AbilityKind.STEAL_ONE),
            ("sutha.2", AbilityKind.MASS_RESET),
            ("sutha.3", AbilityKind.TRADE_OFF),
        ],
    )
    def test_catalog_entry_kind(self, ability_id: str, kind: AbilityKind) -> None:
        assert get_ability(AbilityId(ability_id)).kind is kind

    def test_every_registered_ability_has_a_kind(self) -> None:
        for ability in ABILITY_REGISTRY.values():
            assert isinstance(ability.kind, AbilityKind)
