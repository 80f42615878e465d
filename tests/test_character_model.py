import pytest

from arena.models.characters import Character, CharacterKind
from arena.utils.combat import round_half_up


@pytest.mark.parametrize("level", range(1, 11))
def test_derived_stats_follow_level(make_character, level):
    character = make_character(1, "Superman", "hero", level=level)

    assert character.max_health == 100 + (level - 1) * 5
    assert character.health == character.max_health
    assert character.shield == (level - 1) * 5


def test_create_starts_at_level_one():
    character = Character.create(3, "Batman", CharacterKind.hero, city="Gotham")

    assert character.level == 1
    assert character.experience == 0
    assert character.health == 100
    assert character.shield == 0
    assert character.ultimate_threshold == 150
    assert character.ultimate_ready is False


def test_attack_damage_formulas(make_character):
    character = make_character(1, "Superman", "hero", level=3)

    assert character.basic_attack_damage() == 7
    assert character.special_attack_damage() == 50
    assert character.ultimate_attack_damage() == 100
    assert character.critical_attack_damage(50) == 75


def test_critical_rounds_half_up(make_character):
    character = make_character(1, "Superman", "hero")

    # 5 * 1.5 = 7.5 and 7 * 1.5 = 10.5
    assert character.critical_attack_damage(5) == 8
    assert character.critical_attack_damage(7) == 11
    assert round_half_up(2.5) == 3


def test_receive_damage_applies_shield(make_character):
    defender = make_character(2, "Lex Luthor", "villain", level=5)

    applied = defender.receive_damage(50)

    assert defender.shield == 20
    assert applied == pytest.approx(40)
    assert defender.health == pytest.approx(80)


def test_ultimate_damage_ignores_shield(make_character):
    defender = make_character(2, "Lex Luthor", "villain", level=10)

    defender.receive_damage(80, is_ultimate=True)

    assert defender.shield == 45
    assert defender.health == pytest.approx(145 - 80)


def test_receive_damage_never_goes_below_zero(make_character):
    defender = make_character(2, "Lex Luthor", "villain")

    defender.receive_damage(1000)
    defender.receive_damage(1000, is_ultimate=True)

    assert defender.health == 0
    assert not defender.is_alive


def test_ultimate_charge_unlocks_at_threshold(hero):
    hero.accumulate_ultimate_charge(100)
    assert hero.ultimate_ready is False

    hero.accumulate_ultimate_charge(50)
    assert hero.ultimate_charge == 150
    assert hero.ultimate_ready is True


def test_ultimate_charge_stops_at_max_level(make_character):
    character = make_character(1, "Superman", "hero", level=10, ultimate_charge=400, ultimate_ready=True)

    character.accumulate_ultimate_charge(90)

    assert character.ultimate_charge == 400


def test_consume_ultimate_when_not_ready(hero):
    hero.accumulate_ultimate_charge(60)

    assert hero.consume_ultimate() == 0
    assert hero.ultimate_charge == 60


def test_consume_ultimate_resets_charge(hero):
    hero.accumulate_ultimate_charge(160)

    assert hero.consume_ultimate() == hero.ultimate_attack_damage() == 80
    assert hero.ultimate_charge == 0
    assert hero.ultimate_ready is False
