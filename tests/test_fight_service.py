import pytest

from arena.battle import BattleEngine
from arena.battle.states import ScriptedRound
from arena.core.exceptions import NotFoundError, InvalidMatchupError, InvalidMoveSpecError
from arena.models.fights import TeamBattleRequest, TeamBattleContinueRequest
from arena.services.fights import FightService


def _scripted(team_a="justice", team_b="legion", rounds=()):
    return TeamBattleRequest(
        team_a=team_a,
        team_b=team_b,
        mode="scripted",
        rounds=[ScriptedRound(attacker=side, move=move) for side, move in rounds],
    )


def _continue(fight_id, rounds=(), max_rounds=None):
    return TeamBattleContinueRequest(
        fight_id=fight_id,
        rounds=[ScriptedRound(attacker=side, move=move) for side, move in rounds],
        max_rounds=max_rounds,
    )


# =============================================================================
# 1:1 전투
# =============================================================================


def test_duel_grants_experience_and_records_fight(roster, fight_service, character_repo, fight_repo):
    result = fight_service.start_duel(7, 8)

    winner_id = 7 if result["winner"] == "Flash" else 8
    loser_id = 8 if winner_id == 7 else 7
    assert character_repo.get_by_id(winner_id).experience == 40
    assert character_repo.get_by_id(loser_id).experience == 25
    assert character_repo.get_by_id(loser_id).health == 0

    record = fight_repo.get_by_id(result["fight_id"])
    assert record.kind == "duel"
    assert record.winner == result["winner"]
    assert len(record.turn_log) == len(result["turn_log"])
    assert result["character_a"].id == 7


def test_duel_fight_ids_increase(roster, fight_service):
    first = fight_service.start_duel(7, 8)
    second = fight_service.start_duel(8, 7)

    assert (first["fight_id"], second["fight_id"]) == (1, 2)


def test_duel_same_kind_is_rejected(roster, fight_service, fight_repo):
    with pytest.raises(InvalidMatchupError):
        fight_service.start_duel(1, 7)
    assert fight_repo.list_all() == []


def test_duel_missing_character(roster, fight_service):
    with pytest.raises(NotFoundError):
        fight_service.start_duel(7, 99)


def test_duel_levels_up_persisted_character(roster, character_repo, fight_repo, basic_only_rng):
    character_repo.update(7, {"experience": 90})
    service = FightService(character_repo, fight_repo, BattleEngine(basic_only_rng))

    result = service.start_duel(7, 8)

    # 선공인 Flash 가 기본 공격만으로 승리
    assert result["winner"] == "Flash"
    flash = character_repo.get_by_id(7)
    assert flash.level == 2
    assert flash.experience == 30
    assert flash.ultimate_threshold == 165
    assert flash.health == flash.max_health == 105


# =============================================================================
# 팀 전투
# =============================================================================


def test_team_battle_scripted_start_and_continue(roster, fight_service, fight_repo):
    started = fight_service.start_team_battle(_scripted(rounds=[("A", "critico")] * 2))

    assert started["result"] == "inconclusive"
    assert [r.round for r in started["rounds"]] == [1, 2]

    continued = fight_service.continue_team_battle(_continue(started["fight_id"], [("A", "critico")] * 2))

    assert [r.round for r in continued["rounds"]] == [1, 2, 3, 4]
    assert continued["rounds"][2].eliminated == "Lex Luthor"
    assert continued["rounds"][3].team_b_health[0].health == 55

    record = fight_repo.get_by_id(started["fight_id"])
    assert record.team_a == "JUSTICE"
    assert len(record.round_history) == 4


def test_invalid_move_persists_partial_rounds(roster, fight_service, fight_repo):
    with pytest.raises(InvalidMoveSpecError) as exc_info:
        fight_service.start_team_battle(_scripted(rounds=[("A", "basic"), ("A", "ultimate")]))

    error = exc_info.value
    assert error.round_number == 2
    assert error.fight_id == 1
    record = fight_repo.get_by_id(1)
    assert len(record.round_history) == 1
    assert record.result == "inconclusive"


def test_invalid_move_on_continuation(roster, fight_service, fight_repo):
    started = fight_service.start_team_battle(_scripted(rounds=[("A", "basic")]))

    with pytest.raises(InvalidMoveSpecError) as exc_info:
        fight_service.continue_team_battle(_continue(started["fight_id"], [("B", "special"), ("X", "basic")]))

    assert exc_info.value.round_number == 3
    assert [r.round for r in fight_repo.get_by_id(started["fight_id"]).round_history] == [1, 2]


def test_conclusion_resets_member_health(roster, fight_service, character_repo):
    for character_id in (1, 4):
        character_repo.update(character_id, {"health": 12})

    result = fight_service.start_team_battle(_scripted(rounds=[("A", "critical")] * 9))

    assert result["result"] == "Team A wins"
    for character_id in range(1, 7):
        character = character_repo.get_by_id(character_id)
        assert character.health == character.max_health


def test_continue_concluded_fight_adds_nothing(roster, fight_service):
    started = fight_service.start_team_battle(_scripted(rounds=[("B", "critical")] * 9))

    again = fight_service.continue_team_battle(_continue(started["fight_id"], [("A", "basic")]))

    assert again["result"] == "Team B wins"
    assert len(again["rounds"]) == 9


def test_simulated_team_battle(roster, fight_service, fight_repo):
    request = TeamBattleRequest(team_a="JUSTICE", team_b="LEGION", max_rounds=1)

    started = fight_service.start_team_battle(request)
    assert started["result"] == "inconclusive"

    finished = fight_service.continue_team_battle(_continue(started["fight_id"]))
    assert finished["result"] in ("Team A wins", "Team B wins")
    rounds = [r.round for r in finished["rounds"]]
    assert rounds == list(range(1, len(rounds) + 1))
    assert fight_service.list_team_fights(1, 10)["total"] == 1


def test_scripted_battle_requires_rounds(roster, fight_service):
    with pytest.raises(ValueError):
        fight_service.start_team_battle(_scripted(rounds=[]))


def test_team_battle_same_kind(roster, fight_service, character_repo):
    character_repo.update(7, {"team": "TITANS"})
    character_repo.update(8, {"team": None})

    with pytest.raises(InvalidMatchupError):
        fight_service.start_team_battle(_scripted(team_b="titans", rounds=[("A", "basic")]))

    with pytest.raises(InvalidMatchupError):
        fight_service.start_team_battle(_scripted(team_a="justice", team_b="justice", rounds=[("A", "basic")]))


def test_team_battle_unknown_team(roster, fight_service):
    with pytest.raises(NotFoundError):
        fight_service.start_team_battle(_scripted(team_b="nobody", rounds=[("A", "basic")]))


def test_continue_duel_record_is_rejected(roster, fight_service):
    duel = fight_service.start_duel(7, 8)

    with pytest.raises(ValueError):
        fight_service.continue_team_battle(_continue(duel["fight_id"], [("A", "basic")]))


# =============================================================================
# 기록 관리
# =============================================================================


def test_update_winner_and_delete(roster, fight_service):
    duel = fight_service.start_duel(7, 8)

    updated = fight_service.update_winner(duel["fight_id"], "Bane")
    assert updated.winner == "Bane"

    fight_service.delete_fight(duel["fight_id"])
    with pytest.raises(NotFoundError):
        fight_service.get_fight(duel["fight_id"])


def test_list_fights_paginates(roster, fight_service):
    for _ in range(3):
        fight_service.start_duel(7, 8)

    page = fight_service.list_fights(page=2, limit=2)

    assert page["total"] == 3
    assert page["total_pages"] == 2
    assert [f.fight_id for f in page["fights"]] == [3]
