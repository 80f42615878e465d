import logging
from typing import Dict, Any, List, Optional

from arena.battle import BattleEngine
from arena.battle.progression import award_fight_experience
from arena.battle.states import ScriptedRound, TeamBattleState
from arena.core.exceptions import NotFoundError, InvalidMatchupError, InvalidMoveSpecError
from arena.db.repository import CharacterRepository, FightRepository
from arena.models.characters import Character
from arena.models.fights import (
    FightParticipant,
    FightRecord,
    TeamBattleRequest,
    TeamBattleContinueRequest,
    utc_now,
)
from arena.services.characters import paginate
from arena.services.teams import TEAM_SIZE, get_team_members, normalize_team_name

logger = logging.getLogger(__name__)

def _participant(character: Character) -> FightParticipant:
    return FightParticipant(id=character.id, name=character.name, kind=character.kind)

class FightService:
    """전투 진행과 전투 기록 관리

    저장소에서 캐릭터를 불러와 BattleEngine 으로 시뮬레이션하고,
    결과(경험치, 전투 기록)를 다시 저장소에 반영합니다.
    """

    def __init__(
        self,
        characters: CharacterRepository,
        fights: FightRepository,
        engine: BattleEngine,
        win_experience: int = 40,
        loss_experience: int = 25,
    ):
        self.characters = characters
        self.fights = fights
        self.engine = engine
        self.win_experience = win_experience
        self.loss_experience = loss_experience

    # 조회
    def list_fights(self, page: int, limit: int) -> Dict[str, Any]:
        result = paginate(self.fights.list_all(), page, limit)
        result["fights"] = result.pop("items")
        return result

    def list_team_fights(self, page: int, limit: int) -> Dict[str, Any]:
        team_fights = [f for f in self.fights.list_all() if f.kind == "team"]
        result = paginate(team_fights, page, limit)
        result["fights"] = result.pop("items")
        return result

    def get_fight(self, fight_id: int) -> FightRecord:
        fight = self.fights.get_by_id(fight_id)
        if not fight:
            raise NotFoundError(f"전투 기록이 존재하지 않습니다: {fight_id}")
        return fight

    # 1:1 전투
    def start_duel(self, id1: int, id2: int) -> Dict[str, Any]:
        first = self.characters.get_by_id(id1)
        second = self.characters.get_by_id(id2)
        if not first or not second:
            raise NotFoundError("두 캐릭터가 모두 존재해야 합니다.")
        if first.kind == second.kind:
            logger.warning(f"잘못된 대결 요청: {first.name} vs {second.name} ({first.kind.value})")
            raise InvalidMatchupError("영웅과 빌런 사이의 전투만 가능합니다.")

        outcome = self.engine.duel(first, second)
        award_fight_experience(outcome.winner, outcome.loser, self.win_experience, self.loss_experience)

        # 원본 캐릭터에는 전투 후 결과 필드만 반영
        for sim in (outcome.winner, outcome.loser):
            self.characters.update(sim.id, sim.progression_fields())

        record = FightRecord(
            fight_id=self.fights.next_id(),
            kind="duel",
            participant_a=_participant(first),
            participant_b=_participant(second),
            winner=outcome.winner.name,
            turn_log=outcome.turns,
        )
        self.fights.add(record)

        sim_first = outcome.winner if outcome.winner.id == first.id else outcome.loser
        sim_second = outcome.loser if sim_first is outcome.winner else outcome.winner
        return {
            "fight_id": record.fight_id,
            "character_a": sim_first,
            "character_b": sim_second,
            "winner": outcome.winner.name,
            "turn_log": outcome.turns,
        }

    # 팀 전투
    def _load_team(self, name: str) -> List[Character]:
        members = get_team_members(name, self.characters)
        if not members:
            raise NotFoundError(f"팀이 존재하지 않습니다: {normalize_team_name(name)}")
        if len(members) != TEAM_SIZE or len({c.kind for c in members}) != 1:
            raise InvalidMatchupError(f"팀 {normalize_team_name(name)}은(는) 같은 타입의 구성원 {TEAM_SIZE}명이 필요합니다.")
        return members

    def _load_members(self, participants: List[FightParticipant]) -> List[Character]:
        members = []
        for participant in participants:
            character = self.characters.get_by_id(participant.id)
            if not character:
                raise NotFoundError(f"전투에 참여한 캐릭터가 존재하지 않습니다: {participant.id}")
            members.append(character)
        return members

    def start_team_battle(self, request: TeamBattleRequest) -> Dict[str, Any]:
        if request.mode == "scripted" and not request.rounds:
            raise ValueError("스크립트 모드에는 rounds 가 필요합니다.")

        team_a = self._load_team(request.team_a)
        team_b = self._load_team(request.team_b)
        if team_a[0].kind == team_b[0].kind:
            raise InvalidMatchupError("영웅 팀과 빌런 팀 사이의 전투만 가능합니다.")

        record = FightRecord(
            fight_id=self.fights.next_id(),
            kind="team",
            team_a=normalize_team_name(request.team_a),
            team_b=normalize_team_name(request.team_b),
            team_a_members=[_participant(c) for c in team_a],
            team_b_members=[_participant(c) for c in team_b],
            mode=request.mode,
            result="inconclusive",
        )
        logger.info(f"팀 전투 시작 [{record.fight_id}]: {record.team_a} vs {record.team_b} ({record.mode})")

        state = self.engine.new_team_state(team_a, team_b)
        self._play(record, state, request.rounds, request.max_rounds, is_new=True)
        return {"fight_id": record.fight_id, "result": record.result, "rounds": record.round_history}

    def continue_team_battle(self, request: TeamBattleContinueRequest) -> Dict[str, Any]:
        record = self.get_fight(request.fight_id)
        if record.kind != "team":
            raise ValueError("팀 전투 기록이 아닙니다.")

        if record.is_concluded:
            logger.info(f"이미 종료된 전투입니다 [{record.fight_id}]: {record.result}")
            return {"fight_id": record.fight_id, "result": record.result, "rounds": record.round_history}

        if record.mode == "scripted" and not request.rounds:
            raise ValueError("스크립트 모드에는 rounds 가 필요합니다.")

        team_a = self._load_members(record.team_a_members)
        team_b = self._load_members(record.team_b_members)
        last_round = record.round_history[-1] if record.round_history else None
        state = self.engine.restore_team_state(team_a, team_b, last_round)

        self._play(record, state, request.rounds, request.max_rounds, is_new=False)
        return {"fight_id": record.fight_id, "result": record.result, "rounds": record.round_history}

    def _play(
        self,
        record: FightRecord,
        state: TeamBattleState,
        rounds: List[ScriptedRound],
        max_rounds: Optional[int],
        is_new: bool,
    ):
        try:
            if record.mode == "scripted":
                self.engine.play_scripted_rounds(state, record.round_history, rounds)
            else:
                self.engine.play_simulated_rounds(state, record.round_history, max_rounds)
        except InvalidMoveSpecError as e:
            # 이미 적용된 라운드는 그대로 저장
            e.fight_id = record.fight_id
            self._save(record, state, is_new)
            raise
        self._save(record, state, is_new)

    def _save(self, record: FightRecord, state: TeamBattleState, is_new: bool):
        record.result = state.result()
        record.updated_time = utc_now()
        if is_new:
            self.fights.add(record)
        else:
            self.fights.update(
                record.fight_id,
                record.model_dump(mode="json", include={"result", "round_history", "updated_time"})
            )

        if record.is_concluded:
            logger.info(f"팀 전투 종료 [{record.fight_id}]: {record.result}")
            self._reset_health(record)

    def _reset_health(self, record: FightRecord):
        """전투가 끝나면 참가자 전원의 체력을 최대치로 되돌립니다"""
        member_ids = {p.id for p in record.team_a_members + record.team_b_members}
        characters = self.characters.list_all()
        for character in characters:
            if character.id in member_ids:
                character.restore_health()
        self.characters.replace_all(characters)

    # 기록 관리
    def update_winner(self, fight_id: int, winner: str) -> FightRecord:
        self.get_fight(fight_id)
        self.fights.update(fight_id, {"winner": winner, "updated_time": utc_now().isoformat()})
        return self.get_fight(fight_id)

    def delete_fight(self, fight_id: int):
        self.get_fight(fight_id)
        self.fights.remove(fight_id)
        logger.info(f"전투 기록 삭제: {fight_id}")
