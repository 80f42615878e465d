import logging
from typing import List, Optional, Tuple

from arena.core.exceptions import InvalidMoveSpecError
from arena.models.characters import Character
from arena.battle.random_source import RandomSource
from arena.battle.moves import SCRIPTED_DAMAGE, MOVE_LABELS, choose_move, describe_move, parse_move_type, parse_side
from arena.battle.states import (
    DuelOutcome,
    MemberSnapshot,
    RoundEntry,
    ScriptedRound,
    Side,
    TeamBattleState,
    TurnLogEntry,
)

logger = logging.getLogger(__name__)


class BattleEngine:
    """전투 시뮬레이션 엔진

    저장소에 접근하지 않으며, 전달받은 캐릭터의 복사본 위에서만 전투를 진행합니다.
    1:1 전투와 3:3 팀 전투(시뮬레이션 / 스크립트 모드)를 지원합니다.
    """

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng or RandomSource()

    def prepare(self, character: Character) -> Character:
        """시뮬레이션용 복사본을 만들고 체력을 최대치로 설정합니다"""
        sim = character.model_copy(deep=True)
        sim.reset_derived_stats()
        sim.restore_health()
        sim.ultimate_ready = sim.ultimate_charge >= sim.ultimate_threshold
        return sim

    def take_turn(self, attacker: Character, defender: Character, turn: int) -> TurnLogEntry:
        move = choose_move(attacker, self.rng)
        health_before = defender.health
        defender.receive_damage(move.damage, move.is_ultimate)
        # 충전량은 방어막 적용 전 공격력 기준
        attacker.accumulate_ultimate_charge(move.damage)

        return TurnLogEntry(
            turn=turn,
            attacker=attacker.name,
            defender=defender.name,
            move=move.move_type,
            damage=move.damage,
            is_ultimate=move.is_ultimate,
            health_before=round(health_before, 2),
            health_after=round(defender.health, 2),
            message=(
                f"{attacker.name}이(가) {defender.name}을(를) 공격: {describe_move(move)} "
                f"(체력: {health_before:.2f} → {defender.health:.2f})"
            ),
        )

    def fight(self, first: Character, second: Character) -> Tuple[Character, Character, List[TurnLogEntry]]:
        """둘 중 한 명의 체력이 0이 될 때까지 번갈아 공격합니다

        짝수 턴에는 first, 홀수 턴에는 second 가 공격합니다.
        전달받은 객체를 그대로 변경하므로 복사본을 넘겨야 합니다.

        Returns:
            (승자, 패자, 턴 기록)
        """
        turns: List[TurnLogEntry] = []
        turn = 0
        while first.is_alive and second.is_alive:
            attacker, defender = (first, second) if turn % 2 == 0 else (second, first)
            turns.append(self.take_turn(attacker, defender, turn + 1))
            turn += 1

        if first.is_alive:
            return first, second, turns
        return second, first, turns

    def duel(self, first: Character, second: Character) -> DuelOutcome:
        sim_first, sim_second = self.prepare(first), self.prepare(second)
        winner, loser, turns = self.fight(sim_first, sim_second)
        logger.info(f"1:1 전투 종료: {winner.name} 승리 ({len(turns)}턴)")
        return DuelOutcome(winner=winner, loser=loser, turns=turns)

    # 팀 전투
    def new_team_state(self, team_a: List[Character], team_b: List[Character]) -> TeamBattleState:
        return TeamBattleState(
            team_a=[self.prepare(c) for c in team_a],
            team_b=[self.prepare(c) for c in team_b],
        )

    def restore_team_state(
        self,
        team_a: List[Character],
        team_b: List[Character],
        last_round: Optional[RoundEntry],
    ) -> TeamBattleState:
        """마지막 라운드의 체력 스냅샷으로 생존자와 체력을 복원합니다"""
        if last_round is None:
            return self.new_team_state(team_a, team_b)
        return TeamBattleState(
            team_a=self._restore_roster(team_a, last_round.team_a_health),
            team_b=self._restore_roster(team_b, last_round.team_b_health),
        )

    def _restore_roster(self, members: List[Character], snapshots: List[MemberSnapshot]) -> List[Character]:
        by_id = {c.id: c for c in members}
        roster = []
        for snap in snapshots:
            if snap.id not in by_id:
                continue
            sim = self.prepare(by_id[snap.id])
            sim.health = min(snap.health, sim.max_health)
            sim.ultimate_charge = snap.ultimate_charge
            sim.ultimate_ready = sim.ultimate_charge >= sim.ultimate_threshold
            roster.append(sim)
        return roster

    @staticmethod
    def next_round_number(history: List[RoundEntry]) -> int:
        return history[-1].round + 1 if history else 1

    def play_simulated_rounds(
        self,
        state: TeamBattleState,
        history: List[RoundEntry],
        max_rounds: Optional[int] = None,
    ) -> List[RoundEntry]:
        """선두끼리 끝까지 싸우는 라운드를 반복합니다

        새 라운드는 history 에 바로 추가되며, 추가된 라운드 목록을 반환합니다.
        max_rounds 가 None 이면 한 팀이 전멸할 때까지 진행합니다.
        """
        played: List[RoundEntry] = []
        while not state.is_over and (max_rounds is None or len(played) < max_rounds):
            hero_front, villain_front = state.front(Side.A), state.front(Side.B)
            winner, loser, turns = self.fight(hero_front, villain_front)
            state.roster(Side.A if loser is hero_front else Side.B).pop(0)
            logger.info(f"라운드 {self.next_round_number(history)}: {loser.name} 탈락")

            entry = RoundEntry(
                round=self.next_round_number(history),
                mode="simulated",
                attacker=hero_front.name,
                defender=villain_front.name,
                winner=winner.name,
                eliminated=loser.name,
                turns=turns,
                team_a_health=state.snapshot(Side.A),
                team_b_health=state.snapshot(Side.B),
                message=f"{winner.name}이(가) 라운드에서 승리 ({loser.name} 탈락)",
            )
            history.append(entry)
            played.append(entry)
        return played

    def play_scripted_rounds(
        self,
        state: TeamBattleState,
        history: List[RoundEntry],
        rounds: List[ScriptedRound],
    ) -> List[RoundEntry]:
        """지정된 공격 진영과 기술로 라운드를 적용합니다

        잘못된 라운드를 만나면 InvalidMoveSpecError 를 발생시키고 중단합니다.
        그 전까지 적용된 라운드는 history 에 남아 있습니다.
        """
        played: List[RoundEntry] = []
        for scripted in rounds:
            if state.is_over:
                break
            round_number = self.next_round_number(history)
            try:
                side = parse_side(scripted.attacker)
                move_type = parse_move_type(scripted.move)
            except ValueError as e:
                raise InvalidMoveSpecError(f"라운드 {round_number}: {e}", round_number=round_number) from e

            defender_side = Side.B if side == Side.A else Side.A
            attacker, defender = state.front(side), state.front(defender_side)
            damage = SCRIPTED_DAMAGE[move_type]
            health_before = defender.health
            defender.health = health_before - damage

            eliminated = None
            if defender.health <= 0:
                defender.health = 0
                state.roster(defender_side).pop(0)
                eliminated = defender.name
                logger.info(f"라운드 {round_number}: {defender.name} 탈락")

            message = (
                f"{attacker.name}이(가) {defender.name}을(를) 공격: {MOVE_LABELS[move_type]} (-{damage}) "
                f"(체력: {health_before:.2f} → {defender.health:.2f})"
            )
            if eliminated:
                message += f" - {eliminated} 탈락"

            entry = RoundEntry(
                round=round_number,
                mode="scripted",
                attacker=attacker.name,
                defender=defender.name,
                move=move_type,
                damage=damage,
                eliminated=eliminated,
                team_a_health=state.snapshot(Side.A),
                team_b_health=state.snapshot(Side.B),
                message=message,
            )
            history.append(entry)
            played.append(entry)
        return played


__all__ = [
    "BattleEngine",
    "RandomSource",
]
