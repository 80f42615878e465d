from typing import Dict

from arena.models.characters import Character
from arena.battle.random_source import RandomSource
from arena.battle.states import Move, MoveType, Side

CRITICAL_CHANCE = 0.40
SPECIAL_CHANCE = 0.30

# 스크립트 모드는 방어막/궁극기 없이 고정 피해만 적용
SCRIPTED_DAMAGE: Dict[MoveType, int] = {
    MoveType.basic: 5,
    MoveType.special: 30,
    MoveType.critical: 45,
}

MOVE_ALIASES: Dict[str, MoveType] = {
    "basic": MoveType.basic,
    "basico": MoveType.basic,
    "básico": MoveType.basic,
    "normal": MoveType.basic,
    "special": MoveType.special,
    "especial": MoveType.special,
    "critical": MoveType.critical,
    "critico": MoveType.critical,
    "crítico": MoveType.critical,
}

SIDE_ALIASES: Dict[str, Side] = {
    "a": Side.A,
    "team_a": Side.A,
    "b": Side.B,
    "team_b": Side.B,
}

MOVE_LABELS = {
    MoveType.basic: "기본 공격",
    MoveType.special: "특수 공격",
    MoveType.critical: "치명타",
    MoveType.ultimate: "궁극기",
}

def choose_move(attacker: Character, rng: RandomSource) -> Move:
    """공격자의 이번 턴 기술을 결정합니다

    궁극기가 준비되어 있으면 무조건 사용하고, 아니면 확률에 따라
    치명타(40%) / 특수 공격(30%) / 기본 공격(30%) 중 하나를 고릅니다.
    """
    if attacker.ultimate_ready:
        return Move(move_type=MoveType.ultimate, damage=attacker.consume_ultimate(), is_ultimate=True)

    roll = rng.random()
    if roll < CRITICAL_CHANCE:
        if rng.chance(0.5):
            base_move, base = MoveType.basic, attacker.basic_attack_damage()
        else:
            base_move, base = MoveType.special, attacker.special_attack_damage()
        return Move(move_type=MoveType.critical, damage=attacker.critical_attack_damage(base), base_move=base_move)
    if roll < CRITICAL_CHANCE + SPECIAL_CHANCE:
        return Move(move_type=MoveType.special, damage=attacker.special_attack_damage())
    return Move(move_type=MoveType.basic, damage=attacker.basic_attack_damage())

def describe_move(move: Move) -> str:
    if move.is_ultimate:
        return f"{MOVE_LABELS[move.move_type]}! ({move.damage} 피해, 방어막 무시)"
    return f"{MOVE_LABELS[move.move_type]} ({move.damage} 피해)"

def parse_move_type(value) -> MoveType:
    key = str(value).strip().lower() if value is not None else ""
    if key not in MOVE_ALIASES:
        raise ValueError(f"알 수 없는 기술입니다: {value!r}")
    return MOVE_ALIASES[key]

def parse_side(value) -> Side:
    key = str(value).strip().lower() if value is not None else ""
    if key not in SIDE_ALIASES:
        raise ValueError(f"알 수 없는 공격 진영입니다: {value!r}")
    return SIDE_ALIASES[key]
