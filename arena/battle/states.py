from enum import Enum
from typing import List, Optional, Literal
from pydantic import BaseModel, Field

from arena.models.characters import Character

class MoveType(str, Enum):
    basic = "basic"
    special = "special"
    critical = "critical"
    ultimate = "ultimate"

class Side(str, Enum):
    A = "A"
    B = "B"

class Move(BaseModel):
    move_type: MoveType = Field(description="기술 종류")
    damage: int = Field(description="방어막 적용 전 공격력")
    is_ultimate: bool = Field(default=False, description="방어막 무시 여부")
    base_move: Optional[MoveType] = Field(default=None, description="치명타의 기반 기술")

class TurnLogEntry(BaseModel):
    turn: int = Field(description="턴 번호 (1부터)")
    attacker: str = Field(description="공격자 이름")
    defender: str = Field(description="방어자 이름")
    move: MoveType
    damage: int = Field(description="공격력 (방어막 적용 전)")
    is_ultimate: bool = False
    health_before: float = Field(description="방어자의 공격 전 체력")
    health_after: float = Field(description="방어자의 공격 후 체력")
    message: str

class DuelOutcome(BaseModel):
    """1:1 전투 결과. winner, loser 는 시뮬레이션용 복사본이다"""
    winner: Character
    loser: Character
    turns: List[TurnLogEntry]

class ScriptedRound(BaseModel):
    """외부에서 지정하는 스크립트 라운드. 값 검증은 라운드를 적용하는 시점에 한다"""
    attacker: Optional[str] = Field(default=None, description="공격 진영 (A 또는 B)")
    move: Optional[str] = Field(default=None, description="기술 (basic, special, critical)")

class MemberSnapshot(BaseModel):
    id: int
    name: str
    health: float
    ultimate_charge: float = 0

class RoundEntry(BaseModel):
    round: int = Field(description="라운드 번호 (전투 기록 전체에서 연속)")
    mode: Literal["scripted", "simulated"]
    attacker: str = Field(description="공격자 이름 (시뮬레이션 모드에서는 A팀 선두)")
    defender: str = Field(description="방어자 이름 (시뮬레이션 모드에서는 B팀 선두)")
    move: Optional[MoveType] = None
    damage: Optional[int] = None
    winner: Optional[str] = Field(default=None, description="라운드 승자 (시뮬레이션 모드)")
    eliminated: Optional[str] = Field(default=None, description="이번 라운드에 탈락한 캐릭터")
    turns: List[TurnLogEntry] = Field(default_factory=list)
    team_a_health: List[MemberSnapshot] = Field(description="라운드 종료 후 A팀 생존자 체력")
    team_b_health: List[MemberSnapshot] = Field(description="라운드 종료 후 B팀 생존자 체력")
    message: str

class TeamBattleState(BaseModel):
    """팀 전투 시뮬레이션 상태. 리스트 맨 앞이 선두 캐릭터"""
    team_a: List[Character]
    team_b: List[Character]

    def front(self, side: Side) -> Character:
        return self.team_a[0] if side == Side.A else self.team_b[0]

    def roster(self, side: Side) -> List[Character]:
        return self.team_a if side == Side.A else self.team_b

    @property
    def is_over(self) -> bool:
        return not self.team_a or not self.team_b

    def result(self) -> str:
        if self.team_a and not self.team_b:
            return "Team A wins"
        if self.team_b and not self.team_a:
            return "Team B wins"
        return "inconclusive"

    def snapshot(self, side: Side) -> List[MemberSnapshot]:
        return [
            MemberSnapshot(id=c.id, name=c.name, health=round(c.health, 2), ultimate_charge=c.ultimate_charge)
            for c in self.roster(side)
        ]
