from datetime import datetime, timezone
from typing import List, Optional, Literal
from pydantic import BaseModel, Field

from arena.models.characters import Character, CharacterKind
from arena.battle.states import RoundEntry, ScriptedRound, TurnLogEntry

def utc_now() -> datetime:
    return datetime.now(timezone.utc)

class FightParticipant(BaseModel):
    id: int
    name: str
    kind: CharacterKind

class FightRecord(BaseModel):
    fight_id: int = Field(..., ge=1)
    kind: Literal["duel", "team"]

    # 1:1 전투
    participant_a: Optional[FightParticipant] = None
    participant_b: Optional[FightParticipant] = None
    winner: Optional[str] = None
    turn_log: List[TurnLogEntry] = Field(default_factory=list)

    # 팀 전투
    team_a: Optional[str] = None
    team_b: Optional[str] = None
    team_a_members: List[FightParticipant] = Field(default_factory=list)
    team_b_members: List[FightParticipant] = Field(default_factory=list)
    mode: Optional[Literal["scripted", "simulated"]] = None
    result: Optional[str] = None
    round_history: List[RoundEntry] = Field(default_factory=list)

    created_time: datetime = Field(default_factory=utc_now)
    updated_time: datetime = Field(default_factory=utc_now)

    @property
    def is_concluded(self) -> bool:
        return self.kind == "duel" or self.result in ("Team A wins", "Team B wins")

# 요청 모델
class DuelRequest(BaseModel):
    id1: int = Field(..., ge=1)
    id2: int = Field(..., ge=1)

class TeamBattleRequest(BaseModel):
    team_a: str = Field(..., min_length=1)
    team_b: str = Field(..., min_length=1)
    mode: Literal["scripted", "simulated"] = "simulated"
    rounds: List[ScriptedRound] = Field(default_factory=list, description="스크립트 모드에서 사용할 라운드 목록")
    max_rounds: Optional[int] = Field(default=None, ge=1, description="시뮬레이션 모드의 최대 라운드 수")

class TeamBattleContinueRequest(BaseModel):
    fight_id: int = Field(..., ge=1)
    rounds: List[ScriptedRound] = Field(default_factory=list)
    max_rounds: Optional[int] = Field(default=None, ge=1)

class FightWinnerUpdateRequest(BaseModel):
    winner: str = Field(..., min_length=1)

# 응답 모델
class DuelResponse(BaseModel):
    fight_id: int
    character_a: Character
    character_b: Character
    winner: str
    turn_log: List[TurnLogEntry]

class TeamBattleResponse(BaseModel):
    fight_id: int
    result: str
    rounds: List[RoundEntry]

class FightPage(BaseModel):
    total: int
    total_pages: int
    page: int
    limit: int
    fights: List[FightRecord]

class FightResponse(BaseModel):
    fight: FightRecord

class FightDeleteResponse(BaseModel):
    message: str
