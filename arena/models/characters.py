from pydantic import BaseModel, Field
from enum import Enum
from typing import Optional, List

from arena.utils.combat import (
    MAX_LEVEL,
    BASE_ULTIMATE_THRESHOLD,
    CRITICAL_MULTIPLIER,
    round_half_up,
    max_health_for_level,
    shield_for_level,
    mitigate,
)

class CharacterKind(str, Enum):
    hero = "hero"
    villain = "villain"

class Character(BaseModel):
    id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1)
    city: Optional[str] = None
    kind: CharacterKind
    team: Optional[str] = None

    level: int = Field(default=1, ge=1, le=MAX_LEVEL)
    experience: int = Field(default=0, ge=0, le=100)
    shield: int = 0
    max_health: float = 100
    health: float = 100

    ultimate_charge: float = Field(default=0, ge=0)
    ultimate_threshold: int = BASE_ULTIMATE_THRESHOLD
    ultimate_ready: bool = False

    class Config:
        json_schema_extra = {
            "example": {
                "id": 1,
                "name": "Superman",
                "city": "Metropolis",
                "kind": "hero",
                "team": "LIGADELAJUSTICIA",
                "level": 1,
                "experience": 0,
                "shield": 0,
                "max_health": 100,
                "health": 100,
                "ultimate_charge": 0,
                "ultimate_threshold": 150,
                "ultimate_ready": False
            }
        }

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    def reset_derived_stats(self):
        """레벨 기반 파생 스탯(방어막, 최대 체력)을 다시 계산합니다"""
        self.shield = shield_for_level(self.level)
        self.max_health = max_health_for_level(self.level)
        self.health = min(self.health, self.max_health)

    def restore_health(self):
        self.health = self.max_health

    # 공격력 계산
    def basic_attack_damage(self) -> int:
        return 5 + (self.level - 1) * 1

    def special_attack_damage(self) -> int:
        return 30 + (self.level - 1) * 10

    def critical_attack_damage(self, base_damage: float) -> int:
        return round_half_up(base_damage * CRITICAL_MULTIPLIER)

    def ultimate_attack_damage(self) -> int:
        return 80 + (self.level - 1) * 10

    def receive_damage(self, amount: float, is_ultimate: bool = False) -> float:
        """피해를 받고 실제로 감소한 체력을 반환합니다

        궁극기는 방어막을 무시하고, 체력은 0 아래로 내려가지 않습니다.
        """
        applied = amount if is_ultimate else mitigate(amount, self.shield)
        before = self.health
        self.health = max(0, self.health - applied)
        return before - self.health

    def accumulate_ultimate_charge(self, damage_dealt: float):
        # 최대 레벨에서 이미 충전이 끝났다면 더 쌓지 않음
        if self.level >= MAX_LEVEL and self.ultimate_charge >= self.ultimate_threshold:
            return
        self.ultimate_charge = max(0, self.ultimate_charge + damage_dealt)
        if self.ultimate_charge >= self.ultimate_threshold:
            self.ultimate_ready = True

    def consume_ultimate(self) -> int:
        """궁극기를 사용합니다. 준비되지 않았다면 0을 반환합니다"""
        if not self.ultimate_ready:
            return 0
        self.ultimate_charge = 0
        self.ultimate_ready = False
        return self.ultimate_attack_damage()

    def progression_fields(self) -> dict:
        """전투 후 저장소에 반영할 필드"""
        return self.model_dump(include={
            "level", "experience", "shield", "max_health", "health",
            "ultimate_charge", "ultimate_threshold", "ultimate_ready"
        })

    @classmethod
    def create(cls, character_id: int, name: str, kind: CharacterKind, city: Optional[str] = None) -> "Character":
        character = cls(id=character_id, name=name, kind=kind, city=city)
        character.reset_derived_stats()
        character.restore_health()
        return character

class CharacterSummary(BaseModel):
    id: int
    name: str
    kind: CharacterKind

class CharacterCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    kind: CharacterKind
    city: Optional[str] = None

class CharacterUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    city: Optional[str] = None

class CharacterPage(BaseModel):
    total: int
    total_pages: int
    page: int
    limit: int
    data: List[Character]

class CharacterDeleteResponse(BaseModel):
    message: str
