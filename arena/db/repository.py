from abc import ABC, abstractmethod
from typing import List, Optional

from arena.models.characters import Character
from arena.models.fights import FightRecord

class CharacterRepository(ABC):
    """캐릭터 저장소 인터페이스 (JSON 파일 / MongoDB)"""

    @abstractmethod
    def list_all(self) -> List[Character]: ...

    @abstractmethod
    def get_by_id(self, character_id: int) -> Optional[Character]: ...

    @abstractmethod
    def add(self, character: Character) -> None: ...

    @abstractmethod
    def update(self, character_id: int, fields: dict) -> None: ...

    @abstractmethod
    def remove(self, character_id: int) -> None: ...

    @abstractmethod
    def replace_all(self, characters: List[Character]) -> None: ...

    def next_id(self) -> int:
        characters = self.list_all()
        return max(c.id for c in characters) + 1 if characters else 1

class FightRepository(ABC):
    """전투 기록 저장소 인터페이스"""

    @abstractmethod
    def list_all(self) -> List[FightRecord]: ...

    @abstractmethod
    def get_by_id(self, fight_id: int) -> Optional[FightRecord]: ...

    @abstractmethod
    def add(self, record: FightRecord) -> None: ...

    @abstractmethod
    def update(self, fight_id: int, fields: dict) -> None: ...

    @abstractmethod
    def remove(self, fight_id: int) -> None: ...

    def next_id(self) -> int:
        fights = self.list_all()
        return max(f.fight_id for f in fights) + 1 if fights else 1
