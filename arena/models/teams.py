from pydantic import BaseModel, Field
from typing import List

from arena.models.characters import Character, CharacterSummary

class TeamCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, description="팀 이름 (대문자로 정규화)")
    ids: List[int] = Field(..., description="팀에 배정할 캐릭터 ID 3개")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "LIGADELAJUSTICIA",
                "ids": [1, 2, 3]
            }
        }

class TeamUpdateRequest(BaseModel):
    ids: List[int]

class TeamResponse(BaseModel):
    name: str
    members: List[Character]

class TeamInfo(BaseModel):
    name: str
    members: List[CharacterSummary]

class TeamPage(BaseModel):
    total: int
    total_pages: int
    page: int
    limit: int
    teams: List[TeamInfo]

class TeamDeleteResponse(BaseModel):
    message: str
