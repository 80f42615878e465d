from fastapi import APIRouter, Depends, HTTPException, Query

from arena.core.auth import get_current_user
from arena.core.exceptions import NotFoundError
from arena.db.repository import CharacterRepository
from arena.services import teams
from arena.models.teams import TeamCreateRequest, TeamUpdateRequest, TeamResponse, TeamPage, TeamDeleteResponse

from arena.utils.database import get_character_repository

router = APIRouter(prefix="/teams", tags=["teams"], dependencies=[Depends(get_current_user)])

@router.get("", response_model=TeamPage)
def list_teams(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
    repo: CharacterRepository = Depends(get_character_repository)
):
    """구성원이 3명인 팀 목록"""
    return teams.list_teams(page, limit, repo)

@router.post("", response_model=TeamResponse, status_code=200)
def create_team(data: TeamCreateRequest, repo: CharacterRepository = Depends(get_character_repository)):
    """팀 생성 (같은 타입 캐릭터 3명)"""
    try:
        members = teams.create_team(data.name, data.ids, repo)
        return {"name": teams.normalize_team_name(data.name), "members": members}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.put("/{name}", response_model=TeamResponse)
def update_team(name: str, data: TeamUpdateRequest, repo: CharacterRepository = Depends(get_character_repository)):
    """팀 구성원 교체"""
    try:
        members = teams.update_team(name, data.ids, repo)
        return {"name": teams.normalize_team_name(name), "members": members}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.delete("/{name}", response_model=TeamDeleteResponse)
def delete_team(name: str, repo: CharacterRepository = Depends(get_character_repository)):
    try:
        teams.delete_team(name, repo)
        return {"message": "팀 삭제 완료"}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
