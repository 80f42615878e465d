from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List

from arena.core.auth import get_current_user
from arena.core.exceptions import NotFoundError
from arena.db.repository import CharacterRepository
from arena.services import characters
from arena.models.characters import (
    Character,
    CharacterKind,
    CharacterCreateRequest,
    CharacterUpdateRequest,
    CharacterPage,
    CharacterDeleteResponse,
)

from arena.utils.database import get_character_repository

router = APIRouter(prefix="/characters", tags=["characters"], dependencies=[Depends(get_current_user)])

@router.get("", response_model=CharacterPage)
def list_characters(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
    repo: CharacterRepository = Depends(get_character_repository)
):
    """캐릭터 목록 (페이지네이션)"""
    return characters.list_characters(page, limit, repo)

@router.get("/kind/{kind}", response_model=List[Character])
def list_characters_by_kind(kind: CharacterKind, repo: CharacterRepository = Depends(get_character_repository)):
    return characters.find_by_kind(kind, repo)

@router.get("/city/{city}", response_model=List[Character])
def list_characters_by_city(city: str, repo: CharacterRepository = Depends(get_character_repository)):
    return characters.find_by_city(city, repo)

@router.get("/{character_id}", response_model=Character)
def get_character(character_id: int, repo: CharacterRepository = Depends(get_character_repository)):
    try:
        return characters.get_character(character_id, repo)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.post("", response_model=Character, status_code=201)
def create_character(data: CharacterCreateRequest, repo: CharacterRepository = Depends(get_character_repository)):
    """캐릭터 생성"""
    try:
        return characters.create_character(data, repo)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.put("/{character_id}", response_model=Character)
def update_character(
    character_id: int,
    data: CharacterUpdateRequest,
    repo: CharacterRepository = Depends(get_character_repository)
):
    """캐릭터 이름/도시 수정"""
    try:
        return characters.update_character(character_id, data, repo)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.delete("/{character_id}", response_model=CharacterDeleteResponse)
def delete_character(character_id: int, repo: CharacterRepository = Depends(get_character_repository)):
    try:
        characters.delete_character(character_id, repo)
        return {"message": "캐릭터 삭제 완료"}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
