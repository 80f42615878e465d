from fastapi import APIRouter, Depends, HTTPException, Body, Query

from arena.battle import BattleEngine, RandomSource
from arena.config import settings
from arena.core.auth import get_current_user
from arena.core.exceptions import NotFoundError, InvalidMoveSpecError
from arena.db.repository import CharacterRepository, FightRepository
from arena.models.fights import (
    DuelRequest,
    DuelResponse,
    TeamBattleRequest,
    TeamBattleContinueRequest,
    TeamBattleResponse,
    FightPage,
    FightResponse,
    FightWinnerUpdateRequest,
    FightDeleteResponse,
)
from arena.services.fights import FightService
from arena.utils.database import get_character_repository, get_fight_repository
from arena.api.examples.fights import (
    DUEL_REQUEST_EXAMPLE,
    DUEL_RESPONSE_EXAMPLE,
    TEAM_BATTLE_REQUEST_EXAMPLE,
    TEAM_BATTLE_CONTINUE_REQUEST_EXAMPLE,
    DUEL_DESCRIPTION,
    TEAM_BATTLE_DESCRIPTION,
    TEAM_BATTLE_CONTINUE_DESCRIPTION,
)

router = APIRouter(prefix="/fights", tags=["fights"], dependencies=[Depends(get_current_user)])

# 싱글톤 패턴 - 앱 전체에서 하나의 BattleEngine(난수 소스) 사용
battle_engine = BattleEngine(RandomSource(settings.BATTLE_SEED))

def get_battle_engine():
    return battle_engine

def get_fight_service(
    characters: CharacterRepository = Depends(get_character_repository),
    fights: FightRepository = Depends(get_fight_repository),
    engine: BattleEngine = Depends(get_battle_engine),
) -> FightService:
    return FightService(
        characters,
        fights,
        engine,
        win_experience=settings.WIN_EXPERIENCE,
        loss_experience=settings.LOSS_EXPERIENCE,
    )

def _move_spec_error(e: InvalidMoveSpecError) -> HTTPException:
    return HTTPException(
        status_code=400,
        detail={"message": str(e), "round": e.round_number, "fight_id": e.fight_id},
    )

@router.get("", response_model=FightPage)
def list_fights(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
    service: FightService = Depends(get_fight_service)
):
    """전체 전투 기록 (1:1, 팀)"""
    return service.list_fights(page, limit)

@router.get("/teams", response_model=FightPage)
def list_team_fights(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
    service: FightService = Depends(get_fight_service)
):
    """팀 전투 기록"""
    return service.list_team_fights(page, limit)

@router.post(
    "",
    response_model=DuelResponse,
    description=DUEL_DESCRIPTION,
    responses={
        200: {
            "description": "전투 결과",
            "content": {
                "application/json": {
                    "example": DUEL_RESPONSE_EXAMPLE
                }
            }
        }
    }
)
def start_duel(
    request: DuelRequest = Body(..., example=DUEL_REQUEST_EXAMPLE),
    service: FightService = Depends(get_fight_service)
):
    try:
        return service.start_duel(request.id1, request.id2)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("/teams", response_model=TeamBattleResponse, description=TEAM_BATTLE_DESCRIPTION)
def start_team_battle(
    request: TeamBattleRequest = Body(..., example=TEAM_BATTLE_REQUEST_EXAMPLE),
    service: FightService = Depends(get_fight_service)
):
    try:
        return service.start_team_battle(request)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidMoveSpecError as e:
        raise _move_spec_error(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("/teams/continue", response_model=TeamBattleResponse, description=TEAM_BATTLE_CONTINUE_DESCRIPTION)
def continue_team_battle(
    request: TeamBattleContinueRequest = Body(..., example=TEAM_BATTLE_CONTINUE_REQUEST_EXAMPLE),
    service: FightService = Depends(get_fight_service)
):
    try:
        return service.continue_team_battle(request)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidMoveSpecError as e:
        raise _move_spec_error(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/{fight_id}", response_model=FightResponse)
def get_fight(fight_id: int, service: FightService = Depends(get_fight_service)):
    try:
        return {"fight": service.get_fight(fight_id)}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.put("/{fight_id}", response_model=FightResponse)
def update_fight_winner(
    fight_id: int,
    data: FightWinnerUpdateRequest,
    service: FightService = Depends(get_fight_service)
):
    """전투 승자 수정"""
    try:
        return {"fight": service.update_winner(fight_id, data.winner)}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.delete("/{fight_id}", response_model=FightDeleteResponse)
def delete_fight(fight_id: int, service: FightService = Depends(get_fight_service)):
    try:
        service.delete_fight(fight_id)
        return {"message": "전투 기록 삭제 완료"}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
