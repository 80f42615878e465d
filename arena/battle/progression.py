import logging

from arena.models.characters import Character
from arena.utils.combat import MAX_LEVEL, EXPERIENCE_PER_LEVEL, next_ultimate_threshold

logger = logging.getLogger(__name__)

def level_up(character: Character):
    """레벨을 1 올리고 파생 스탯과 궁극기 임계치를 갱신합니다"""
    if character.level >= MAX_LEVEL:
        return
    character.level += 1
    character.reset_derived_stats()
    character.restore_health()
    character.ultimate_threshold = next_ultimate_threshold(character.ultimate_threshold)
    # 임계치가 올라가면 기존 충전량으로는 부족할 수 있음
    character.ultimate_ready = character.ultimate_charge >= character.ultimate_threshold
    logger.info(f"{character.name} 레벨업 → Lv.{character.level} (궁극기 임계치 {character.ultimate_threshold})")

def grant_experience(character: Character, amount: int):
    """경험치를 지급합니다

    100 단위로 레벨업하며 남은 경험치는 다음 레벨로 이월됩니다.
    최대 레벨에서는 경험치를 100으로 고정합니다.
    """
    if character.level >= MAX_LEVEL:
        character.experience = EXPERIENCE_PER_LEVEL
        return

    experience = character.experience + amount
    while experience >= EXPERIENCE_PER_LEVEL and character.level < MAX_LEVEL:
        experience -= EXPERIENCE_PER_LEVEL
        level_up(character)

    character.experience = EXPERIENCE_PER_LEVEL if character.level >= MAX_LEVEL else experience

def award_fight_experience(winner: Character, loser: Character, win_experience: int, loss_experience: int):
    grant_experience(winner, win_experience)
    grant_experience(loser, loss_experience)
