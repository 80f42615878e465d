import math

MIN_LEVEL = 1
MAX_LEVEL = 10

BASE_HEALTH = 100
HEALTH_PER_LEVEL = 5
SHIELD_PER_LEVEL = 5

EXPERIENCE_PER_LEVEL = 100

BASE_ULTIMATE_THRESHOLD = 150
ULTIMATE_THRESHOLD_GROWTH = 1.1

CRITICAL_MULTIPLIER = 1.5

def round_half_up(value: float) -> int:
    """소수점 0.5 이상을 올림 처리합니다 (파이썬 round 는 짝수 반올림이므로 사용하지 않음)"""
    return int(math.floor(value + 0.5))

def max_health_for_level(level: int) -> int:
    return BASE_HEALTH + (level - 1) * HEALTH_PER_LEVEL

def shield_for_level(level: int) -> int:
    return (level - 1) * SHIELD_PER_LEVEL

def next_ultimate_threshold(threshold: int) -> int:
    """레벨업 시 궁극기 임계치 증가량을 계산합니다

    Args:
        threshold: 현재 임계치

    Returns:
        int: threshold * 1.1 을 반올림한 값 (현재 값보다 작아지지 않음)
    """
    return max(threshold, round_half_up(threshold * ULTIMATE_THRESHOLD_GROWTH))

def mitigate(amount: float, shield: int) -> float:
    """방어막 비율만큼 피해를 감소시킵니다"""
    if shield <= 0:
        return amount
    return amount - amount * shield / 100
