"""
抽成服務：依老師的學生數決定抽成等級

純計算邏輯，學生數由 RequestWorkflow.count_approved() 提供
"""
from schemas import CommissionTier

# (最少學生數, 老師分潤比例, 等級名稱)，由高到低
TIERS = [
    (20, 0.85, "Gran Maestro"),
    (10, 0.75, "Avanzado"),
    (3, 0.65, "Intermedio"),
    (0, 0.50, "Novato"),
]


def calculate_commission(active_students: int) -> CommissionTier:
    """
    計算老師目前的抽成等級

    規則：
    ┌────────────┬────────┬──────────────┐
    │ 學生數     │ 分潤   │ 等級         │
    ├────────────┼────────┼──────────────┤
    │ >= 20      │ 85%    │ Gran Maestro │
    │ 10 - 19    │ 75%    │ Avanzado     │
    │ 3 - 9      │ 65%    │ Intermedio   │
    │ 0 - 2      │ 50%    │ Novato       │
    └────────────┴────────┴──────────────┘

    參數：
        active_students: 已核准的學生數

    返回：
        CommissionTier（next_level_start 為下一級門檻，最高級為 None）
    """
    next_level_start = None
    for minimum, rate, level_name in TIERS:
        if active_students >= minimum:
            return CommissionTier(
                rate=rate,
                level_name=level_name,
                active_students=active_students,
                next_level_start=next_level_start,
                platform_fee=round(1 - rate, 2),
            )
        next_level_start = minimum

    raise ValueError(f"active_students must be >= 0, got {active_students}")
