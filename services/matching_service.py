"""
Matching service.

Scores teachers against a student's onboarding preferences and picks the
best fit. Pure functions only: inputs are never mutated and the same
(teachers, preferences) pair always yields the same teacher.

Scoring per teacher:
- level: +10 for a tag suited to the level, -5 for a tag contradicting it
- goal: +15 when a tag matches the goal's specialization keywords
- style: +8 when the teaching style text mentions a style keyword
Ties on score are broken by the higher rating, then by input order.

The intermediate level is scored on "intermediate" and "club" tags, like the
other levels, rather than on a rating band.
"""
from typing import Dict, List, Optional, Sequence, Set, Tuple

from schemas import MatchPreferences, PreferenceValue, Teacher

LEVEL_SCORE = 10
LEVEL_PENALTY = -5
GOAL_SCORE = 15
STYLE_SCORE = 8

# level -> (suitable tags, contradicting tags)
LEVEL_TAGS: Dict[str, Tuple[Set[str], Set[str]]] = {
    "beginner": ({"beginner", "kids"}, {"advanced", "master"}),
    "intermediate": ({"intermediate", "club"}, set()),
    "advanced": ({"advanced", "master"}, {"beginner", "kids"}),
}

GOAL_KEYWORDS: Dict[str, List[str]] = {
    "tactics": ["tactics", "táctica", "attack", "cálculo", "combinaciones"],
    "openings": ["openings", "opening", "aperturas", "apertura", "repertorio"],
    "endgame": ["endgame", "finales", "técnica"],
    "strategy": ["strategy", "estrategia", "positional", "posicional"],
    "psychology": ["psychology", "psicología", "mental"],
}

STYLE_KEYWORDS: Dict[str, List[str]] = {
    "analytical": ["analytical", "analítica", "profunda", "estudio"],
    "dynamic": ["dynamic", "dinámico", "divertido", "práctica"],
    "patient": ["patient", "paciente", "comprensivo", "paso a paso"],
}


def _as_list(value: PreferenceValue) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value.lower()] if value else []
    return [v.lower() for v in value if v]


def score_teacher(teacher: Teacher, preferences: MatchPreferences) -> int:
    score = 0
    tags = {t.lower() for t in teacher.tags}
    style = teacher.teaching_style.lower()

    for level in _as_list(preferences.level):
        suitable, contradicting = LEVEL_TAGS.get(level, ({level}, set()))
        if tags & suitable:
            score += LEVEL_SCORE
        if tags & contradicting:
            score += LEVEL_PENALTY

    for goal in _as_list(preferences.goal):
        keywords = GOAL_KEYWORDS.get(goal, [goal])
        if any(k in tag for k in keywords for tag in tags):
            score += GOAL_SCORE

    for wanted in _as_list(preferences.style):
        keywords = STYLE_KEYWORDS.get(wanted, [wanted])
        if any(k in style for k in keywords):
            score += STYLE_SCORE

    return score


def rank_teachers(teachers: Sequence[Teacher], preferences: MatchPreferences) -> List[Tuple[Teacher, int]]:
    """Return (teacher, score) pairs, best match first."""
    scored = [(teacher, score_teacher(teacher, preferences)) for teacher in teachers]
    # sorted() is stable, so equal (score, rating) keeps the caller's order.
    return sorted(scored, key=lambda pair: (-pair[1], -pair[0].rating))


def find_best_match(teachers: Sequence[Teacher], preferences: MatchPreferences) -> Optional[Teacher]:
    if not teachers:
        return None
    return rank_teachers(teachers, preferences)[0][0]
