import pytest

from core.teacher_directory import BOOTSTRAP_TEACHERS
from schemas import MatchPreferences, Teacher
from services.matching_service import find_best_match, rank_teachers, score_teacher


def make_teacher(id, tags=(), rating=2000, style=""):
    return Teacher(id=id, name=id, rating=rating, price=10, tags=list(tags), teaching_style=style)


def test_empty_teacher_list_has_no_match():
    assert find_best_match([], MatchPreferences(level="beginner")) is None


def test_beginner_prefers_beginner_tag():
    teacher_a = make_teacher("A", tags=["Beginner"])
    teacher_b = make_teacher("B", tags=["Advanced"])
    prefs = MatchPreferences(level="beginner", goal="tactics", style="dynamic")

    assert find_best_match([teacher_a, teacher_b], prefs) == teacher_a
    assert find_best_match([teacher_b, teacher_a], prefs) == teacher_a


def test_score_components():
    teacher = make_teacher("T", tags=["Beginner", "Tactics"], style="Dinámico y divertido")
    contradicting = make_teacher("C", tags=["Master"])

    assert score_teacher(teacher, MatchPreferences(level="beginner")) == 10
    assert score_teacher(contradicting, MatchPreferences(level="beginner")) == -5
    assert score_teacher(teacher, MatchPreferences(goal="tactics")) == 15
    assert score_teacher(teacher, MatchPreferences(style="dynamic")) == 8
    assert score_teacher(teacher, MatchPreferences(level="beginner", goal="tactics", style="dynamic")) == 33


def test_style_match_is_case_insensitive():
    teacher = make_teacher("T", style="Very PATIENT coach")

    assert score_teacher(teacher, MatchPreferences(style="Patient")) == 8


def test_ties_broken_by_rating():
    low = make_teacher("low", tags=["Endgame"], rating=1900)
    high = make_teacher("high", tags=["Endgame"], rating=2400)

    assert find_best_match([low, high], MatchPreferences(goal="endgame")) == high


def test_list_preferences_are_accepted():
    teacher = make_teacher("T", tags=["Strategy", "Psychology"])

    assert score_teacher(teacher, MatchPreferences(goal=["strategy", "psychology"])) == 30


def test_matching_is_deterministic_and_pure():
    teachers = [t.model_copy(deep=True) for t in BOOTSTRAP_TEACHERS]
    snapshot = [t.model_copy(deep=True) for t in teachers]
    prefs = MatchPreferences(level="advanced", goal="openings", style="analytical")

    first = find_best_match(teachers, prefs)
    second = find_best_match(teachers, prefs)

    assert first == second
    assert teachers == snapshot


def test_bootstrap_beginner_tactics_dynamic_matches_tactical_coach():
    prefs = MatchPreferences(level="beginner", goal="tactics", style="dynamic")

    assert find_best_match(BOOTSTRAP_TEACHERS, prefs).id == "teacher2"


def test_rank_orders_all_teachers():
    ranked = rank_teachers(BOOTSTRAP_TEACHERS, MatchPreferences(goal="endgame"))

    assert ranked[0][0].id == "teacher1"
    assert [score for _, score in ranked] == sorted((s for _, s in ranked), reverse=True)


@pytest.mark.parametrize("goal, tag", [
    ("tactics", "Cálculo"),
    ("tactics", "Combinaciones"),
    ("endgame", "Técnica"),
    ("openings", "Aperturas"),
])
def test_spanish_goal_tags_match(goal, tag):
    teacher = make_teacher("T", tags=[tag])

    assert score_teacher(teacher, MatchPreferences(goal=goal)) == 15


@pytest.mark.parametrize("style, text", [
    ("analytical", "Mucho estudio de partidas"),
    ("dynamic", "Clases de práctica constante"),
    ("patient", "Profesor comprensivo"),
])
def test_spanish_style_keywords_match(style, text):
    teacher = make_teacher("T", style=text)

    assert score_teacher(teacher, MatchPreferences(style=style)) == 8


def test_intermediate_level_uses_tags():
    club = make_teacher("club", tags=["Club"], rating=1600)
    master = make_teacher("master", tags=["Master"], rating=2600)

    assert find_best_match([master, club], MatchPreferences(level="intermediate")) == club
