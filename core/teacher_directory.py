"""
TeacherDirectory：老師資料的查詢與編輯

第一次使用時會寫入三位預設老師，系統冷啟動時不會是空的
"""
from typing import List, Optional, Union
import logging

from schemas import Teacher, TeacherPatch
from core.store import PersistentStore, TEACHERS

logger = logging.getLogger(__name__)

BOOTSTRAP_TEACHERS = [
    Teacher(
        id="teacher1",
        name="GM Ana Smith",
        rating=2450,
        price=35,
        classes_given=42,
        earnings=1250.50,
        description="Especialista en defensa siciliana y finales.",
        tags=["Strategy", "Endgame", "Advanced"],
        teaching_style="Analítica y paciente. Me enfoco en la comprensión profunda de los finales y estructuras de peones.",
        curriculum="1. Dominio de la Defensa Siciliana. 2. Finales de Torres teóricos. 3. Planificación estratégica en medio juego.",
        title="GM",
    ),
    Teacher(
        id="teacher2",
        name="IM Carlos Ruiz",
        rating=2310,
        price=25,
        classes_given=18,
        earnings=450.00,
        description="Entrenador táctico para jugadores de club.",
        tags=["Tactics", "Beginner", "Kids"],
        teaching_style="Dinámico y divertido. Ideal para niños y principiantes que quieren mejorar su visión táctica rápidamente.",
        curriculum="1. Patrones tácticos básicos. 2. Aperturas agresivas para blancas. 3. Cómo evitar errores graves.",
        title="IM",
    ),
    Teacher(
        id="teacher3",
        name="WGM Sarah Polgar",
        rating=2505,
        price=50,
        classes_given=156,
        earnings=7800.00,
        description="Ex-campeona mundial juvenil. Clases avanzadas.",
        tags=["Opening Prep", "Psychology", "Master"],
        teaching_style="Rigurosa y competitiva. Preparación profesional para torneos y psicología deportiva.",
        curriculum="1. Repertorio de Gran Maestro. 2. Psicología en la competición. 3. Cálculo complejo.",
        title="WGM",
    ),
]


class TeacherDirectory:
    """老師資料管理器"""

    def __init__(self, store: PersistentStore, seed: bool = True):
        self.store = store
        self.seed = seed

    def _ensure_seeded(self) -> None:
        if self.seed and not self.store.contains(TEACHERS):
            self.store.write(TEACHERS, [t.model_copy(deep=True) for t in BOOTSTRAP_TEACHERS])
            logger.info(f"Seeded {len(BOOTSTRAP_TEACHERS)} bootstrap teachers")

    def list(self) -> List[Teacher]:
        self._ensure_seeded()
        return self.store.read(TEACHERS)

    def get_by_id(self, teacher_id: str) -> Optional[Teacher]:
        for teacher in self.list():
            if teacher.id == teacher_id:
                return teacher
        return None

    def update(self, teacher_id: str, patch: Union[TeacherPatch, dict]) -> Optional[Teacher]:
        """
        編輯老師資料（shallow merge）

        參數：
            teacher_id: 老師 ID
            patch: 只有明確設定的欄位會覆寫

        返回：
            合併後的 Teacher；找不到時回傳 None 且不寫入
        """
        if isinstance(patch, dict):
            patch = TeacherPatch.model_validate(patch)

        teachers = self.list()
        for index, teacher in enumerate(teachers):
            if teacher.id != teacher_id:
                continue
            merged = Teacher.model_validate({
                **teacher.model_dump(),
                **patch.model_dump(exclude_unset=True),
            })
            teachers[index] = merged
            self.store.write(TEACHERS, teachers)
            logger.info(f"Updated teacher {teacher_id}: {sorted(patch.model_fields_set)}")
            return merged

        return None
