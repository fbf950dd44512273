from ...domain.entities import GradeEntry, GRADE_FIELDS


class IReportRepository:
    def report_for(self, alumno_id: int) -> list[dict]: ...
    def save_batch(self, alumno_id: int, entries: list[GradeEntry]) -> None: ...


def to_entry(materia_id: int, submitted: dict) -> GradeEntry:
    """Absent or null slots become "" so a stored record never holds NULL grades."""
    slots = {}
    for name in GRADE_FIELDS:
        value = submitted.get(name)
        slots[name] = "" if value is None else str(value)
    return GradeEntry(materia_id=materia_id, slots=slots)


class SaveReport:
    def __init__(self, repo: IReportRepository):
        self.repo = repo

    def execute(self, alumno_id: int, notas: list[dict]) -> int:
        entries = [to_entry(n["materiaId"], n) for n in notas]
        self.repo.save_batch(alumno_id, entries)
        return len(entries)
