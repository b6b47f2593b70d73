import csv
import logging
import sys

from dependencies.repository import get_repository
from services import grade_service
from services.student_repository import StudentRepository

logger = logging.getLogger(__name__)

CSV_PATH = "data/grades.csv"  # ✅ 기본 파일 경로

# CSV 형식: student_id, student_name, course(과목 키), 평가 항목별 점수 열(exam, homework, project ...)
BASE_COLUMNS = ("student_id", "student_name", "course")


def import_grades(csv_path: str, repository: StudentRepository):
    """CSV 행마다 성적 입력 → (성공 건수, 건너뛴 건수)"""
    imported, skipped = 0, 0

    with open(csv_path, newline="", encoding="utf-8-sig") as csvfile:
        reader = csv.DictReader(csvfile)
        for line_no, row in enumerate(reader, start=2):
            components = {k: v for k, v in row.items() if k and k not in BASE_COLUMNS and v not in (None, "")}
            result = grade_service.submit_grade(
                repository,
                student_name=row.get("student_name"),
                student_id=row.get("student_id"),
                course_key=(row.get("course") or "").strip(),
                component_values=components,
            )
            if result.ok:
                imported += 1
            else:
                skipped += 1
                logger.warning(f"Line {line_no} skipped: {result.error.code.value} {result.error.message}")

    return imported, skipped


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    path = sys.argv[1] if len(sys.argv) > 1 else CSV_PATH
    imported, skipped = import_grades(path, get_repository())
    print(f"✅ 성적 CSV → 저장소 입력 완료 (성공 {imported}건, 건너뜀 {skipped}건)")
