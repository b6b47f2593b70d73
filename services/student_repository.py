"""
services/student_repository.py

- 학생 컬렉션 전체를 JSON 문서 하나로 읽고/수정하고/다시 쓰는 저장소 계층
- 매 요청마다 문서 전체를 읽고(load) → 메모리에서 수정 → 전체를 다시 씀(save)
- 읽기 시 정규화(normalize): 손상/레거시 데이터는 오류 대신 조용히 제외
- 수정 연산은 프로세스 내 Lock 으로 직렬화 (여러 프로세스 간 lost update 는 막지 못함)
"""

import json
import logging
import threading
from typing import Any, List, Mapping, Optional

from config.courses import CourseCatalog
from database.store import DocumentStore, StorageUnavailable
from schemas.common import ErrorCode, ServiceResult, failure, success
from schemas.students import CourseRecord, Student, StudentCollection, SubmittedGrade
from services.grade_calculator import calculate_final_grade, derive_status, format_grade
from utils.text import normalize_key, normalize_status, same_name

logger = logging.getLogger(__name__)

STORAGE_ERROR_MESSAGE = "Storage is unavailable"


# ==========================================================
# [1] 정규화 (lenient read)
# ==========================================================
def _as_text(value: Any) -> str:
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, (str, int, float)):
        return str(value).strip()
    return ""


def _normalize_course(raw: Any) -> Optional[CourseRecord]:
    if not isinstance(raw, Mapping):
        return None
    course_name = _as_text(raw.get("courseName"))
    grade = _as_text(raw.get("grade"))
    status = normalize_status(_as_text(raw.get("status")))
    if not course_name or not grade or not status:
        return None
    return CourseRecord(courseName=course_name, grade=grade, status=status)


def _normalize_student(raw: Any) -> Optional[Student]:
    if not isinstance(raw, Mapping):
        return None
    name = _as_text(raw.get("name"))
    student_id = _as_text(raw.get("id"))
    if not name or not student_id:
        return None

    raw_courses = raw.get("courses")
    courses: List[CourseRecord] = []
    seen = set()
    for item in raw_courses if isinstance(raw_courses, list) else []:
        record = _normalize_course(item)
        if record is None:
            logger.warning(f"Dropping malformed course record: student={student_id}")
            continue
        course_key = normalize_key(record.courseName)
        if course_key in seen:
            logger.warning(f"Dropping duplicate course record: student={student_id} course={record.courseName}")
            continue
        seen.add(course_key)
        courses.append(record)

    # 과목이 하나도 없는 학생은 남기지 않음
    if not courses:
        return None
    return Student(name=name, id=student_id, courses=courses)


def normalize(raw: Any) -> StudentCollection:
    """
    어떤 형태의 입력이든 항상 올바른 StudentCollection 으로 변환 (실패하지 않음)
    - {"students": [...]} (현재 형식) / [...] (레거시 배열 형식) 모두 허용
    - 잘못된 학생/과목 항목, 중복 학생 ID, 학생 내 중복 과목은 제외
    """
    if isinstance(raw, StudentCollection):
        raw = raw.model_dump()

    if isinstance(raw, list):
        entries = raw
    elif isinstance(raw, Mapping) and isinstance(raw.get("students"), list):
        entries = raw["students"]
    else:
        entries = []

    students: List[Student] = []
    seen_ids = set()
    for entry in entries:
        student = _normalize_student(entry)
        if student is None:
            logger.warning("Dropping malformed student entry")
            continue
        if student.id in seen_ids:
            logger.warning(f"Dropping duplicate student id={student.id}")
            continue
        seen_ids.add(student.id)
        students.append(student)

    return StudentCollection(students=students)


def parse_document(text: Optional[str]) -> StudentCollection:
    if not text:
        return StudentCollection()
    try:
        parsed = json.loads(text)
    except ValueError:
        logger.warning("Stored document is not valid JSON; treating as empty")
        return StudentCollection()
    return normalize(parsed)


def serialize(collection: StudentCollection) -> str:
    return json.dumps(normalize(collection).model_dump(), indent=2, ensure_ascii=False)


def _find_student(collection: StudentCollection, student_id: str) -> Optional[Student]:
    return next((s for s in collection.students if s.id == student_id), None)


def _find_course(student: Student, course_name: str) -> Optional[CourseRecord]:
    return next((c for c in student.courses if same_name(c.courseName, course_name)), None)


# ==========================================================
# [2] 저장소
# ==========================================================
class StudentRepository:
    def __init__(self, store: DocumentStore, catalog: CourseCatalog, key: str):
        self.store = store
        self.catalog = catalog
        self.key = key
        self._lock = threading.Lock()

    # ---------- 문서 입출력 ----------
    def load(self) -> ServiceResult:
        try:
            text = self.store.get(self.key)
        except StorageUnavailable:
            return failure(ErrorCode.STORAGE_UNAVAILABLE, STORAGE_ERROR_MESSAGE)
        return success(parse_document(text))

    def save(self, collection: StudentCollection) -> ServiceResult:
        try:
            self.store.set(self.key, serialize(collection))
        except StorageUnavailable:
            return failure(ErrorCode.STORAGE_UNAVAILABLE, STORAGE_ERROR_MESSAGE)
        return success(None)

    def initialize(self) -> ServiceResult:
        """문서가 없으면 빈 컬렉션으로 생성"""
        with self._lock:
            try:
                exists = self.store.get(self.key)
            except StorageUnavailable:
                return failure(ErrorCode.STORAGE_UNAVAILABLE, STORAGE_ERROR_MESSAGE)
            if exists:
                return success(False)
            result = self.save(StudentCollection())
            if not result.ok:
                return result
            logger.info(f"Initialized empty document: key={self.key}")
            return success(True)

    # ---------- 조회 ----------
    def get_all(self, id_substring: Optional[str] = None, status: Optional[str] = None) -> ServiceResult:
        """
        학생 목록 조회 (저장 데이터는 변경하지 않는 view 필터)
        - id_substring: ID 부분 문자열 포함 (대소문자 구분)
        - status: "Passed"/"Failed" (대소문자 무시). 지정 시 해당 상태 과목만 남기고,
          남은 과목이 없는 학생은 제외
        """
        wanted_status = None
        if status is not None and str(status).strip():
            wanted_status = normalize_status(status)
            if wanted_status is None:
                return failure(ErrorCode.INVALID_STATUS_FILTER, "Invalid status filter. Use Passed or Failed")

        loaded = self.load()
        if not loaded.ok:
            return loaded
        students = loaded.data.students

        search_id = (id_substring or "").strip()
        if search_id:
            students = [s for s in students if search_id in s.id]

        if wanted_status:
            filtered = []
            for s in students:
                matching = [c for c in s.courses if c.status == wanted_status]
                if matching:
                    filtered.append(s.model_copy(update={"courses": matching}))
            students = filtered

        return success(students)

    # ---------- 추가 ----------
    def upsert_grade(self, student_id: str, student_name: str, course_display_name: str,
                     component_grades: Mapping[str, Any]) -> ServiceResult:
        """
        성적 추가
        - 신규 ID → 학생 생성 (과목 1개)
        - 기존 학생이 같은 과목 성적을 이미 가지고 있으면 DUPLICATE_COURSE_GRADE
          (수정은 update_grade 로만 가능)
        """
        course = self.catalog.find_by_name(course_display_name)
        if course is None:
            return failure(ErrorCode.UNKNOWN_COURSE, "Invalid course")

        calculated = calculate_final_grade(course, component_grades)
        if not calculated.ok:
            return calculated
        grade = format_grade(calculated.data)
        record = CourseRecord(courseName=course.name, grade=grade, status=derive_status(grade))

        with self._lock:
            loaded = self.load()
            if not loaded.ok:
                return loaded
            collection = loaded.data

            student = _find_student(collection, student_id)
            if student is not None:
                if _find_course(student, course.name) is not None:
                    return failure(ErrorCode.DUPLICATE_COURSE_GRADE,
                                   "Student already has a grade for this course")
                student.courses.append(record)
            else:
                student = Student(name=student_name, id=student_id, courses=[record])
                collection.students.append(student)

            saved = self.save(collection)
            if not saved.ok:
                return saved

        logger.info(f"Grade saved: student={student_id} course={course.name} grade={record.grade}")
        # 기존 학생이면 저장된 이름 그대로 반환
        return success(SubmittedGrade(name=student.name, id=student.id, course=record.courseName,
                                      grade=record.grade, status=record.status))

    # ---------- 수정 ----------
    def update_grade(self, student_id: str, course_display_name: str,
                     component_grades: Mapping[str, Any]) -> ServiceResult:
        with self._lock:
            loaded = self.load()
            if not loaded.ok:
                return loaded
            collection = loaded.data

            student = _find_student(collection, student_id)
            if student is None:
                return failure(ErrorCode.STUDENT_NOT_FOUND, "Student not found")

            entry = _find_course(student, course_display_name)
            if entry is None:
                return failure(ErrorCode.COURSE_NOT_FOUND, "Course not found for this student")

            course = self.catalog.find_by_name(entry.courseName)
            if course is None:
                return failure(ErrorCode.UNKNOWN_COURSE_TYPE, "Cannot update this course (unknown course type)")

            incoming = {}
            for component in course.components:
                value = component_grades.get(component)
                if value is None or (isinstance(value, str) and not value.strip()):
                    return failure(ErrorCode.MISSING_COMPONENT_GRADE, f"{component} grade is required")
                incoming[component] = value

            calculated = calculate_final_grade(course, incoming)
            if not calculated.ok:
                return calculated

            entry.grade = format_grade(calculated.data)
            entry.status = derive_status(entry.grade)

            saved = self.save(collection)
            if not saved.ok:
                return saved

        logger.info(f"Grade updated: student={student_id} course={entry.courseName} grade={entry.grade}")
        return success(entry)

    # ---------- 삭제 ----------
    def delete_student(self, student_id: str) -> ServiceResult:
        with self._lock:
            loaded = self.load()
            if not loaded.ok:
                return loaded
            collection = loaded.data

            remaining = [s for s in collection.students if s.id != student_id]
            if len(remaining) == len(collection.students):
                return failure(ErrorCode.STUDENT_NOT_FOUND, "Student not found")
            collection.students = remaining

            saved = self.save(collection)
            if not saved.ok:
                return saved

        logger.info(f"Student deleted: student={student_id}")
        return success(None)

    def delete_course(self, student_id: str, course_display_name: str) -> ServiceResult:
        """과목 삭제 후 남은 과목이 없으면 학생까지 삭제"""
        with self._lock:
            loaded = self.load()
            if not loaded.ok:
                return loaded
            collection = loaded.data

            student = _find_student(collection, student_id)
            if student is None:
                return failure(ErrorCode.STUDENT_NOT_FOUND, "Student not found")

            remaining = [c for c in student.courses if not same_name(c.courseName, course_display_name)]
            if len(remaining) == len(student.courses):
                return failure(ErrorCode.COURSE_NOT_FOUND, "Course not found for this student")
            student.courses = remaining

            if not student.courses:
                collection.students = [s for s in collection.students if s.id != student_id]

            saved = self.save(collection)
            if not saved.ok:
                return saved

        logger.info(f"Course deleted: student={student_id} course={course_display_name.strip()}")
        return success(None)
