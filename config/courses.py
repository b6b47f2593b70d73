"""
config/courses.py

- 시스템에서 고정으로 제공하는 과목 카탈로그
- 프로세스 시작 시 한 번 생성되고 이후 변경되지 않음 (frozen 모델 + 읽기 전용 매핑)
- 과목별 평가 항목 가중치 합은 반드시 100 (생성 시점에 검증)
"""

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from utils.text import normalize_key


class Course(BaseModel):
    """과목 정의: 표시 이름 + 평가 항목별 가중치(%)"""
    key: str
    name: str
    components: Dict[str, int]   # 항목 이름 → 가중치 (정의 순서 유지)

    model_config = ConfigDict(frozen=True)


class CourseCatalog:
    def __init__(self, courses: Mapping[str, Mapping]):
        built: Dict[str, Course] = {}
        seen_names = set()

        for key, definition in courses.items():
            course = Course(key=key, name=definition["name"], components=dict(definition["components"]))

            total = sum(course.components.values())
            if total != 100:
                raise ValueError(f"Component weights for course '{key}' sum to {total}, expected 100")

            name_key = normalize_key(course.name)
            if name_key in seen_names:
                raise ValueError(f"Duplicate course name in catalog: {course.name}")
            seen_names.add(name_key)

            built[key] = course

        self._courses = MappingProxyType(built)

    def get(self, key: str) -> Optional[Course]:
        return self._courses.get(key)

    def find_by_name(self, display_name) -> Optional[Course]:
        """표시 이름으로 과목 조회 (앞뒤 공백 제거, 대소문자 무시)"""
        wanted = normalize_key(display_name)
        for course in self._courses.values():
            if normalize_key(course.name) == wanted:
                return course
        return None

    def find_key_by_name(self, display_name) -> Optional[str]:
        course = self.find_by_name(display_name)
        return course.key if course else None

    def keys(self) -> List[str]:
        return list(self._courses.keys())

    def as_dict(self) -> Dict[str, dict]:
        # listCourses 응답 형태: { key: {name, components} }
        return {
            key: {"name": c.name, "components": dict(c.components)}
            for key, c in self._courses.items()
        }

    def __contains__(self, key) -> bool:
        return key in self._courses

    def __len__(self) -> int:
        return len(self._courses)


# ✅ 시스템 기본 과목 (고정)
DEFAULT_COURSES = {
    "math": {"name": "Math", "components": {"exam": 80, "homework": 20}},
    "programming": {"name": "Programming", "components": {"exam": 40, "project": 40, "homework": 20}},
    "web_development": {"name": "Web Development", "components": {"project": 80, "homework": 20}},
}

catalog = CourseCatalog(DEFAULT_COURSES)
