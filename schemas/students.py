from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ✅ 저장 문서 구조 ({"students": [...]})
class CourseRecord(BaseModel):
    courseName: str                          # 과목 표시 이름
    grade: str                               # 최종 점수 (소수점 둘째 자리 문자열, 예: "87.50")
    status: str                              # "Passed" / "Failed"


class Student(BaseModel):
    name: str                                # 학생 이름
    id: str                                  # 학생 ID
    courses: List[CourseRecord] = Field(default_factory=list)


class StudentCollection(BaseModel):
    students: List[Student] = Field(default_factory=list)


# ✅ 입력용 (POST /calculate)
class GradeSubmission(BaseModel):
    """
    성적 입력 요청
    - 평가 항목 점수는 components 매핑 또는 본문 평탄 필드(exam, homework, project) 둘 다 허용
    """
    studentName: Optional[Any] = None
    studentId: Optional[Any] = None
    course: Optional[Any] = None           # 과목 키 (문자열이 아니면 서비스에서 문자열로 변환)
    components: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="allow")

    @field_validator("components", mode="before")
    @classmethod
    def _mapping_only(cls, v):
        # 매핑이 아니면 빈 값 → 항목 검증 단계에서 400
        return v if isinstance(v, dict) else {}

    @model_validator(mode="after")
    def _collect_flat_components(self):
        for field, value in (self.model_extra or {}).items():
            self.components.setdefault(field, value)
        return self


# ✅ 입력용 (PUT /students/{id}/courses/{courseName})
class GradeUpdate(BaseModel):
    components: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="allow")

    @field_validator("components", mode="before")
    @classmethod
    def _mapping_only(cls, v):
        # 매핑이 아니면 빈 값 → 항목 검증 단계에서 400
        return v if isinstance(v, dict) else {}

    @model_validator(mode="after")
    def _collect_flat_components(self):
        for field, value in (self.model_extra or {}).items():
            self.components.setdefault(field, value)
        return self


# ✅ 출력용
class SubmittedGrade(BaseModel):
    name: str
    id: str
    course: str
    grade: str
    status: str
