"""
Tests for document sanitization in services/student_repository.py
"""
import logging

import pytest

from schemas.students import StudentCollection
from services.student_repository import normalize, parse_document, serialize

STUDENTS = [
    {
        "name": " Alice ",
        "id": " 1001 ",
        "courses": [
            {"courseName": " Math ", "grade": "88.00", "status": "Passed"},
            {"courseName": "Programming", "grade": 40, "status": "failed"},
        ],
    },
    {"name": "Bob", "id": 1002, "courses": [{"courseName": "Web Development", "grade": "0", "status": "Failed"}]},
]

MESSY = [
    "not a student",
    None,
    {"name": "", "id": "9", "courses": [{"courseName": "Math", "grade": "1", "status": "Failed"}]},
    {"name": "No Id", "courses": [{"courseName": "Math", "grade": "1", "status": "Failed"}]},
    {"name": "Empty", "id": "8", "courses": []},
    {"name": "Orphan", "id": "7", "courses": [{"courseName": "Math"}]},
    {
        "name": "Carol",
        "id": "1003",
        "courses": [
            {"courseName": "Math", "grade": "70.00", "status": "Passed"},
            {"courseName": "", "grade": "70.00", "status": "Passed"},
            {"courseName": "Math", "grade": "", "status": "Passed"},
            {"courseName": "Programming", "grade": "70.00", "status": "Unknown"},
            {"courseName": " math ", "grade": "10.00", "status": "Failed"},
            ["bad"],
        ],
    },
    {"name": "Carol again", "id": "1003", "courses": [{"courseName": "Math", "grade": "1", "status": "Failed"}]},
    {"name": "Dan", "id": "1004", "courses": "oops"},
]


def test_current_shape_is_trimmed_and_coerced():
    result = normalize({"students": STUDENTS})
    alice, bob = result.students
    assert alice.name == "Alice"
    assert alice.id == "1001"
    assert alice.courses[0].courseName == "Math"
    assert alice.courses[1].grade == "40"
    assert alice.courses[1].status == "Failed"
    assert bob.id == "1002"
    assert bob.courses[0].grade == "0"


def test_legacy_array_matches_object_shape():
    assert normalize(STUDENTS) == normalize({"students": STUDENTS})


def test_malformed_entries_are_dropped():
    result = normalize({"students": MESSY})
    assert [s.id for s in result.students] == ["1003"]
    carol = result.students[0]
    assert carol.name == "Carol"
    assert [(c.courseName, c.grade) for c in carol.courses] == [("Math", "70.00")]


@pytest.mark.parametrize("raw", [None, 42, "text", {}, {"students": "nope"}, {"other": []}])
def test_unusable_input_gives_empty_collection(raw):
    assert normalize(raw) == StudentCollection()


@pytest.mark.parametrize("raw", [STUDENTS, {"students": STUDENTS}, MESSY, {"students": MESSY}, None])
def test_normalize_is_idempotent(raw):
    once = normalize(raw)
    assert normalize(once) == once
    assert normalize(once.model_dump()) == once


def test_parse_document_is_lenient():
    assert parse_document(None) == StudentCollection()
    assert parse_document("") == StudentCollection()
    assert parse_document("{not json") == StudentCollection()
    assert parse_document('[{"name": "A", "id": "1", "courses": '
                          '[{"courseName": "Math", "grade": "61.00", "status": "Passed"}]}]').students[0].id == "1"


def test_serialize_writes_object_shape():
    text = serialize(normalize(STUDENTS))
    assert text.lstrip().startswith("{")
    assert parse_document(text) == normalize(STUDENTS)


def test_dropped_records_are_logged_as_warnings(caplog):
    with caplog.at_level(logging.WARNING, logger="services.student_repository"):
        normalize({"students": MESSY})
    messages = [r.getMessage() for r in caplog.records]
    assert any("malformed course record: student=1003" in m for m in messages)
    assert any("duplicate course record: student=1003" in m for m in messages)
    assert any("duplicate student id=1003" in m for m in messages)
    assert any("malformed student entry" in m for m in messages)
