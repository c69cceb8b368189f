import json

import pytest

from jodi.seed_people import build_person_documents, load_people

RECORDS = [
    {
        "name": "Neha Gupta",
        "gender": "Female",
        "maritalStatus": "Never Married",
        "religion": "Hindu",
        "phoneNumber": "9000000001",
        "budget": "₹9,00,000",
        "photos": ["neha.jpg"],
    },
    {"name": "Missing Fields"},
    {
        "name": "Aman Jain",
        "gender": "Male",
        "maritalStatus": "Divorced",
        "religion": "Jain",
        "phoneNumber": "9000000002",
        "budget": "discuss",
    },
]


def test_build_person_documents_skips_invalid_records():
    documents = build_person_documents(RECORDS)

    assert [doc["name"] for doc in documents] == ["Neha Gupta", "Aman Jain"]
    neha, aman = documents
    assert neha["budgetNumeric"] == 900000
    assert neha["profilePicture"] == "neha.jpg"
    assert "budgetNumeric" not in aman
    assert aman["photos"] == []


def test_load_people(tmp_path):
    path = tmp_path / "people.json"
    path.write_text(json.dumps(RECORDS), encoding="utf-8")
    assert len(load_people(str(path))) == 3


def test_load_people_requires_array(tmp_path):
    path = tmp_path / "people.json"
    path.write_text(json.dumps({"name": "x"}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_people(str(path))
