from bson import ObjectId

from conftest import photo

SUBMISSION = {
    "name": "Vikram Rathore",
    "religion": "Hindu",
    "phoneNumber": "9812345678",
    "gender": "Male",
    "budget": "Rs. 8,00,000",
}


def three_photos():
    return [photo("a.jpg"), photo("b.jpg"), photo("c.jpg")]


def test_public_submission_no_login(client, people_collection):
    response = client.post("/api/public-form", data=SUBMISSION, files=three_photos())

    assert response.status_code == 201
    person = response.json()["person"]
    assert person["source"] == "public"
    assert len(person["photos"]) == 3

    stored = people_collection.find_one({"_id": ObjectId(person["id"])})
    assert stored["budgetNumeric"] == 800000


def test_public_submission_needs_three_photos(client, people_collection):
    response = client.post("/api/public-form", data=SUBMISSION, files=[photo("a.jpg")])

    assert response.status_code == 400
    assert response.json()["detail"] == "Please upload at least 3 photos. Received: 1"
    assert people_collection.count_documents({}) == 0


def test_public_submission_caps_photos(client):
    files = three_photos() + [photo("d.jpg"), photo("e.jpg")]
    response = client.post("/api/public-form", data=SUBMISSION, files=files)

    assert response.status_code == 400
    assert response.json()["detail"] == "Maximum 4 photos allowed"


def test_public_submission_validates_phone(client):
    response = client.post("/api/public-form", data={**SUBMISSION, "phoneNumber": "98-123"}, files=three_photos())

    assert response.status_code == 400
    assert response.json()["detail"].startswith("phoneNumber")


def test_public_submission_requires_religion(client):
    data = {key: value for key, value in SUBMISSION.items() if key != "religion"}
    response = client.post("/api/public-form", data=data, files=three_photos())

    assert response.status_code == 400
    assert response.json()["detail"] == "religion is required."
