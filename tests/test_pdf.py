from bson import ObjectId

from jodi.utils.pdf import format_value, pdf_filename, render_person_pdf


def test_person_pdf(client, user_headers, seed_person):
    person = seed_person(
        name="Ishita Verma",
        dob="1996-04-12",
        budget="₹6,00,000",
        siblings=[{"name": "Arjun", "relation": "Brother"}],
        photos=["photos-missing.jpg"],
    )

    response = client.get(f"/api/people/{person['_id']}/pdf", params={"fields": "name,dob,budget"}, headers=user_headers)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="Ishita_Verma_profile.pdf"' in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")


def test_person_pdf_requires_auth_and_existing_person(client, user_headers):
    assert client.get(f"/api/people/{ObjectId()}/pdf").status_code == 401
    assert client.get(f"/api/people/{ObjectId()}/pdf", headers=user_headers).status_code == 404


def test_bulk_pdf(client, user_headers, seed_person):
    ids = [str(seed_person(name=name)["_id"]) for name in ("Asha", "Dev")]

    response = client.post(
        "/api/people/pdf/bulk",
        json={"personIds": ids, "selectedFields": ["name", "religion"]},
        headers=user_headers,
    )

    assert response.status_code == 200
    assert response.content.startswith(b"%PDF")


def test_bulk_pdf_errors(client, user_headers):
    empty = client.post("/api/people/pdf/bulk", json={"personIds": []}, headers=user_headers)
    assert empty.status_code == 400

    missing = client.post("/api/people/pdf/bulk", json={"personIds": [str(ObjectId())]}, headers=user_headers)
    assert missing.status_code == 404


def test_format_value():
    assert format_value("dob", "1996-04-12") == "12/04/1996"
    assert format_value("dob", "sometime") == "-"
    assert format_value("nri", True) == "Yes"
    assert format_value("area", "") == "-"


def test_pdf_filename_is_header_safe():
    assert pdf_filename("Zoë D'Souza") == "Zo__D_Souza_profile.pdf"
    assert pdf_filename(None) == "profile_profile.pdf"


def test_render_person_pdf_without_details():
    assert render_person_pdf({"name": "Nobody"}, ["unknownField"]).startswith(b"%PDF")
