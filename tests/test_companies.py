"""
Tests for company endpoints and the company CRUD layer.

Tests cover:
- Creation (admin only)
- Listing with and without filters
- Retrieval with jobs
- Partial updates and deletes
"""

import pytest

from app.core.exceptions import NotFoundError, ValidationError
from app.crud import company as company_crud

NEW_COMPANY = {
    "handle": "new",
    "name": "New",
    "description": "DescNew",
    "numEmployees": 10,
    "logoUrl": "http://new.img",
}


class TestCompanyCrud:
    """Direct tests of app.crud.company against the test database"""

    def test_find_all_filters_by_name_case_insensitively(self, seeded_db):
        companies = company_crud.find_all(seeded_db, {"name": "c1"})

        assert [c["handle"] for c in companies] == ["c1"]

    def test_find_all_filters_by_employee_range(self, seeded_db):
        companies = company_crud.find_all(seeded_db, {"minEmployees": 2, "maxEmployees": 3})

        assert [c["handle"] for c in companies] == ["c2", "c3"]

    def test_update_not_found(self, seeded_db):
        with pytest.raises(NotFoundError):
            company_crud.update(seeded_db, "nope", {"name": "X"})

    def test_update_empty(self, seeded_db):
        with pytest.raises(ValidationError):
            company_crud.update(seeded_db, "c1", {})

    def test_create_duplicate(self, seeded_db):
        with pytest.raises(ValidationError):
            company_crud.create(seeded_db, {**NEW_COMPANY, "handle": "c1", "name": "Other"})


class TestCompanyCreation:

    def test_admin_can_create(self, client, seeded_db, admin_headers):
        response = client.post("/api/v1/companies/", json=NEW_COMPANY, headers=admin_headers)

        assert response.status_code == 201
        assert response.json() == NEW_COMPANY

    def test_non_admin_rejected(self, client, seeded_db, u1_headers):
        response = client.post("/api/v1/companies/", json=NEW_COMPANY, headers=u1_headers)

        assert response.status_code == 401

    def test_anonymous_rejected(self, client, seeded_db):
        response = client.post("/api/v1/companies/", json=NEW_COMPANY)

        assert response.status_code == 401

    def test_missing_fields(self, client, seeded_db, admin_headers):
        response = client.post(
            "/api/v1/companies/", json={"handle": "new"}, headers=admin_headers
        )

        assert response.status_code == 422


class TestCompanyListing:

    def test_list_all(self, client, seeded_db):
        response = client.get("/api/v1/companies/")

        assert response.status_code == 200
        assert [c["handle"] for c in response.json()] == ["c1", "c2", "c3"]
        assert response.json()[0] == {
            "handle": "c1",
            "name": "C1",
            "description": "Desc1",
            "numEmployees": 1,
            "logoUrl": "http://c1.img",
        }

    def test_filter_by_name(self, client, seeded_db):
        response = client.get("/api/v1/companies/", params={"name": "3"})

        assert response.status_code == 200
        assert [c["handle"] for c in response.json()] == ["c3"]

    def test_filter_by_min_and_max(self, client, seeded_db):
        response = client.get(
            "/api/v1/companies/", params={"minEmployees": "1", "maxEmployees": "2"}
        )

        assert response.status_code == 200
        assert [c["handle"] for c in response.json()] == ["c1", "c2"]

    def test_non_numeric_bound(self, client, seeded_db):
        response = client.get("/api/v1/companies/", params={"minEmployees": "onehundred"})

        assert response.status_code == 400

    def test_unknown_filter(self, client, seeded_db):
        response = client.get("/api/v1/companies/", params={"potato": "true"})

        assert response.status_code == 400
        assert "potato" in response.json()["detail"]


class TestCompanyRetrieval:

    def test_get_with_jobs(self, client, seeded_db):
        response = client.get("/api/v1/companies/c1")

        assert response.status_code == 200
        data = response.json()
        assert data["handle"] == "c1"
        assert [job["title"] for job in data["jobs"]] == ["Job1", "Job2"]

    def test_get_not_found(self, client, seeded_db):
        response = client.get("/api/v1/companies/nope")

        assert response.status_code == 404
        assert "nope" in response.json()["detail"]


class TestCompanyUpdateAndDelete:

    def test_admin_can_update(self, client, seeded_db, admin_headers):
        response = client.patch(
            "/api/v1/companies/c1",
            json={"name": "C1-new", "numEmployees": 42},
            headers=admin_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "C1-new"
        assert data["numEmployees"] == 42
        assert data["description"] == "Desc1"

    def test_update_empty_body(self, client, seeded_db, admin_headers):
        response = client.patch("/api/v1/companies/c1", json={}, headers=admin_headers)

        assert response.status_code == 400

    def test_update_cannot_change_handle(self, client, seeded_db, admin_headers):
        response = client.patch(
            "/api/v1/companies/c1", json={"handle": "c1-new"}, headers=admin_headers
        )

        assert response.status_code == 422

    def test_non_admin_cannot_update(self, client, seeded_db, u1_headers):
        response = client.patch("/api/v1/companies/c1", json={"name": "X"}, headers=u1_headers)

        assert response.status_code == 401

    def test_admin_can_delete(self, client, seeded_db, admin_headers):
        response = client.delete("/api/v1/companies/c3", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": "c3"}
        assert client.get("/api/v1/companies/c3").status_code == 404

    def test_delete_not_found(self, client, seeded_db, admin_headers):
        response = client.delete("/api/v1/companies/nope", headers=admin_headers)

        assert response.status_code == 404

    def test_delete_removes_company_jobs(self, client, seeded_db, admin_headers):
        job_ids = [job["id"] for job in client.get("/api/v1/companies/c1").json()["jobs"]]
        assert len(job_ids) == 2

        response = client.delete("/api/v1/companies/c1", headers=admin_headers)

        assert response.status_code == 200
        remaining = [job["title"] for job in client.get("/api/v1/jobs/").json()]
        assert remaining == ["Job3"]
        for job_id in job_ids:
            assert client.get(f"/api/v1/jobs/{job_id}").status_code == 404


class TestCompanyNullsAndDuplicates:

    @pytest.mark.parametrize("field", ["name", "description"])
    def test_update_rejects_null_for_required_field(self, client, seeded_db, admin_headers, field):
        response = client.patch(
            "/api/v1/companies/c1", json={field: None}, headers=admin_headers
        )

        assert response.status_code == 422
        assert client.get("/api/v1/companies/c1").json()[field] is not None

    def test_update_allows_clearing_optional_fields(self, client, seeded_db, admin_headers):
        response = client.patch(
            "/api/v1/companies/c1",
            json={"numEmployees": None, "logoUrl": None},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["numEmployees"] is None
        assert response.json()["logoUrl"] is None

    def test_create_duplicate_name(self, client, seeded_db, admin_headers):
        response = client.post(
            "/api/v1/companies/", json={**NEW_COMPANY, "name": "C1"}, headers=admin_headers
        )

        assert response.status_code == 400
        assert "duplicate" in response.json()["detail"].lower()

    def test_update_to_another_companys_name(self, client, seeded_db, admin_headers):
        response = client.patch(
            "/api/v1/companies/c2", json={"name": "C1"}, headers=admin_headers
        )

        assert response.status_code == 400
        assert client.get("/api/v1/companies/c2").json()["name"] == "C2"

    def test_update_keeping_own_name(self, client, seeded_db, admin_headers):
        response = client.patch(
            "/api/v1/companies/c1",
            json={"name": "C1", "description": "Same name"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["description"] == "Same name"

    def test_crud_create_duplicate_name(self, seeded_db):
        with pytest.raises(ValidationError):
            company_crud.create(seeded_db, {**NEW_COMPANY, "name": "C2"})
