"""Tests for the HTTP surface."""

API = "/api/v1/id-logics"


def _create(client, **overrides):
    payload = {
        "slug": "employee",
        "format": "{PREFIX}-{YYYY}-{MM}-{#####}",
        "reset_type": "monthly",
        "pad_length": 5,
    }
    payload.update(overrides)
    return client.post(f"{API}/", json=payload)


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}


class TestLogicAdmin:
    def test_create_and_get(self, client):
        response = _create(client, token_reset_logic=" YYYY , MM ,")
        assert response.status_code == 201
        body = response.json()
        assert body["slug"] == "employee"
        assert body["token_reset_logic"] == "YYYY,MM"
        assert body["reset_keys"] == ["YYYY", "MM"]
        assert body["starting_id"] == 1

        assert client.get(f"{API}/employee").json()["format"] == "{PREFIX}-{YYYY}-{MM}-{#####}"

    def test_duplicate_slug(self, client):
        _create(client)
        assert _create(client).status_code == 409

    def test_invalid_reset_type(self, client):
        assert _create(client, reset_type="weekly").status_code == 422

    def test_list_with_filters(self, client):
        _create(client)
        _create(client, slug="invoice", format="INV-{#}", active=False)

        body = client.get(f"{API}/").json()
        assert body["total"] == 2
        assert [item["slug"] for item in body["items"]] == ["employee", "invoice"]

        assert client.get(f"{API}/", params={"ativo": False}).json()["total"] == 1
        assert client.get(f"{API}/", params={"busca": "INV"}).json()["items"][0]["slug"] == "invoice"

    def test_update(self, client):
        _create(client)
        response = client.put(f"{API}/employee", json={"pad_length": 3, "active": False})
        assert response.status_code == 200
        assert response.json()["pad_length"] == 3
        assert response.json()["active"] is False

    def test_missing_logic(self, client):
        assert client.get(f"{API}/missing").status_code == 404
        assert client.put(f"{API}/missing", json={"pad_length": 3}).status_code == 404

    def test_soft_delete(self, client):
        _create(client)
        assert client.delete(f"{API}/employee").status_code == 204
        assert client.get(f"{API}/employee").status_code == 404
        response = client.post(f"{API}/generate", json={"slug": "employee"})
        assert response.status_code == 404


class TestGenerateRoute:
    def test_single_code(self, client):
        _create(client)
        response = client.post(f"{API}/generate", json={
            "slug": "employee",
            "data": {"PREFIX": "EMP"},
            "date": "2025-11-04",
        })
        assert response.status_code == 200
        assert response.json() == {"code": "EMP-2025-11-00001"}

    def test_multiple_codes(self, client):
        _create(client)
        response = client.post(f"{API}/generate", json={
            "slug": "employee",
            "data": {"PREFIX": "EMP"},
            "date": "2025-11-04",
            "multiple": 3,
        })
        assert response.json() == {"codes": [
            "EMP-2025-11-00001",
            "EMP-2025-11-00002",
            "EMP-2025-11-00003",
        ]}

    def test_monthly_reset(self, client):
        _create(client)
        first = client.post(f"{API}/generate", json={"slug": "employee", "data": {"PREFIX": "EMP"}, "date": "2025-11-30"})
        second = client.post(f"{API}/generate", json={"slug": "employee", "data": {"PREFIX": "EMP"}, "date": "2025-12-01"})
        assert first.json()["code"] == "EMP-2025-11-00001"
        assert second.json()["code"] == "EMP-2025-12-00001"

    def test_unknown_slug(self, client):
        response = client.post(f"{API}/generate", json={"slug": "missing"})
        assert response.status_code == 404
        assert "missing" in response.json()["detail"]

    def test_inactive_slug(self, client):
        _create(client, active=False)
        assert client.post(f"{API}/generate", json={"slug": "employee"}).status_code == 404

    def test_invalid_date(self, client):
        _create(client)
        response = client.post(f"{API}/generate", json={"slug": "employee", "date": "yesterday"})
        assert response.status_code == 422

    def test_rejects_nested_data(self, client):
        _create(client)
        response = client.post(f"{API}/generate", json={"slug": "employee", "data": {"PREFIX": {"a": 1}}})
        assert response.status_code == 422


class TestGeneratedHistory:
    def test_lists_newest_first(self, client):
        _create(client, slug="order", format="{CUSTOMER}-{###}", reset_type="token", pad_length=3)
        for customer in ("ACME", "OTHER", "ACME"):
            client.post(f"{API}/generate", json={"slug": "order", "data": {"CUSTOMER": customer}, "date": "2025-11-04"})

        body = client.get(f"{API}/order/generated").json()
        assert body["total"] == 3
        assert [item["generated_code"] for item in body["items"]] == ["ACME-002", "OTHER-001", "ACME-001"]

        acme = client.get(f"{API}/order/generated", params={"id_token": "ACME"}).json()
        assert [item["sequence_number"] for item in acme["items"]] == [2, 1]

    def test_missing_logic(self, client):
        assert client.get(f"{API}/missing/generated").status_code == 404
