"""Tests for API endpoints."""

import json

import pytest


@pytest.mark.asyncio
class TestShortenEndpoint:
    """Test POST /shorten."""

    async def test_shorten_url(self, client, service, sample_urls):
        response = await client.post("/shorten", json={"url": sample_urls[0]})

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"shortCode", "validUntil", "LogId"}
        assert len(data["shortCode"]) == 8
        assert data["validUntil"] == service.store.get(data["shortCode"]).created_at + 3_600_000
        assert response.headers["x-log-id"] == data["LogId"]

    async def test_shorten_with_custom_code_and_expiry(self, client, clock, sample_urls):
        response = await client.post(
            "/shorten",
            json={"url": sample_urls[0], "customCode": "abc", "expiryMinutes": 1}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["shortCode"] == "abc"
        assert data["validUntil"] == clock.now_ms() + 60_000

    async def test_shorten_non_positive_expiry_uses_default(self, client, clock, sample_urls):
        response = await client.post("/shorten", json={"url": sample_urls[0], "expiryMinutes": 0})

        assert response.status_code == 200
        assert response.json()["validUntil"] == clock.now_ms() + 3_600_000

    async def test_shorten_invalid_url(self, client):
        response = await client.post("/shorten", json={"url": "not-a-url"})

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "A valid web address is required."
        assert data["LogId"]

    async def test_shorten_missing_url(self, client):
        response = await client.post("/shorten", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "A valid web address is required."

    async def test_shorten_invalid_custom_code(self, client, sample_urls):
        response = await client.post("/shorten", json={"url": sample_urls[0], "customCode": "no spaces"})

        assert response.status_code == 400
        assert "Short code" in response.json()["error"]

    async def test_shorten_duplicate_custom_code(self, client, sample_urls):
        await client.post("/shorten", json={"url": sample_urls[0], "customCode": "duplicate123"})

        response = await client.post("/shorten", json={"url": sample_urls[1], "customCode": "duplicate123"})

        assert response.status_code == 409
        assert response.json()["error"] == "This custom code is already in use."

    @pytest.mark.parametrize("expiry", ["10", "soon", [5], {"minutes": 5}, 1e308])
    async def test_shorten_unusable_expiry_uses_default(self, client, clock, sample_urls, expiry):
        response = await client.post("/shorten", json={"url": sample_urls[0], "expiryMinutes": expiry})

        assert response.status_code == 200
        assert response.json()["validUntil"] == clock.now_ms() + 3_600_000

    async def test_shorten_non_string_url(self, client):
        response = await client.post("/shorten", json={"url": 123})

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "A valid web address is required."
        assert data["LogId"]

    async def test_shorten_non_string_custom_code(self, client, sample_urls):
        response = await client.post("/shorten", json={"url": sample_urls[0], "customCode": 42})

        assert response.status_code == 400
        assert response.json()["error"] == "The custom code is not valid."

    async def test_shorten_empty_body(self, client):
        response = await client.post("/shorten")

        assert response.status_code == 400
        assert response.json()["error"] == "A valid web address is required."

    async def test_shorten_malformed_body(self, client):
        response = await client.post(
            "/shorten",
            content="{not json",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "The request body could not be read."

    async def test_shorten_non_object_body(self, client):
        response = await client.post("/shorten", json=["https://example.com"])

        assert response.status_code == 400
        assert response.json()["error"] == "The request body could not be read."

    async def test_shorten_form_encoded(self, client, clock, sample_urls):
        response = await client.post(
            "/shorten",
            data={"url": sample_urls[1], "customCode": "form", "expiryMinutes": "5"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["shortCode"] == "form"
        # Form values are strings, so the default validity applies
        assert data["validUntil"] == clock.now_ms() + 3_600_000

        resolved = await client.get("/url/form")
        assert resolved.json()["originalLink"] == sample_urls[1]

    async def test_shorten_form_encoded_invalid_url(self, client):
        response = await client.post("/shorten", data={"url": "not-a-url"})

        assert response.status_code == 400
        assert response.json()["error"] == "A valid web address is required."

    async def test_shorten_persists(self, client, data_file, sample_urls):
        response = await client.post("/shorten", json={"url": sample_urls[2], "customCode": "saved"})

        assert response.status_code == 200
        assert json.loads(data_file.read_text())["saved"]["originalLink"] == sample_urls[2]


@pytest.mark.asyncio
class TestResolveEndpoints:
    """Test GET /url/{code} and GET /s/{code}."""

    async def test_resolve(self, client, sample_urls):
        create = await client.post("/shorten", json={"url": sample_urls[0]})
        short_code = create.json()["shortCode"]

        response = await client.get(f"/url/{short_code}")

        assert response.status_code == 200
        data = response.json()
        assert data["originalLink"] == sample_urls[0]
        assert data["validUntil"] == create.json()["validUntil"]
        assert data["LogId"]

    async def test_resolve_not_found(self, client):
        response = await client.get("/url/nonexistent")

        assert response.status_code == 404
        assert response.json()["error"] == "Short link not found."

    async def test_resolve_expired(self, client, clock):
        await client.post("/shorten", json={"url": "https://example.com", "customCode": "abc", "expiryMinutes": 1})

        immediate = await client.get("/url/abc")
        assert immediate.status_code == 200
        assert immediate.json()["originalLink"] == "https://example.com"

        clock.advance(seconds=61)
        response = await client.get("/url/abc")

        assert response.status_code == 410
        assert response.json()["error"] == "This short link has expired."

    async def test_redirect(self, client, sample_urls):
        create = await client.post("/shorten", json={"url": sample_urls[1]})
        short_code = create.json()["shortCode"]

        response = await client.get(f"/s/{short_code}", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == sample_urls[1]

    async def test_redirect_not_found(self, client):
        response = await client.get("/s/nonexistent", follow_redirects=False)

        assert response.status_code == 404
        assert "location" not in response.headers
        assert response.json()["error"] == "Short link not found."

    async def test_redirect_expired(self, client, clock):
        await client.post("/shorten", json={"url": "https://example.com", "customCode": "gone", "expiryMinutes": 1})
        clock.advance(minutes=2)

        response = await client.get("/s/gone", follow_redirects=False)

        assert response.status_code == 410
        assert "location" not in response.headers
        assert response.json()["error"] == "This short link has expired."


@pytest.mark.asyncio
class TestListAndHealth:
    """Test GET /urls and GET /health."""

    async def test_list_urls(self, client, clock, sample_urls):
        for url in sample_urls:
            await client.post("/shorten", json={"url": url, "expiryMinutes": 1})
        await client.post("/shorten", json={"url": sample_urls[0], "customCode": "long", "expiryMinutes": 600})
        clock.advance(minutes=5)

        response = await client.get("/urls")

        assert response.status_code == 200
        data = response.json()
        assert data["LogId"]
        assert len(data["urls"]) == 4
        for item in data["urls"]:
            assert set(item) == {"shortCode", "originalLink", "createdTimestamp", "validUntil", "expired"}
            assert item["expired"] == (item["shortCode"] != "long")

    async def test_list_urls_empty(self, client):
        response = await client.get("/urls")

        assert response.status_code == 200
        assert response.json()["urls"] == []

    async def test_health_check(self, client, clock):
        await client.post("/shorten", json={"url": "https://example.com", "expiryMinutes": 1})
        await client.post("/shorten", json={"url": "https://example.org"})
        clock.advance(minutes=2)

        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert (data["total"], data["active"], data["expired"]) == (2, 1, 1)


@pytest.mark.asyncio
class TestCorrelation:
    """Test LogId propagation and CORS."""

    async def test_incoming_log_id_is_reused(self, client):
        response = await client.get("/url/nonexistent", headers={"X-Log-Id": "trace-123"})

        assert response.headers["x-log-id"] == "trace-123"
        assert response.json()["LogId"] == "trace-123"

    async def test_each_request_gets_its_own_log_id(self, client):
        first = await client.get("/urls")
        second = await client.get("/urls")

        assert first.json()["LogId"] != second.json()["LogId"]

    async def test_redirect_carries_log_id_header(self, client):
        await client.post("/shorten", json={"url": "https://example.com", "customCode": "hdr"})

        response = await client.get("/s/hdr", follow_redirects=False)

        assert response.status_code == 302
        assert len(response.headers["x-log-id"]) == 8

    async def test_cors_headers(self, client):
        response = await client.get("/urls", headers={"Origin": "http://frontend.example"})

        assert response.headers["access-control-allow-origin"] == "*"
