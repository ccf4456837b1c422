"""Tests for the HTTP handlers in codebeat/main.py."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from codebeat.core.config import Settings
from codebeat.core.errors import ProviderUpstreamError
from codebeat.db import session as storage
from codebeat.llms.router import ProviderRegistry, get_registry
from codebeat.main import app, post_beat_generate, post_lyrics_generate
from codebeat.schemas.request import BeatRequest, LyricsRequest

from conftest import FakeClient


@pytest.fixture
def client(temp_db, registry):
    app.dependency_overrides[get_registry] = lambda: registry
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


class TestMeta:
    def test_root(self, client):
        assert client.get("/").json()["health"] == "/api/health"

    def test_health(self, client):
        data = client.get("/api/health").json()
        assert data["status"] == "ok"
        assert data["database"] == "connected"
        assert data["providers"] == {"grok": "configured", "gemini": "configured"}

    def test_providers(self, client):
        data = client.get("/api/ai/providers").json()
        assert [p["id"] for p in data] == ["grok", "gemini"]
        assert [p["isDefault"] for p in data] == [True, False]
        assert all(p["available"] for p in data)


class TestTranslate:
    def test_translate_without_user(self, client, gemini):
        response = client.post(
            "/api/code/translate",
            json={"sourceCode": "print('x')", "sourceLanguage": "python", "targetLanguage": "javascript", "provider": "gemini"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["translatedCode"] == "console.log('x')"
        assert data["provider"] == "gemini"
        assert "id" not in data

    def test_translate_persists_for_user(self, client):
        response = client.post(
            "/api/code/translate",
            json={"sourceCode": "print(1)", "sourceLanguage": "python", "targetLanguage": "go", "userId": "u1"},
        )
        record_id = response.json()["id"]
        rows = client.get("/api/users/u1/translations").json()
        assert rows[0]["id"] == record_id
        assert rows[0]["translatedCode"] == "console.log('x')"

    def test_empty_source_is_400_and_provider_untouched(self, client, grok):
        response = client.post(
            "/api/code/translate",
            json={"sourceCode": "", "sourceLanguage": "python", "targetLanguage": "go"},
        )
        assert response.status_code == 400
        assert response.json() == {
            "kind": "validation_error",
            "message": "sourceCode: must not be empty",
            "field": "sourceCode",
            "constraint": "must not be empty",
        }
        assert grok.calls == []

    def test_missing_field_is_422(self, client):
        response = client.post("/api/code/translate", json={"sourceCode": "x"})
        assert response.status_code == 422


class TestBeat:
    @pytest.mark.parametrize("bpm, status", [(39, 400), (40, 200), (220, 200), (221, 400)])
    def test_bpm_bounds(self, client, bpm, status):
        response = client.post("/api/beat/generate", json={"genre": "trap", "bpm": bpm})
        assert response.status_code == status

    def test_beat_persists_with_prompt(self, client):
        response = client.post("/api/beat/generate", json={"genre": "trap", "bpm": 140, "userId": "u1"})
        generations = client.get("/api/users/u1/music-generations").json()
        assert generations[0]["id"] == response.json()["id"]
        assert generations[0]["prompt"] == "trap beat at 140 BPM"
        assert generations[0]["result"]["pattern"]["kick"][0] == 1


class TestErrors:
    def test_upstream_error_is_502(self, client, grok):
        grok.responses["assist"] = ProviderUpstreamError("grok", "Grok API unreachable")
        response = client.post("/api/ai/assist", json={"question": "why?"})
        assert response.status_code == 502
        assert response.json()["kind"] == "provider_upstream_error"

    def test_missing_credential_is_503(self, temp_db, grok):
        gemini = FakeClient("gemini", {"assist": "unused"}, settings_source=lambda: Settings())
        gemini.credential_field = "gemini_api_key"
        registry = ProviderRegistry({"grok": grok, "gemini": gemini}, default="grok")
        app.dependency_overrides[get_registry] = lambda: registry
        try:
            with TestClient(app) as c:
                response = c.post("/api/ai/assist", json={"question": "q", "context": "c", "provider": "gemini"})
        finally:
            app.dependency_overrides.clear()
        assert response.status_code == 503
        assert response.json() == {
            "kind": "provider_auth_error",
            "message": "gemini credential is not set",
            "provider": "gemini",
        }


class TestOtherCapabilities:
    def test_lyrics_analyze(self, client):
        response = client.post("/api/lyrics/analyze", json={"lyrics": "I left home"})
        assert response.json()["themes"] == ["home", "change"]

    def test_codebeat_convert_persists(self, client):
        response = client.post("/api/codebeat/convert", json={"code": "x = 1", "language": "python", "userId": "u9"})
        assert response.json()["music"] == "C4 E4 G4"
        generations = client.get("/api/users/u9/music-generations").json()
        assert generations[0]["type"] == "codebeat"
        assert generations[0]["prompt"] == "Convert python code to music"

    def test_chat(self, client):
        response = client.post(
            "/api/ai/chat",
            json={"messages": [{"role": "user", "content": "hi"}], "maxTokens": 32},
        )
        assert response.json()["message"] == "Hello!"

    def test_chat_invalid_role(self, client):
        response = client.post("/api/ai/chat", json={"messages": [{"role": "robot", "content": "hi"}]})
        assert response.status_code == 400
        assert response.json()["field"] == "messages[0].role"


class TestUsersAndProjects:
    def test_user_lifecycle(self, client):
        user = client.post("/api/users", json={"username": "ada", "email": "ada@example.com"}).json()
        assert client.get(f"/api/users/{user['id']}").json()["username"] == "ada"
        assert client.post("/api/users", json={"username": "ada", "email": "x@example.com"}).status_code == 409

    def test_unknown_user_404(self, client):
        assert client.get("/api/users/nope").status_code == 404

    def test_projects(self, client):
        user = client.post("/api/users", json={"username": "bob", "email": "bob@example.com"}).json()
        project = client.post("/api/projects", json={"userId": user["id"], "name": "Beats"}).json()
        listed = client.get(f"/api/users/{user['id']}/projects").json()
        assert listed == [project]

    def test_project_for_unknown_user_404(self, client):
        assert client.post("/api/projects", json={"userId": "nope", "name": "x"}).status_code == 404


@pytest.mark.asyncio
async def test_concurrent_generations_persist_independent_records(temp_db, registry):
    lyrics, beat = await asyncio.gather(
        post_lyrics_generate(LyricsRequest(prompt="rain", userId="u1", provider="grok"), registry=registry),
        post_beat_generate(BeatRequest(genre="lofi", bpm=80, userId="u1", provider="gemini"), registry=registry),
    )

    records = {r["type"]: r for r in storage.get_user_music_generations("u1")}
    assert set(records) == {"lyrics", "beat"}
    assert records["lyrics"]["id"] == lyrics.id
    assert records["beat"]["id"] == beat.id
    assert records["lyrics"]["result"]["lyrics"] == "City lights..."
    assert "pattern" not in records["lyrics"]["result"]
    assert records["beat"]["result"]["pattern"]["kick"][0] == 1
    assert "lyrics" not in records["beat"]["result"]
    assert records["lyrics"]["result"]["provider"] == "grok"
    assert records["beat"]["result"]["provider"] == "gemini"
