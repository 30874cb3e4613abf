"""
Tests unitaires pour les routes /health et /api/providers.
"""


def test_health_reports_configured_providers(make_client, fake_provider):
    client = make_client({"gemini": fake_provider("gemini")})

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "providers": {"openai": False, "gemini": True}
    }


def test_health_does_not_require_session(make_client):
    response = make_client({}).get("/health")
    assert response.status_code == 200


def test_providers_list(make_client):
    response = make_client({}).get("/api/providers")

    assert response.status_code == 200
    data = response.json()
    assert [p["key"] for p in data] == ["gemini", "openai"]

    openai_entry = next(p for p in data if p["key"] == "openai")
    assert openai_entry["name"] == "OpenAI"
    assert openai_entry["configured"] is True
    assert openai_entry["default_model"] == "gpt-4o-mini"
    assert openai_entry["models"] == ["gpt-4o-mini"]
    assert "api_key" not in openai_entry
