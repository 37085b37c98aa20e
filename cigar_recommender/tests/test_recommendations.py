import json
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from cigar_recommender.app import app, get_llm_config, get_recommender_config
from cigar_recommender.llm.config import LLMConfig
from cigar_recommender.recommendations.config import RecommenderConfig

client = TestClient(app)

LLM_REPLY = {
    "recommendations": [
        {"name": "Serie V Melanio", "brand": "Oliva", "origin": "Nicaragua",
         "priceRange": "$$$", "strength": 6, "flavorNotes": ["dark chocolate", "leather"]},
        {"name": "Hemingway Short Story", "brand": "Arturo Fuente",
         "origin": "Dominican Republic", "priceRange": "$$", "strength": 4,
         "flavorNotes": ["almond", "cream"]},
        {"name": "Esplendidos", "brand": "Cohiba", "origin": "Cuba",
         "priceRange": "$$$$", "strength": 7, "flavorNotes": ["cedar"]},
    ]
}


@pytest.fixture(autouse=True)
def _configs():
    app.dependency_overrides[get_llm_config] = lambda: LLMConfig(api_key="test-key")
    app.dependency_overrides[get_recommender_config] = lambda: RecommenderConfig(fallback_on_error=False)
    yield
    app.dependency_overrides.clear()


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_index_page_is_served():
    resp = client.get("/")
    assert resp.status_code == 200
    assert 'id="searchForm"' in resp.text


@patch("cigar_recommender.llm.groq_client.Groq")
def test_recommend_returns_three_us_market_items(mock_groq_cls, groq_response):
    mock_groq_cls.return_value.chat.completions.create.return_value = groq_response(
        json.dumps(LLM_REPLY)
    )

    resp = client.post("/recommend", json={"cigar": "Padron 1926", "avoid": []})

    assert resp.status_code == 200
    recs = resp.json()["recommendations"]
    assert len(recs) == 3
    names = {r["name"] for r in recs}
    assert "Esplendidos" not in names
    assert {"Serie V Melanio", "Hemingway Short Story", "TBD"} == names
    oliva = next(r for r in recs if r["name"] == "Serie V Melanio")
    assert oliva["priceRange"] == "$$$"
    assert oliva["flavorNotes"] == ["dark chocolate", "leather"]
    assert "origin" not in oliva
    assert oliva["urls"][0]["label"] == "Famous Smoke"


@patch("cigar_recommender.llm.groq_client.Groq")
def test_recommend_sends_avoid_list_to_model(mock_groq_cls, groq_response):
    create = mock_groq_cls.return_value.chat.completions.create
    create.return_value = groq_response(json.dumps(LLM_REPLY))

    resp = client.post(
        "/recommend",
        json={"cigar": "Padron 1926", "avoid": ["Serie V Melanio", "", None]},
    )

    assert resp.status_code == 200
    system_prompt = create.call_args.kwargs["messages"][0]["content"]
    assert "AVOID items: Serie V Melanio." in system_prompt
    names = [r["name"] for r in resp.json()["recommendations"]]
    assert "Serie V Melanio" not in names


def test_recommend_rejects_blank_cigar():
    resp = client.post("/recommend", json={"cigar": "   ", "avoid": []})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid input"}


def test_recommend_rejects_non_string_cigar():
    resp = client.post("/recommend", json={"cigar": 42})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid input"}


def test_recommend_rejects_malformed_json():
    resp = client.post(
        "/recommend",
        content="{not json",
        headers={"content-type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid input"}


@patch("cigar_recommender.llm.groq_client.Groq")
def test_recommend_ignores_non_list_avoid(mock_groq_cls, groq_response):
    mock_groq_cls.return_value.chat.completions.create.return_value = groq_response("{}")

    resp = client.post("/recommend", json={"cigar": "Padron 1926", "avoid": "Serie V"})

    assert resp.status_code == 200
    assert len(resp.json()["recommendations"]) == 3


def test_recommend_wrong_method():
    resp = client.get("/recommend")
    assert resp.status_code == 405
    assert resp.json() == {"error": "Method not allowed"}


def test_recommend_missing_api_key():
    app.dependency_overrides[get_llm_config] = lambda: LLMConfig(api_key="")
    resp = client.post("/recommend", json={"cigar": "Padron 1926"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Server missing API key"}


@patch("cigar_recommender.llm.groq_client.Groq")
def test_recommend_upstream_failure(mock_groq_cls):
    mock_groq_cls.return_value.chat.completions.create.side_effect = Exception("API timeout")

    resp = client.post("/recommend", json={"cigar": "Padron 1926"})

    assert resp.status_code == 502
    assert "temporarily unavailable" in resp.json()["error"]


@patch("cigar_recommender.llm.groq_client.Groq")
def test_recommend_upstream_failure_with_fallback(mock_groq_cls):
    mock_groq_cls.return_value.chat.completions.create.side_effect = Exception("API timeout")
    app.dependency_overrides[get_recommender_config] = lambda: RecommenderConfig(fallback_on_error=True)

    resp = client.post("/recommend", json={"cigar": "Padron 1926"})

    assert resp.status_code == 200
    recs = resp.json()["recommendations"]
    assert len(recs) == 3
    assert all(r["name"] != "TBD" for r in recs)


@patch("cigar_recommender.app.get_recommendations", side_effect=RuntimeError("boom"))
def test_recommend_unexpected_error(mock_get):
    safe_client = TestClient(app, raise_server_exceptions=False)

    resp = safe_client.post("/recommend", json={"cigar": "Padron 1926"})

    assert resp.status_code == 500
    assert resp.json()["error"].startswith("Unexpected server error")
