import json

import pytest

from giftai.config import Settings


def test_generate_returns_three_suggestions(client, fake_llm, criteria, suggestions_json):
    fake_llm.queue("gift_generate", suggestions_json)
    response = client.post("/api/generate-gift", json=criteria)
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 3
    assert all(item["shopping_links"] for item in data)
    assert fake_llm.call_names == ["gift_generate"]
    call = fake_llm.calls[0]
    assert call["sampling"].name == "generate"
    assert call["sampling"].temperature == 0.7
    assert "Budget: $50 (USD)" in call["prompt_template"]


def test_generate_uses_local_currency(client, fake_llm, criteria, suggestions_json):
    fake_llm.queue("gift_generate", suggestions_json)
    criteria.update(geography="SW1A 1AA", budget=40)
    response = client.post("/api/generate-gift", json=criteria)
    assert response.status_code == 200
    prompt = fake_llm.calls[0]["prompt_template"]
    assert "Budget: £40 (GBP)" in prompt
    assert "amazon.co.uk" in prompt


def test_generate_accepts_fenced_reply(client, fake_llm, criteria, suggestions_json):
    fake_llm.queue("gift_generate", f"```json\n{suggestions_json}\n```")
    response = client.post("/api/generate-gift", json=criteria)
    assert response.status_code == 200
    assert len(response.json()) == 3


@pytest.mark.parametrize("field", ["occasion", "age", "gender", "personality", "budget", "geography"])
def test_generate_missing_field_is_400(client, fake_llm, criteria, field):
    del criteria[field]
    response = client.post("/api/generate-gift", json=criteria)
    assert response.status_code == 400
    assert response.json() == {
        "error": "Missing required fields: occasion, age, gender, personality, budget, geography"
    }
    assert fake_llm.calls == []


def test_generate_blank_field_is_400(client, fake_llm, criteria):
    criteria["personality"] = "   "
    response = client.post("/api/generate-gift", json=criteria)
    assert response.status_code == 400
    assert fake_llm.calls == []


def test_generate_invalid_age_is_400(client, fake_llm, criteria):
    criteria["age"] = "abc"
    response = client.post("/api/generate-gift", json=criteria)
    assert response.status_code == 400
    assert "error" in response.json()
    assert fake_llm.calls == []


def test_generate_without_api_key_is_500(client, fake_llm, criteria):
    fake_llm.settings = Settings(_env_file=None, llm_api_key="")
    response = client.post("/api/generate-gift", json=criteria)
    assert response.status_code == 500
    assert response.json() == {"error": "Gemini API key not configured"}
    assert fake_llm.calls == []


@pytest.mark.parametrize("count", [2, 4])
def test_generate_wrong_count_is_500(client, fake_llm, criteria, suggestions, count):
    fake_llm.queue("gift_generate", json.dumps((suggestions * 2)[:count]))
    response = client.post("/api/generate-gift", json=criteria)
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate valid gift suggestions. Please try again."}


def test_generate_non_json_is_500(client, fake_llm, criteria):
    fake_llm.queue("gift_generate", "I think a nice scarf would work.")
    response = client.post("/api/generate-gift", json=criteria)
    assert response.status_code == 500
    assert response.json()["error"] == "Failed to generate valid gift suggestions. Please try again."


def test_generate_empty_reply_is_500(client, fake_llm, criteria):
    fake_llm.queue("gift_generate", "")
    response = client.post("/api/generate-gift", json=criteria)
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error. Please try again later."}


@pytest.mark.parametrize(
    "error,status,message",
    [
        (Exception("429 Resource has been exhausted (e.g. check quota)."), 429, "Rate limit exceeded. Please try again later."),
        (Exception("API key not valid"), 500, "Gemini API configuration error"),
        (Exception("blocked due to SAFETY"), 400, "Content filtered by safety settings. Please try different inputs."),
        (TimeoutError("read timed out"), 500, "Internal server error. Please try again later."),
    ],
)
def test_generate_upstream_errors(client, fake_llm, criteria, error, status, message):
    fake_llm.queue("gift_generate", error)
    response = client.post("/api/generate-gift", json=criteria)
    assert response.status_code == status
    assert response.json() == {"error": message}
