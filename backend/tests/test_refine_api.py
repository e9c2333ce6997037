import json

import pytest


@pytest.fixture(name="refine_body")
def refine_body_fixture(criteria, suggestions):
    return {
        "initialCriteria": criteria,
        "initialSuggestions": suggestions,
        "chatHistory": [
            {"role": "user", "content": "Can you make them cheaper?", "timestamp": "2026-01-01T10:00:00Z"},
            {"role": "assistant", "content": "Here are some cheaper ideas."},
            {"role": "user", "content": "Something more outdoorsy please"},
        ],
    }


def test_refine_returns_new_suggestions(client, fake_llm, refine_body, suggestions_json):
    fake_llm.queue("intent_classify", "REFINEMENT")
    fake_llm.queue("gift_refine", suggestions_json)
    response = client.post("/api/refine-gift", json=refine_body)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    assert len(response.json()) == 3
    assert fake_llm.call_names == ["intent_classify", "gift_refine"]
    prompt = fake_llm.calls[1]["prompt_template"]
    assert "**Your latest request**: Something more outdoorsy please" in prompt
    assert "You: Can you make them cheaper?\nMe: Here are some cheaper ideas." in prompt
    assert fake_llm.calls[1]["sampling"].name == "refine"


def test_refine_discussion_returns_text(client, fake_llm, refine_body):
    refine_body["chatHistory"][-1]["content"] = "Why did you pick the journal?"
    fake_llm.queue("intent_classify", "DISCUSSION")
    fake_llm.queue("gift_discussion", "The journal suits someone who loves *writing*.")
    response = client.post("/api/refine-gift", json=refine_body)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "The journal suits someone who loves *writing*."
    assert fake_llm.call_names == ["intent_classify", "gift_discussion"]
    assert 'User message: "Why did you pick the journal?"' in fake_llm.calls[0]["prompt_template"]


def test_refine_invalid_json_falls_back_to_discussion(client, fake_llm, refine_body):
    fake_llm.queue("intent_classify", "REFINEMENT")
    fake_llm.queue("gift_refine", "Sure! How about a tent, a hammock and a compass?")
    fake_llm.queue("gift_discussion", "Happy to help with outdoorsy ideas!")
    response = client.post("/api/refine-gift", json=refine_body)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "Happy to help with outdoorsy ideas!"
    assert fake_llm.call_names == ["intent_classify", "gift_refine", "gift_discussion"]


def test_refine_wrong_count_falls_back_to_discussion(client, fake_llm, refine_body, suggestions):
    fake_llm.queue("intent_classify", "REFINEMENT")
    fake_llm.queue("gift_refine", json.dumps(suggestions[:2]))
    fake_llm.queue("gift_discussion", "Let's talk it through.")
    response = client.post("/api/refine-gift", json=refine_body)
    assert response.status_code == 200
    assert response.text == "Let's talk it through."


def test_refine_intent_is_normalized(client, fake_llm, refine_body, suggestions_json):
    fake_llm.queue("intent_classify", " refinement.\n")
    fake_llm.queue("gift_refine", suggestions_json)
    response = client.post("/api/refine-gift", json=refine_body)
    assert response.status_code == 200
    assert len(response.json()) == 3


def test_refine_accepts_saved_suggestions_without_links(client, fake_llm, refine_body):
    refine_body["initialSuggestions"] = [{"name": "Leather Journal", "description": "A journal."}]
    fake_llm.queue("intent_classify", "DISCUSSION")
    fake_llm.queue("gift_discussion", "Sure.")
    response = client.post("/api/refine-gift", json=refine_body)
    assert response.status_code == 200


@pytest.mark.parametrize("field", ["initialCriteria", "initialSuggestions", "chatHistory"])
def test_refine_missing_field_is_400(client, fake_llm, refine_body, field):
    del refine_body[field]
    response = client.post("/api/refine-gift", json=refine_body)
    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields: initialCriteria, initialSuggestions, chatHistory"}
    assert fake_llm.calls == []


def test_refine_last_message_from_assistant_is_400(client, fake_llm, refine_body):
    refine_body["chatHistory"] = refine_body["chatHistory"][:2]
    response = client.post("/api/refine-gift", json=refine_body)
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid chat history format"}
    assert fake_llm.calls == []


def test_refine_empty_history_is_400(client, fake_llm, refine_body):
    refine_body["chatHistory"] = []
    response = client.post("/api/refine-gift", json=refine_body)
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid chat history format"}


def test_refine_unknown_role_is_400(client, fake_llm, refine_body):
    refine_body["chatHistory"][-1]["role"] = "system"
    response = client.post("/api/refine-gift", json=refine_body)
    assert response.status_code == 400


def test_refine_incomplete_criteria_is_400(client, fake_llm, refine_body):
    del refine_body["initialCriteria"]["budget"]
    response = client.post("/api/refine-gift", json=refine_body)
    assert response.status_code == 400
    assert "budget" in response.json()["error"]
    assert fake_llm.calls == []


def test_refine_rate_limit_is_429(client, fake_llm, refine_body):
    fake_llm.queue("intent_classify", Exception("quota exceeded"))
    response = client.post("/api/refine-gift", json=refine_body)
    assert response.status_code == 429
    assert response.json() == {"error": "Rate limit exceeded. Please try again later."}


def test_refine_discussion_failure_is_mapped(client, fake_llm, refine_body):
    fake_llm.queue("intent_classify", "DISCUSSION")
    fake_llm.queue("gift_discussion", Exception("connection dropped"))
    response = client.post("/api/refine-gift", json=refine_body)
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error. Please try again later."}
