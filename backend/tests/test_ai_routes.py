"""
Tests for the Claude-backed routes: assist, recommendations and chatbot.

Claude is replaced by a scripted fake, so these tests exercise prompt
construction and the post-processing of model output, not the model.
"""

import logging
from types import SimpleNamespace

import httpx
import anthropic
import pytest
from fastapi import HTTPException

from backend.ai.client import get_client, reset_client
from backend.ai.flows import FALLBACK_ANSWER, PROVIDERS_ANSWER
from backend.config import Settings
from fakes import text_response, tool_response


def _api_error():
    return anthropic.APIConnectionError(
        request=httpx.Request("POST", "https://api.anthropic.com/v1/messages"),
    )


ASSIST_REQUEST = {
    "calculator_type": "Appliance Energy Cost",
    "parameters": {"wattage": "", "hours_per_day": "", "cost_per_kwh": "0.17"},
}


class TestMissingApiKey:
    """Without an API key in Settings every AI route reports the configuration error."""

    @pytest.fixture
    def settings(self):
        return Settings(anthropic_api_key=None, requests_per_minute=1000, ai_requests_per_minute=1000)

    def test_assist(self, client):
        response = client.post("/api/ai/assist", json=ASSIST_REQUEST)
        assert response.status_code == 500
        assert response.json()["detail"] == "ANTHROPIC_API_KEY not configured"

    def test_recommendations(self, client):
        response = client.post("/api/ai/recommendations", json={"past_activity": "Painted a room"})
        assert response.status_code == 500
        assert response.json()["detail"] == "ANTHROPIC_API_KEY not configured"

    def test_chatbot(self, client):
        response = client.post("/api/chatbot", json={"query": "Find me a plumber"})
        assert response.status_code == 500
        assert response.json()["detail"] == "ANTHROPIC_API_KEY not configured"

    def test_environment_ignored_after_startup(self, client, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-from-env")
        response = client.post("/api/chatbot", json={"query": "Find me a plumber"})
        assert response.status_code == 500
        assert response.json()["detail"] == "ANTHROPIC_API_KEY not configured"


class TestClientDependency:

    @staticmethod
    def _request(api_key):
        settings = Settings(anthropic_api_key=api_key)
        return SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(settings=settings)))

    def test_key_from_settings(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        reset_client()
        client = get_client(self._request("sk-from-settings"))
        assert client.api_key == "sk-from-settings"
        assert get_client(self._request("sk-from-settings")) is client
        reset_client()

    def test_new_key_builds_new_client(self):
        reset_client()
        first = get_client(self._request("sk-one"))
        second = get_client(self._request("sk-two"))
        assert second is not first
        assert second.api_key == "sk-two"
        reset_client()

    def test_missing_key(self):
        with pytest.raises(HTTPException) as exc_info:
            get_client(self._request(None))
        assert exc_info.value.status_code == 500
        assert exc_info.value.detail == "ANTHROPIC_API_KEY not configured"


class TestAssist:

    def test_suggestions_limited_to_form_fields(self, client, use_fake):
        use_fake(text_response(
            '```json\n'
            '{"auto_calculated_values": {"hours_per_day": 24, "colour": "blue"},'
            ' "hints_and_next_steps": "Check the label for the wattage."}\n'
            '```'
        ))
        response = client.post("/api/ai/assist", json=ASSIST_REQUEST)
        assert response.status_code == 200
        data = response.json()
        assert data["auto_calculated_values"] == {"hours_per_day": 24}
        assert data["hints_and_next_steps"] == "Check the label for the wattage."

    def test_prompt_lists_filled_and_blank(self, client, use_fake, settings):
        fake = use_fake(text_response("{}"))
        client.post("/api/ai/assist", json=ASSIST_REQUEST)

        call = fake.messages.calls[0]
        assert call["model"] == settings.ai_model
        prompt = call["messages"][-1]["content"]
        assert prompt.startswith("<calculator_input>")
        assert "Unit system: imperial" in prompt
        assert "  - cost_per_kwh: 0.17" in prompt
        assert "  - wattage" in prompt

    def test_zero_and_false_count_as_blank(self, client, use_fake):
        fake = use_fake(text_response("{}"))
        client.post("/api/ai/assist", json={
            "calculator_type": "Paint Coverage Calculator",
            "parameters": {"room_length": "12", "num_windows": 0, "include_ceiling": False, "coats": "0"},
        })
        prompt = fake.messages.calls[0]["messages"][-1]["content"]
        filled, blank = prompt.split("Left blank:")
        assert "  - room_length: 12" in filled
        assert "  - coats: 0" in filled
        assert "  - num_windows\n" in blank
        assert "  - include_ceiling\n" in blank

    def test_metric_units_passed_through(self, client, use_fake):
        fake = use_fake(text_response("{}"))
        client.post("/api/ai/assist", json=dict(ASSIST_REQUEST, units="metric"))
        assert "Unit system: metric" in fake.messages.calls[0]["messages"][-1]["content"]

    def test_empty_object_is_valid(self, client, use_fake):
        use_fake(text_response("{}"))
        response = client.post("/api/ai/assist", json=ASSIST_REQUEST)
        assert response.status_code == 200
        assert response.json() == {"auto_calculated_values": None, "hints_and_next_steps": None}

    def test_unparseable_output(self, client, use_fake):
        use_fake(text_response("I think about 8 hours a day."))
        response = client.post("/api/ai/assist", json=ASSIST_REQUEST)
        assert response.status_code == 502
        assert response.json()["detail"] == "Failed to get AI assistance."

    def test_provider_error(self, client, use_fake):
        use_fake(_api_error())
        response = client.post("/api/ai/assist", json=ASSIST_REQUEST)
        assert response.status_code == 502
        assert response.json()["detail"] == "Failed to get AI assistance."

    def test_calculator_type_required(self, client, use_fake):
        use_fake()
        response = client.post("/api/ai/assist", json={"calculator_type": "", "parameters": {}})
        assert response.status_code == 422


class TestRecommendations:

    def test_unknown_and_duplicate_names_dropped(self, client, use_fake):
        use_fake(text_response(
            '{"recommendations": ["Paint Coverage Calculator", "Warp Drive Calculator",'
            ' "Paint Coverage Calculator", "Flooring Calculator"]}'
        ))
        response = client.post("/api/ai/recommendations", json={"past_activity": "Painted the den"})
        assert response.status_code == 200
        data = response.json()
        assert data["recommendations"] == ["Paint Coverage Calculator", "Flooring Calculator"]
        assert [c["slug"] for c in data["calculators"]] == ["paint-coverage", "flooring-area"]

    def test_descriptor_matches_directory(self, client, use_fake):
        use_fake(text_response('{"recommendations": ["Paint Coverage Calculator"]}'))
        recommended = client.post(
            "/api/ai/recommendations", json={"past_activity": "Painted the den"},
        ).json()["calculators"][0]
        listed = client.get("/api/calculators", params={"q": "paint coverage"}).json()["calculators"][0]
        assert recommended == listed == {
            "slug": "paint-coverage",
            "name": "Paint Coverage Calculator",
            "description": "Calculate how many gallons of paint you need for your project.",
            "icon": "paintbrush",
            "category": "Home Improvement",
        }

    def test_prompt_wraps_activity(self, client, use_fake):
        fake = use_fake(text_response('{"recommendations": []}'))
        client.post("/api/ai/recommendations", json={"past_activity": "Replaced a furnace"})

        call = fake.messages.calls[0]
        assert "Solar Savings Calculator" in call["system"]
        assert call["messages"][0]["content"] == "<user_activity>\nReplaced a furnace\n</user_activity>"

    def test_empty_list(self, client, use_fake):
        use_fake(text_response('{"recommendations": []}'))
        response = client.post("/api/ai/recommendations", json={"past_activity": "Nothing yet"})
        assert response.json() == {"recommendations": [], "calculators": []}

    def test_unparseable_output(self, client, use_fake):
        use_fake(text_response("Try the paint one!"))
        response = client.post("/api/ai/recommendations", json={"past_activity": "Painted the den"})
        assert response.status_code == 502
        assert response.json()["detail"] == "Failed to get AI recommendations."

    def test_provider_error(self, client, use_fake):
        use_fake(_api_error())
        response = client.post("/api/ai/recommendations", json={"past_activity": "Painted the den"})
        assert response.status_code == 502
        assert response.json()["detail"] == "Failed to get AI recommendations."


class TestChatbot:

    def test_internal_link_kept(self, client, use_fake):
        use_fake(text_response(
            '{"answer": "Measure your walls first.", "link": "/calculators/paint-coverage"}'
        ))
        response = client.post("/api/chatbot", json={"query": "How much paint do I need?"})
        assert response.status_code == 200
        assert response.json() == {
            "answer": "Measure your walls first.",
            "link": "/calculators/paint-coverage",
            "providers": [],
        }

    def test_unknown_calculator_link_dropped(self, client, use_fake):
        use_fake(text_response('{"answer": "Try this.", "link": "/calculators/warp-drive"}'))
        response = client.post("/api/chatbot", json={"query": "How fast is warp 9?"})
        assert response.json()["link"] is None

    def test_external_link_kept(self, client, use_fake):
        link = "https://en.wikipedia.org/wiki/Drywall"
        use_fake(text_response(f'{{"answer": "Drywall is gypsum board.", "link": "{link}"}}'))
        response = client.post("/api/chatbot", json={"query": "What is drywall made of?"})
        assert response.json()["link"] == link

    def test_unparseable_output_falls_back(self, client, use_fake):
        use_fake(text_response("Sure thing!"))
        response = client.post("/api/chatbot", json={"query": "Hello"})
        assert response.status_code == 200
        assert response.json()["answer"] == FALLBACK_ANSWER
        assert response.json()["link"] is None

    def test_provider_lookup(self, client, use_fake):
        fake = use_fake(tool_response("plumber"))
        response = client.post("/api/chatbot", json={"query": "Can you find me a plumber nearby"})
        assert response.status_code == 200
        data = response.json()
        assert data["answer"] == PROVIDERS_ANSWER
        assert data["link"] == "https://www.google.com/maps/search/?api=1&query=plumber"
        assert [p["name"] for p in data["providers"]] == [
            "Pipe Masters Plumbing", "Reliable Rooter", "The Tidy Toilet",
        ]
        assert fake.messages.calls[0]["tools"][0]["name"] == "find_local_providers"

    def test_provider_lookup_keyword_fallback(self, client, use_fake):
        use_fake(tool_response("landscaper"))
        response = client.post("/api/chatbot", json={"query": "I need a landscaper"})
        data = response.json()
        assert data["link"] == "https://www.google.com/maps/search/?api=1&query=home+service"
        assert data["providers"] == []

    def test_provider_lookup_keyword_in_query_order(self, client, use_fake):
        use_fake(tool_response("hvac contractor"))
        response = client.post("/api/chatbot", json={"query": "Find an hvac contractor near me"})
        assert response.json()["link"] == "https://www.google.com/maps/search/?api=1&query=hvac"

    def test_provider_link_follows_user_query(self, client, use_fake):
        use_fake(tool_response("emergency pipe repair"))
        response = client.post(
            "/api/chatbot", json={"query": "I need a plumber for emergency pipe repair"},
        )
        data = response.json()
        assert data["link"] == "https://www.google.com/maps/search/?api=1&query=plumber"
        # The lookup itself runs on the tool's query, which names no known service
        assert data["providers"] == []

    def test_provider_keyword_must_be_whole_word(self, client, use_fake):
        use_fake(tool_response("plumber"))
        response = client.post("/api/chatbot", json={"query": "Any plumbers around?"})
        assert response.json()["link"] == "https://www.google.com/maps/search/?api=1&query=home+service"

    def test_provider_lookup_uses_user_location(self, client, use_fake, monkeypatch):
        lookups = []

        async def record(service, location):
            lookups.append((service, location))
            return []

        monkeypatch.setattr("backend.ai.flows.find_local_providers", record)
        use_fake(tool_response("electrician"))
        client.post("/api/chatbot", json={
            "query": "Find me an electrician", "user_location": "Austin, TX",
        })
        assert lookups == [("electrician", "Austin, TX")]

    def test_provider_lookup_default_location(self, client, use_fake, settings, caplog):
        use_fake(tool_response("painter"))
        with caplog.at_level(logging.INFO, logger="backend.services.places"):
            response = client.post("/api/chatbot", json={"query": "Find me a painter"})
        assert len(response.json()["providers"]) == 2
        assert f"Searching for 'painter' near '{settings.default_location}'" in caplog.messages

    def test_history_replayed(self, client, use_fake):
        fake = use_fake(text_response('{"answer": "About two gallons.", "link": null}'))
        history = [{"role": "model", "content": "Hi! How can I help you today?"}]
        for i in range(15):
            history.append({"role": "user", "content": f"question {i}"})
            history.append({"role": "model", "content": f"answer {i}"})
        history.append({"role": "user", "content": "And for the ceiling?"})

        client.post("/api/chatbot", json={"query": "And for the ceiling?", "history": history})

        messages = fake.messages.calls[0]["messages"]
        assert messages[0]["role"] == "user"
        assert len(messages) <= 21
        assert messages[-2] == {"role": "assistant", "content": "answer 14"}
        assert messages[-1]["content"] == "<user_input>\nAnd for the ceiling?\n</user_input>"

    def test_provider_error(self, client, use_fake):
        use_fake(_api_error())
        response = client.post("/api/chatbot", json={"query": "Find me a painter"})
        assert response.status_code == 502
        assert response.json()["detail"] == "Failed to get a chatbot response."

    def test_empty_query_rejected(self, client, use_fake):
        use_fake()
        response = client.post("/api/chatbot", json={"query": ""})
        assert response.status_code == 422
