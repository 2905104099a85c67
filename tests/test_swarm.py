"""End-to-end tests of the concierge surface against a scripted backend."""

import asyncio
import base64

import pytest

from conftest import FakeInferenceClient, make_log, web_chunk

from lifesync.context.compactor import HistoryOrder
from lifesync.errors import TransportError
from lifesync.llm.gemini_client import GenerationResult, InlineImage, ResponseFormat, ToolDirective
from lifesync.models import AgentPersona, Mood, UserProfile
from lifesync.swarm import DEFAULT_QUOTE, ConciergeSwarm


def make_swarm(client, test_settings, **kwargs):
    return ConciergeSwarm(client=client, config=test_settings, **kwargs)


# ============================================================================
# process_request
# ============================================================================

def test_pizza_question_routes_to_nutritionist(test_settings, logs, profile):
    client = FakeInferenceClient([
        "Nutritionist",
        '```nutrition\n{"item":"Pepperoni Pizza (2 slices)","calories":560}\n```\n'
        "That's about a quarter of your daily intake.",
    ])
    swarm = make_swarm(client, test_settings)

    response = asyncio.run(
        swarm.process_request("How many calories in 2 slices of pepperoni pizza?", logs, profile)
    )

    assert response.agent == AgentPersona.NUTRITIONIST
    assert response.nutrition.item == "Pepperoni Pizza (2 slices)"
    assert response.nutrition.calories == 560
    assert "nutrition" not in response.text
    assert response.text == "That's about a quarter of your daily intake."
    assert len(client.calls) == 2


def test_router_and_persona_use_configured_models(test_settings, logs, profile):
    test_settings.ROUTER_MODEL_NAME = "router-lite"
    client = FakeInferenceClient(["Trainer", "Zone 2 today."])
    swarm = make_swarm(client, test_settings)

    asyncio.run(swarm.process_request("Plan a run", logs, profile))

    assert client.calls[0]["model"] == "router-lite"
    assert client.calls[1]["model"] == test_settings.GEMINI_MODEL_NAME


def test_uncertain_classifier_defaults_to_wellness_coach(test_settings, logs, profile):
    client = FakeInferenceClient(["I am not certain", "Let's take a short walk."])
    swarm = make_swarm(client, test_settings)

    response = asyncio.run(swarm.process_request("Tell me something nice", logs, profile))

    assert response.agent == AgentPersona.WELLNESS_COACH
    assert client.calls[1]["tools"] == [ToolDirective.SEARCH_GROUNDING]


def test_yoga_video_request_returns_video_link(test_settings, logs, profile):
    client = FakeInferenceClient([
        "WellnessCoach",
        GenerationResult(
            text="Here is a gentle yoga flow.",
            grounding_chunks=[
                web_chunk("https://www.youtube.com/watch?v=stress-yoga", "Yoga for Stress Relief"),
                web_chunk("https://health.example/stress", "Managing stress"),
            ],
        ),
    ])
    swarm = make_swarm(client, test_settings)

    response = asyncio.run(swarm.process_request("find me a yoga video for stress", logs, profile))

    assert response.agent == AgentPersona.WELLNESS_COACH
    assert any("youtube.com" in link.url for link in response.links)
    assert client.calls[1]["tools"] == [ToolDirective.SEARCH_GROUNDING]


def test_history_window_limits_prompt_context(test_settings, profile):
    test_settings.HISTORY_WINDOW = 2
    history = [make_log(i) for i in range(1, 6)]
    client = FakeInferenceClient(["Trainer", "ok"])
    swarm = make_swarm(client, test_settings)

    asyncio.run(swarm.process_request("How is my heart rate?", history, profile))

    instruction = client.calls[1]["system_instruction"]
    assert "2024-05-04" in instruction and "2024-05-05" in instruction
    assert "2024-05-03" not in instruction


def test_newest_first_history_uses_most_recent_entries(test_settings, profile):
    test_settings.HISTORY_WINDOW = 2
    history = [make_log(i) for i in range(5, 0, -1)]
    client = FakeInferenceClient(["Trainer", "ok"])
    swarm = make_swarm(client, test_settings, history_order=HistoryOrder.NEWEST_FIRST)

    asyncio.run(swarm.process_request("How is my heart rate?", history, profile))

    instruction = client.calls[1]["system_instruction"]
    assert "2024-05-04" in instruction and "2024-05-05" in instruction
    assert "2024-05-01" not in instruction


def test_empty_history_is_accepted(test_settings, profile):
    client = FakeInferenceClient(["Trainer", "Start with 20 minutes."])
    swarm = make_swarm(client, test_settings)

    response = asyncio.run(swarm.process_request("Where do I start?", [], profile))

    assert response.text == "Start with 20 minutes."
    assert client.calls[1]["system_instruction"].endswith("Recent History: ")


def test_classification_failure_propagates_without_persona_call(test_settings, logs, profile):
    client = FakeInferenceClient([TransportError("unreachable")])
    swarm = make_swarm(client, test_settings)

    with pytest.raises(TransportError):
        asyncio.run(swarm.process_request("hi", logs, profile))
    assert len(client.calls) == 1


def test_persona_failure_propagates(test_settings, logs, profile):
    client = FakeInferenceClient(["Nutritionist", TransportError("500")])
    swarm = make_swarm(client, test_settings)

    with pytest.raises(TransportError):
        asyncio.run(swarm.process_request("Calories in an apple?", logs, profile))


# ============================================================================
# estimate_calories
# ============================================================================

def test_estimate_calories_decodes_structured_reply(test_settings):
    client = FakeInferenceClient(['{"calories":105,"details":"Estimated from average"}'])
    swarm = make_swarm(client, test_settings)

    estimate = asyncio.run(swarm.estimate_calories("1 medium banana"))

    assert estimate.calories == 105
    assert estimate.details == "Estimated from average"
    assert client.calls[0]["response_format"] == ResponseFormat.STRUCTURED_JSON
    assert '"1 medium banana"' in client.calls[0]["prompt"]


def test_estimate_calories_tolerates_markdown_fence(test_settings):
    client = FakeInferenceClient(['```json\n{"calories": 95, "details": "1 apple"}\n```'])
    estimate = asyncio.run(make_swarm(client, test_settings).estimate_calories("apple"))

    assert estimate.calories == 95


@pytest.mark.parametrize(
    "reply",
    ["not json at all", '{"details": "no number"}', '{"calories": "lots"}', "[105]", ""],
)
def test_estimate_calories_fails_closed(test_settings, reply):
    client = FakeInferenceClient([reply])
    estimate = asyncio.run(make_swarm(client, test_settings).estimate_calories("mystery stew"))

    assert estimate.calories == 0
    assert estimate.details == "Could not estimate"


def test_estimate_calories_transport_error_propagates(test_settings):
    client = FakeInferenceClient([TransportError("offline")])

    with pytest.raises(TransportError):
        asyncio.run(make_swarm(client, test_settings).estimate_calories("toast"))


# ============================================================================
# get_daily_content
# ============================================================================

def test_daily_content_picks_first_video(test_settings, profile):
    client = FakeInferenceClient([
        GenerationResult(
            text='"Take care of your body." - Jim Rohn',
            grounding_chunks=[
                web_chunk("https://quotes.example/rohn", "Jim Rohn quotes"),
                web_chunk("https://www.youtube.com/watch?v=first", "Morning Motivation"),
                web_chunk("https://www.youtube.com/watch?v=second", "Evening Motivation"),
            ],
        )
    ])
    swarm = make_swarm(client, test_settings)

    content = asyncio.run(swarm.get_daily_content(profile, Mood.LOW))

    assert content.video.title == "Morning Motivation"
    assert content.video.url == "https://www.youtube.com/watch?v=first"
    assert content.quote == '"Take care of your body." - Jim Rohn'
    assert client.calls[0]["tools"] == [ToolDirective.SEARCH_GROUNDING]
    assert "feels Low" in client.calls[0]["prompt"]
    assert "goal is Reduce stress" in client.calls[0]["prompt"]


def test_daily_content_without_goals_or_video(test_settings):
    client = FakeInferenceClient([GenerationResult(text="")])
    swarm = make_swarm(client, test_settings)

    content = asyncio.run(swarm.get_daily_content(UserProfile(name="Sam", age=20), "motivated"))

    assert content.video is None
    assert content.quote == DEFAULT_QUOTE
    assert "goal is wellness" in client.calls[0]["prompt"]


def test_daily_content_backend_failure_uses_default_quote(test_settings, profile):
    client = FakeInferenceClient([TransportError("offline")])
    swarm = make_swarm(client, test_settings)

    content = asyncio.run(swarm.get_daily_content(profile, "motivated"))

    assert content.video is None
    assert content.quote == DEFAULT_QUOTE


# ============================================================================
# generate_thumbnail
# ============================================================================

def test_thumbnail_returns_data_uri(test_settings):
    image = InlineImage(mime_type="image/png", data=b"\x89PNG")
    client = FakeInferenceClient([GenerationResult(inline_images=[image])])

    uri = asyncio.run(make_swarm(client, test_settings).generate_thumbnail())

    assert uri == "data:image/png;base64," + base64.b64encode(b"\x89PNG").decode("ascii")
    assert client.calls[0]["kind"] == "image"
    assert client.calls[0]["aspect_ratio"] == "16:9"
    assert client.calls[0]["model"] == test_settings.IMAGE_MODEL_NAME


def test_thumbnail_without_image_part_is_none(test_settings):
    client = FakeInferenceClient([GenerationResult(text="I can only describe it.")])
    assert asyncio.run(make_swarm(client, test_settings).generate_thumbnail()) is None


def test_thumbnail_backend_failure_is_none(test_settings):
    client = FakeInferenceClient([TransportError("quota")])
    assert asyncio.run(make_swarm(client, test_settings).generate_thumbnail()) is None


# ============================================================================
# Concurrency
# ============================================================================

def test_secondary_calls_can_run_concurrently(test_settings, profile):
    client = FakeInferenceClient([
        '{"calories": 105, "details": "banana"}',
        GenerationResult(text="Keep moving."),
    ])
    swarm = make_swarm(client, test_settings)

    async def run_both():
        return await asyncio.gather(
            swarm.estimate_calories("banana"),
            swarm.get_daily_content(profile, "motivated"),
        )

    estimate, content = asyncio.run(run_both())

    assert estimate.calories == 105
    assert content.quote == "Keep moving."
