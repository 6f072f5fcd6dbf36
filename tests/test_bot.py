import asyncio
from types import SimpleNamespace

import pytest

import bot
from config import GEO_URL, WEATHER_URL, FORECAST_URL
from pipeline import WeatherPipeline


class FakeMessage:
    def __init__(self, text=""):
        self.text = text
        self.replies = []

    async def reply_text(self, text):
        self.replies.append(text)


def make_update(text="", chat_id=42):
    return SimpleNamespace(
        effective_chat=SimpleNamespace(id=chat_id),
        message=FakeMessage(text),
    )


@pytest.fixture(autouse=True)
def fresh_pipeline(monkeypatch):
    monkeypatch.setattr(bot, "pipeline", WeatherPipeline(api_key="test-key"))
    monkeypatch.setattr(bot, "OWNER_CHAT_ID", 0)


@pytest.fixture
def mock_api(requests_mock, london_geo, current_payload, forecast_payload):
    requests_mock.get(GEO_URL, json=london_geo)
    requests_mock.get(WEATHER_URL, json=current_payload)
    requests_mock.get(FORECAST_URL, json=forecast_payload)
    return requests_mock


def test_cmd_weather_without_args(requests_mock):
    update = make_update()
    asyncio.run(bot.cmd_weather(update, SimpleNamespace(args=[])))
    assert update.message.replies == ["Usage: /weather <city>"]
    assert requests_mock.call_count == 0


def test_cmd_weather_replies_with_card(mock_api):
    update = make_update()
    asyncio.run(bot.cmd_weather(update, SimpleNamespace(args=["London"])))

    (reply,) = update.message.replies
    assert reply.startswith("🌦️ London")
    assert "5-Day Temperature Forecast" in reply
    assert mock_api.request_history[0].qs["q"] == ["london"]


def test_cmd_weather_joins_multiword_city(mock_api):
    update = make_update()
    asyncio.run(bot.cmd_weather(update, SimpleNamespace(args=["New", "York"])))
    assert mock_api.request_history[0].qs["q"] == ["new york"]


def test_plain_text_not_found(requests_mock):
    requests_mock.get(GEO_URL, json=[])
    update = make_update("Atlantis")
    asyncio.run(bot.handle_message(update, SimpleNamespace(args=[])))
    assert update.message.replies == ["City not found!"]


def test_owner_only_blocks_other_chats(monkeypatch, requests_mock):
    monkeypatch.setattr(bot, "OWNER_CHAT_ID", 7)
    update = make_update(chat_id=42)
    asyncio.run(bot.cmd_weather(update, SimpleNamespace(args=["London"])))
    assert update.message.replies == ["Not authorized."]
    assert requests_mock.call_count == 0


def test_owner_only_allows_owner(monkeypatch):
    monkeypatch.setattr(bot, "OWNER_CHAT_ID", 42)
    update = make_update(chat_id=42)
    asyncio.run(bot.cmd_help(update, SimpleNamespace(args=[])))
    assert "/weather <city>" in update.message.replies[0]
