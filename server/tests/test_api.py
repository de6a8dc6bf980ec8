"""HTTP-level tests for the interpretation and health routes."""
import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from config.settings import ParserConfig
from core.dependencies import get_parser_config

NOW = "2026-10-21T10:00:00"


@pytest.fixture
def client():
    app = create_app()
    app.dependency_overrides[get_parser_config] = lambda: ParserConfig(api_key=None)
    with TestClient(app) as test_client:
        yield test_client


class TestInterpretRoute:
    def test_reminder(self, client):
        response = client.post("/interpret", json={
            "utterance": "remind me to call mom tomorrow at 6pm",
            "now": NOW,
        })
        assert response.status_code == 200
        body = response.json()
        assert body["intent"] == "set_reminder"
        assert body["title"] == "call mom"
        assert body["date"] == "2026-10-22"
        assert body["time"] == "18:00"
        assert body["reply"]

    def test_expense_has_only_its_fields(self, client):
        body = client.post("/interpret", json={"utterance": "spent 450 on groceries", "now": NOW}).json()
        assert body["intent"] == "log_expense"
        assert body["amount"] == 450
        assert body["category"] is None
        assert "time" not in body
        assert "priority" not in body

    def test_memory_type_uses_camel_case_key(self, client):
        body = client.post("/interpret", json={
            "utterance": "remember that my goal is to run a marathon",
            "now": NOW,
        }).json()
        assert body["intent"] == "save_memory"
        assert "memoryType" in body
        assert "memory_type" not in body

    def test_recent_turns_accepted(self, client):
        response = client.post("/interpret", json={
            "utterance": "hello",
            "recent_turns": [{"role": "user", "text": "hi"}, {"role": "assistant", "text": "Hello!"}],
        })
        assert response.status_code == 200
        assert response.json()["intent"] == "greeting"

    def test_missing_utterance_rejected(self, client):
        assert client.post("/interpret", json={}).status_code == 422


class TestChatAndSummaryRoutes:
    def test_chat(self, client):
        response = client.post("/chat", json={"utterance": "hello"})
        assert response.status_code == 200
        assert response.json()["reply"] == "Hi there! How can I help you today?"

    def test_daily_summary(self, client):
        response = client.post("/summary/daily", json={"day": "2026-10-21", "tasks_completed": 2})
        assert response.status_code == 200
        assert "You completed 2 tasks today." in response.json()["summary"]

    def test_weekly_summary(self, client):
        response = client.post("/summary/weekly", json={"total_tasks": 4, "tasks_completed": 1})
        assert "You completed 1 of 4 tasks this week." in response.json()["summary"]

    def test_negative_counts_rejected(self, client):
        assert client.post("/summary/daily", json={"tasks_completed": -1}).status_code == 422


class TestHealthRoutes:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_parser_health_without_credential(self, client):
        body = client.get("/health/parser").json()
        assert body["available"] is False
        assert body["status"] == "degraded"
        assert body["model"] == "gemini-2.0-flash"
        assert body["failures"] == []
