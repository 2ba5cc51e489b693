"""
API tests for the chat helper with a fake chat service; unit tests for Gemini content mapping.
"""
import pytest

from quizora.config import settings
from quizora.llm import get_chat_service
from quizora.llm.gemini_impl import GeminiChatService, to_gemini_contents
from quizora.schemas.chat import ChatTurn


class FakeChatService:
    def __init__(self, reply: str = "Go to Dashboard and click 'Start Quiz'.", error: Exception | None = None):
        self._reply = reply
        self._error = error
        self.calls = []

    def reply(self, message, history):
        self.calls.append((message, history))
        if self._error:
            raise self._error
        return self._reply


def _use(client, service):
    client.app.dependency_overrides[get_chat_service] = lambda: service
    return service


def test_chat_reply(client):
    service = _use(client, FakeChatService())
    r = client.post(
        "/api/chat",
        json={"message": "How do I start a quiz?", "history": [{"role": "assistant", "content": "Hi!"}]},
    )
    assert r.status_code == 200
    assert r.json() == {"success": True, "reply": "Go to Dashboard and click 'Start Quiz'."}
    message, history = service.calls[0]
    assert message == "How do I start a quiz?"
    assert history[0].text == "Hi!"


def test_chat_requires_message(client):
    service = _use(client, FakeChatService())
    for body in ({}, {"message": ""}, {"message": "   "}):
        r = client.post("/api/chat", json=body)
        assert r.status_code == 400
        assert r.json()["message"] == "Message is required"
    assert service.calls == []


def test_chat_downstream_failure_is_generic(client):
    _use(client, FakeChatService(error=RuntimeError("quota exceeded for key abc")))
    r = client.post("/api/chat", json={"message": "hello"})
    assert r.status_code == 500
    assert r.json()["message"] == "Chatbot service is currently unavailable"
    assert "quota" not in r.json()["message"]


def test_chat_without_api_key_is_unavailable(client):
    _use(client, GeminiChatService(api_key=""))
    r = client.post("/api/chat", json={"message": "hello"})
    assert r.status_code == 500


def test_contents_keep_last_five_turns_and_map_roles():
    history = [ChatTurn(role="user", content=f"u{i}") for i in range(4)]
    history += [
        ChatTurn(role="assistant", content="a4"),
        ChatTurn(role="model", message="m5"),
        ChatTurn(role="system", content="s6"),
    ]
    contents = to_gemini_contents("now?", history, max_turns=5)
    assert [c.role for c in contents] == ["user", "user", "model", "model", "user", "user"]
    assert [c.parts[0].text for c in contents] == ["u2", "u3", "a4", "m5", "s6", "now?"]


def test_contents_without_history():
    contents = to_gemini_contents("hi", [], max_turns=5)
    assert len(contents) == 1
    assert contents[0].role == "user"


@pytest.fixture
def fresh_chat_service():
    get_chat_service.cache_clear()
    yield
    get_chat_service.cache_clear()


def test_client_failure_reported_as_unavailable(client, fresh_chat_service, monkeypatch):
    from google import genai

    def broken_client(**kwargs):
        raise ValueError("bad client options")

    monkeypatch.setattr(settings, "gemini_api_key", "test-key")
    monkeypatch.setattr(genai, "Client", broken_client)
    r = client.post("/api/chat", json={"message": "hello"})
    assert r.status_code == 500
    assert r.json()["message"] == "Chatbot service is currently unavailable"


def test_service_construction_does_not_build_client(monkeypatch):
    from google import genai

    def broken_client(**kwargs):
        raise AssertionError("client built too early")

    monkeypatch.setattr(genai, "Client", broken_client)
    service = GeminiChatService(api_key="test-key", model_name="gemini-test")
    assert service.model_name == "gemini-test"
