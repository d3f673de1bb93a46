import json
from io import BytesIO

from fastapi.testclient import TestClient
from PIL import Image

from preisdetektiv.main import create_app
from preisdetektiv.services import relay
from preisdetektiv.services.errors import AiServiceError

BANANA_REPLY = json.dumps(
    {
        "productName": "Banane",
        "currentPrice": "0,25 €",
        "withoutEUPrice": "0,30 €",
        "priceIncrease": "20%",
        "explanation": "Bananen werden außerhalb der EU angebaut. Ohne Binnenmarkt "
        "kämen Zölle und zusätzliche Kontrollen an jeder Grenze hinzu.",
        "madeInEU": False,
    },
    ensure_ascii=False,
)


class DummyModelClient:
    def __init__(self, reply=BANANA_REPLY, error=None) -> None:
        self.reply = reply
        self.error = error
        self.calls = []

    def complete(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.reply


def _jpeg_bytes() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (8, 8), color="yellow").save(buffer, format="JPEG")
    return buffer.getvalue()


def _post_image(client: TestClient, data: bytes = None):
    payload = data if data is not None else _jpeg_bytes()
    return client.post(
        "/api/analyze",
        files={"image": ("banana.jpg", payload, "image/jpeg")},
    )


def test_analyze_returns_model_json_unchanged():
    model = DummyModelClient()
    client = TestClient(create_app(model))

    response = _post_image(client)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    assert response.content == BANANA_REPLY.encode("utf-8")
    body = response.json()
    assert "Banane" in body["productName"]
    assert body["madeInEU"] is False
    assert body["explanation"]
    assert len(model.calls) == 1


def test_analyze_sends_image_as_data_url():
    model = DummyModelClient()
    client = TestClient(create_app(model))

    _post_image(client)

    user_content = model.calls[0][1]["content"]
    image_part = [part for part in user_content if part["type"] == "image_url"][0]
    assert image_part["image_url"]["url"].startswith("data:image/jpeg;base64,")


def test_analyze_without_image_makes_no_model_call():
    model = DummyModelClient()
    client = TestClient(create_app(model))

    response = client.post("/api/analyze", data={"note": "no file"})

    assert response.status_code == 400
    assert response.json() == {"error": "No image provided"}
    assert model.calls == []


def test_analyze_with_empty_upload_is_client_error():
    model = DummyModelClient()
    client = TestClient(create_app(model))

    response = _post_image(client, data=b"")

    assert response.status_code == 400
    assert model.calls == []


def test_analyze_non_json_reply_is_generic_failure():
    model = DummyModelClient(reply="Das ist eine Banane.")
    client = TestClient(create_app(model))

    response = _post_image(client)

    assert response.status_code == 500
    assert response.json() == {"error": "Analysis failed"}
    assert len(model.calls) == 1


def test_analyze_schema_mismatch_is_generic_failure():
    model = DummyModelClient(reply='{"productName": "Banane"}')
    client = TestClient(create_app(model))

    response = _post_image(client)

    assert response.status_code == 500
    assert response.json() == {"error": "Analysis failed"}


def test_analyze_passes_through_when_validation_disabled(monkeypatch):
    monkeypatch.setattr(relay.settings, "VALIDATE_MODEL_OUTPUT", False)
    reply = '{"productName": "Banane"}'
    client = TestClient(create_app(DummyModelClient(reply=reply)))

    response = _post_image(client)

    assert response.status_code == 200
    assert response.text == reply


def test_analyze_model_error_does_not_leak_cause():
    error = AiServiceError(
        code="MODEL_CALL_FAILED",
        message="External model call failed.",
        details={"error": "Connection refused by api.example"},
    )
    client = TestClient(create_app(DummyModelClient(error=error)))

    response = _post_image(client)

    assert response.status_code == 500
    assert response.json() == {"error": "Analysis failed"}


def test_analyze_unexpected_exception_is_generic_failure():
    client = TestClient(create_app(DummyModelClient(error=RuntimeError("boom"))))

    response = _post_image(client)

    assert response.status_code == 500
    assert response.json() == {"error": "Analysis failed"}
    assert "boom" not in response.text


def test_health():
    client = TestClient(create_app(DummyModelClient()))
    assert client.get("/health").json() == {"status": "ok"}
    assert client.head("/health").status_code == 200
