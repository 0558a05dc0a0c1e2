from fastapi.testclient import TestClient

from src.main import app

client = TestClient(app)


def test_root_banner():
    """Smoke test for the plain-text banner."""
    response = client.get("/")
    assert response.status_code == 200
    assert response.text == "🤖 Telegram GitHub File Fetch Bot is running"


def test_health_check():
    """Smoke test for health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_router_integration():
    """Test that router endpoints are properly loaded and accessible."""
    assert client.get("/api/telegram/health").status_code == 200
    assert client.get("/api/telegram/status").status_code == 200


def test_status_endpoint_structure():
    response = client.get("/api/telegram/status")
    response_data = response.json()

    assert "sessions" in response_data
    assert "page_size" in response_data
    assert "debug" in response_data
