import pytest
from fastapi.testclient import TestClient

from healthconnect.main import app
from healthconnect.routes.doctors import router as doctors_router
from healthconnect.routes.doctors.search import search_doctors


@pytest.fixture
def live_client(directory, monkeypatch):
    async def fetch(query):
        return search_doctors(directory, query)

    monkeypatch.setattr(doctors_router, "_fetch_from_store", fetch)
    return TestClient(app)


def settled(websocket):
    """Skip the loading snapshot and return the finished one."""
    state = websocket.receive_json()
    assert state["loading"] is True
    state = websocket.receive_json()
    assert state["loading"] is False
    return state


def test_live_directory_pushes_initial_and_updated_results(live_client):
    with live_client.websocket_connect("/doctors/live") as websocket:
        state = settled(websocket)
        assert len(state["doctors"]) == 6

        websocket.send_json({"search_text": "cardio"})
        state = settled(websocket)
        assert state["query"]["search_text"] == "cardio"
        assert [d["name"] for d in state["doctors"]] == ["Dr. Sarah Johnson"]

        websocket.send_json({"region": "north", "sort": "fee-high"})
        state = settled(websocket)
        assert [d["consultation_fee"] for d in state["doctors"]] == [90, 75]


def test_live_directory_rejects_bad_messages(live_client):
    with live_client.websocket_connect("/doctors/live") as websocket:
        settled(websocket)

        websocket.send_text("not json")
        message = websocket.receive_json()
        assert message["type"] == "error"


def test_live_directory_survives_binary_frames(live_client):
    with live_client.websocket_connect("/doctors/live") as websocket:
        settled(websocket)

        websocket.send_bytes(b'{"search_text": "cardio"}')
        assert websocket.receive_json()["type"] == "error"

        # the connection is still usable afterwards
        websocket.send_json({"search_text": "cardio"})
        state = settled(websocket)
        assert [d["name"] for d in state["doctors"]] == ["Dr. Sarah Johnson"]
