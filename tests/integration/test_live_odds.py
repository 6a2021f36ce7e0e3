# tests/integration/test_live_odds.py
import pytest

pytestmark = pytest.mark.integration


def test_live_feed_pushes_odds_until_disconnect(client, app):
    feed = app.state.odds_feed

    with client.websocket_connect("/api/sportsbook/live") as websocket:
        message = websocket.receive_json()
        assert message == {"event": "liveOdds", "data": feed.get_odds()}
        # Sigue llegando en cada intervalo
        assert websocket.receive_json() == message
        assert feed.listener_count == 1

    assert feed.listener_count == 0
    assert app.state.scheduler.get_jobs() == []


def test_each_connection_has_its_own_job(client, app):
    feed = app.state.odds_feed

    with client.websocket_connect("/api/sportsbook/live") as first:
        first.receive_json()
        with client.websocket_connect("/api/sportsbook/live") as second:
            second.receive_json()
            assert feed.listener_count == 2
        assert feed.listener_count == 1

    assert feed.listener_count == 0


def test_binary_frames_are_ignored(client, app):
    feed = app.state.odds_feed

    with client.websocket_connect("/api/sportsbook/live") as websocket:
        websocket.receive_json()
        websocket.send_bytes(b"\x00\x01")
        websocket.send_text("hola")
        message = websocket.receive_json()
        assert message == {"event": "liveOdds", "data": feed.get_odds()}
        assert feed.listener_count == 1

    assert feed.listener_count == 0
