from fastapi.testclient import TestClient

from Core import kekik_FastAPI


def test_health_and_room_lookup() -> None:
    with TestClient(kekik_FastAPI) as client:
        health = client.get("/api/v1/health")
        assert health.status_code == 200
        assert health.json() == {"success": True, "status": "healthy", "rooms": 0}

        missing = client.get("/api/v1/rooms/yokyok1")
        assert missing.status_code == 404
        assert missing.json()["success"] is False


def test_websocket_join_flow() -> None:
    with TestClient(kekik_FastAPI) as client:
        with client.websocket_connect("/ws") as host:
            host.send_json({"type": "create_room", "data": {"displayName": "Ali", "videoUrl": "v1"}})
            created = host.receive_json()
            assert created["type"] == "room_created"
            room_id = created["data"]

            assert host.receive_json()["type"] == "user_joined"
            assert host.receive_json()["type"] == "room_data_update"

            summary = client.get(f"/api/v1/rooms/{room_id}").json()
            assert summary["participant_count"] == 1
            assert summary["video_url"] == "v1"

            with client.websocket_connect("/ws") as guest:
                guest.send_json({"type": "join_request", "data": {"roomId": room_id, "displayName": "Veli"}})
                assert guest.receive_json()["type"] == "join_pending"

                request = host.receive_json()
                assert request["type"] == "new_join_request"
                assert host.receive_json()["type"] == "room_data_update"

                host.send_json({
                    "type": "approve_join",
                    "data": {"roomId": room_id, "requesterHandle": request["data"]["requesterHandle"]},
                })
                approved = guest.receive_json()
                assert approved["type"] == "join_approved"
                assert approved["data"]["videoUrl"] == "v1"
                assert len(approved["data"]["participants"]) == 2

                host.send_json({"type": "video_sync", "data": {"playing": True, "currentTime": 12.5}})
                assert guest.receive_json()["type"] == "user_joined"
                assert guest.receive_json()["type"] == "room_data_update"
                sync = guest.receive_json()
                assert sync == {"type": "video_sync", "data": {"playing": True, "currentTime": 12.5}}


def test_websocket_rejects_bad_json() -> None:
    with TestClient(kekik_FastAPI) as client:
        with client.websocket_connect("/ws") as ws:
            ws.send_text("{oops")
            reply = ws.receive_json()
            assert reply["type"] == "error_message"
