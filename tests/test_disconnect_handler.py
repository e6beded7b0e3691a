import pytest

from Public.Session.Libs import DisconnectHandler, DisconnectOutcome, JoinWorkflow
from Public.Session.Models import as_participant

from conftest import HOST, GUEST, OTHER


async def _room(registry, transport):
    room = registry.create_room(HOST, "Host - admin", "v1")
    transport.join_group(room.room_id, HOST)
    workflow = JoinWorkflow(registry, transport)
    await workflow.request_join(GUEST, room.room_id, "Guest")
    await workflow.approve(HOST, room.room_id, GUEST)
    await workflow.request_join(OTHER, room.room_id, "Waiting")
    transport.clear()
    return room


@pytest.mark.anyio
async def test_host_disconnect_closes_room(registry, transport) -> None:
    room = await _room(registry, transport)

    outcome = await DisconnectHandler(registry, transport).handle_disconnect(HOST)

    assert outcome is DisconnectOutcome.ROOM_CLOSED
    assert transport.names_for(GUEST) == ["room_closed"]
    assert transport.names_for(OTHER) == ["join_rejected"]
    assert registry.get(room.room_id) is None
    for handle in (HOST, GUEST, OTHER):
        assert registry.find_by_handle(handle) is None
        assert registry.find_pending(handle) is None
    assert room.room_id not in transport.groups


@pytest.mark.anyio
async def test_participant_disconnect_updates_room(registry, transport) -> None:
    room = await _room(registry, transport)

    outcome = await DisconnectHandler(registry, transport).handle_disconnect(GUEST)

    assert outcome is DisconnectOutcome.PARTICIPANT_LEFT
    assert as_participant(GUEST) not in room.participants
    assert transport.payloads(HOST, "user_left") == [{"displayName": "Guest", "handle": GUEST}]
    assert transport.payloads(HOST, "room_data_update") == [room.data_update()]
    assert transport.names_for(GUEST) == []
    assert registry.get(room.room_id) is room


@pytest.mark.anyio
async def test_pending_disconnect_only_updates_host(registry, transport) -> None:
    room = await _room(registry, transport)

    outcome = await DisconnectHandler(registry, transport).handle_disconnect(OTHER)

    assert outcome is DisconnectOutcome.REQUEST_WITHDRAWN
    assert room.pending_requests == {}
    assert transport.names_for(HOST) == ["room_data_update"]
    assert transport.names_for(GUEST) == []


@pytest.mark.anyio
async def test_unknown_disconnect_is_noop(registry, transport) -> None:
    await _room(registry, transport)

    outcome = await DisconnectHandler(registry, transport).handle_disconnect("stranger")

    assert outcome is DisconnectOutcome.NONE
    assert transport.sent == []
