import pytest

from Public.Session.Libs import JoinWorkflow, JoinState, NotHost, RequestNotFound, RoomNotFound
from Public.Session.Models import ChatMessage, as_participant

from conftest import HOST, GUEST, OTHER


def _room_with_host(registry, transport):
    room = registry.create_room(HOST, "Host - admin", "v1")
    transport.join_group(room.room_id, HOST)
    return room


def _assert_disjoint(room) -> None:
    assert not set(room.participants) & set(room.pending_requests)


@pytest.mark.anyio
async def test_request_join_queues_and_notifies_host(registry, transport) -> None:
    room = _room_with_host(registry, transport)
    workflow = JoinWorkflow(registry, transport)

    state = await workflow.request_join(GUEST, room.room_id, "Guest")

    assert state is JoinState.PENDING
    assert as_participant(GUEST) in room.pending_requests
    assert transport.names_for(GUEST) == ["join_pending"]
    assert transport.payloads(HOST, "new_join_request") == [{"requesterHandle": GUEST, "displayName": "Guest"}]
    update = transport.payloads(HOST, "room_data_update")[-1]
    assert update["pendingRequests"] == [{"requesterHandle": GUEST, "displayName": "Guest"}]
    _assert_disjoint(room)


@pytest.mark.anyio
async def test_duplicate_request_is_idempotent(registry, transport) -> None:
    room = _room_with_host(registry, transport)
    workflow = JoinWorkflow(registry, transport)

    await workflow.request_join(GUEST, room.room_id, "Guest")
    await workflow.request_join(GUEST, room.room_id, "Guest")

    assert len(room.pending_requests) == 1
    assert len(transport.payloads(HOST, "new_join_request")) == 1
    assert transport.names_for(GUEST) == ["join_pending", "join_pending"]


@pytest.mark.anyio
async def test_request_join_unknown_room_rejects_requester(registry, transport) -> None:
    workflow = JoinWorkflow(registry, transport)

    with pytest.raises(RoomNotFound) as info:
        await workflow.request_join(GUEST, "missing", "Guest")

    assert info.value.reply_event == "join_rejected"
    assert transport.sent == []


@pytest.mark.anyio
async def test_approve_moves_request_into_participants(registry, transport) -> None:
    room = _room_with_host(registry, transport)
    room.messages.append(ChatMessage(author="Host - admin", text="selam", timestamp=1))
    workflow = JoinWorkflow(registry, transport)
    await workflow.request_join(GUEST, room.room_id, "Guest")
    transport.clear()

    state = await workflow.approve(HOST, room.room_id, GUEST)

    assert state is JoinState.APPROVED
    assert as_participant(GUEST) not in room.pending_requests
    assert list(room.participants) == [as_participant(HOST), as_participant(GUEST)]
    assert room.participants[as_participant(GUEST)].is_host is False
    _assert_disjoint(room)

    snapshot = transport.payloads(GUEST, "join_approved")[0]
    assert snapshot["videoUrl"] == "v1"
    assert snapshot["videoState"] == {"playing": False, "currentTime": 0.0}
    assert len(snapshot["participants"]) == 2
    assert snapshot["messages"] == [m.to_dict() for m in room.messages]

    for handle in (HOST, GUEST):
        assert transport.payloads(handle, "user_joined") == [{"displayName": "Guest", "handle": GUEST}]
        assert transport.payloads(handle, "room_data_update")[-1]["pendingRequests"] == []


@pytest.mark.anyio
async def test_approve_requires_host(registry, transport) -> None:
    room = _room_with_host(registry, transport)
    workflow = JoinWorkflow(registry, transport)
    await workflow.request_join(GUEST, room.room_id, "Guest")

    with pytest.raises(NotHost):
        await workflow.approve(OTHER, room.room_id, GUEST)

    assert as_participant(GUEST) in room.pending_requests


@pytest.mark.anyio
async def test_approve_unknown_request(registry, transport) -> None:
    room = _room_with_host(registry, transport)
    workflow = JoinWorkflow(registry, transport)

    with pytest.raises(RequestNotFound):
        await workflow.approve(HOST, room.room_id, GUEST)

    assert len(room.participants) == 1


@pytest.mark.anyio
async def test_reject_removes_request_and_tells_target(registry, transport) -> None:
    room = _room_with_host(registry, transport)
    workflow = JoinWorkflow(registry, transport)
    await workflow.request_join(GUEST, room.room_id, "Guest")
    transport.clear()

    state = await workflow.reject(HOST, room.room_id, GUEST)

    assert state is JoinState.REJECTED
    assert room.pending_requests == {}
    assert as_participant(GUEST) not in room.participants
    assert transport.names_for(GUEST) == ["join_rejected"]
    assert transport.payloads(HOST, "room_data_update") == [room.data_update()]

    with pytest.raises(RequestNotFound):
        await workflow.reject(HOST, room.room_id, GUEST)


@pytest.mark.anyio
async def test_existing_member_is_approved_again(registry, transport) -> None:
    room = _room_with_host(registry, transport)
    workflow = JoinWorkflow(registry, transport)
    await workflow.request_join(GUEST, room.room_id, "Guest")
    await workflow.approve(HOST, room.room_id, GUEST)
    transport.clear()

    state = await workflow.request_join(GUEST, room.room_id, "Guest")

    assert state is JoinState.ALREADY_MEMBER
    assert room.pending_requests == {}
    assert transport.payloads(GUEST, "join_approved") == [room.snapshot()]
    assert transport.payloads(HOST, "room_data_update") == [room.data_update()]
    assert transport.payloads(HOST, "new_join_request") == []
