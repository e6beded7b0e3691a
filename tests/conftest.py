import pytest

from Public.Session.Libs import RoomRegistry, MemoryRoomStore, SessionEngine
from Public.Session.Models import ConnectionHandle


class ScriptedRandom:
    """Stands in for random.Random: hands out characters from a fixed script."""

    def __init__(self, script: str) -> None:
        self._chars = iter(script)

    def choice(self, seq):
        return next(self._chars)


class RecordingTransport:
    def __init__(self) -> None:
        self.sent: list[tuple[str, str, object]] = []
        self.groups: dict[str, list[str]] = {}

    async def emit(self, handle, event, data=None) -> None:
        self.sent.append((handle, event, data))

    async def emit_to_group(self, room_id, event, data=None, exclude=None) -> None:
        for handle in list(self.groups.get(room_id, [])):
            if handle != exclude:
                self.sent.append((handle, event, data))

    def join_group(self, room_id, handle) -> None:
        members = self.groups.setdefault(room_id, [])
        if handle not in members:
            members.append(handle)

    def leave_group(self, room_id, handle) -> None:
        members = self.groups.get(room_id, [])
        if handle in members:
            members.remove(handle)

    def drop_group(self, room_id) -> None:
        self.groups.pop(room_id, None)

    def events_for(self, handle) -> list[tuple[str, object]]:
        return [(event, data) for target, event, data in self.sent if target == handle]

    def names_for(self, handle) -> list[str]:
        return [event for event, _ in self.events_for(handle)]

    def payloads(self, handle, event) -> list[object]:
        return [data for name, data in self.events_for(handle) if name == event]

    def clear(self) -> None:
        self.sent.clear()


HOST = ConnectionHandle("host-1")
GUEST = ConnectionHandle("guest-1")
OTHER = ConnectionHandle("guest-2")


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def registry() -> RoomRegistry:
    return RoomRegistry(store=MemoryRoomStore())


@pytest.fixture
def engine(registry: RoomRegistry, transport: RecordingTransport) -> SessionEngine:
    return SessionEngine(registry, transport, host_suffix=" - admin")
