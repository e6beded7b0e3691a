# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from typing    import Iterator, Protocol
from CLI       import konsol
from Settings  import ROOM_ID_LENGTH, ROOM_ID_ALPHABET
from ..Models  import ConnectionHandle, RoomId, Room, as_participant
from .errors   import RoomNotFound
import random

class RoomStore(Protocol):
    """Odaların tutulduğu depo; şimdilik bellek, ileride kalıcı olabilir"""

    def get(self, room_id: RoomId) -> Room | None: ...
    def put(self, room: Room) -> None: ...
    def delete(self, room_id: RoomId) -> Room | None: ...
    def __contains__(self, room_id: object) -> bool: ...
    def __iter__(self) -> Iterator[Room]: ...
    def __len__(self) -> int: ...

class MemoryRoomStore:
    def __init__(self):
        self._rooms: dict[RoomId, Room] = {}

    def get(self, room_id: RoomId) -> Room | None:
        return self._rooms.get(room_id)

    def put(self, room: Room) -> None:
        self._rooms[room.room_id] = room

    def delete(self, room_id: RoomId) -> Room | None:
        return self._rooms.pop(room_id, None)

    def __contains__(self, room_id: object) -> bool:
        return room_id in self._rooms

    def __iter__(self) -> Iterator[Room]:
        return iter(list(self._rooms.values()))

    def __len__(self) -> int:
        return len(self._rooms)

class RoomRegistry:
    """Odaların tek sahibi: oluşturma, arama ve yok etme"""

    def __init__(
        self,
        store     : RoomStore | None = None,
        id_length : int = ROOM_ID_LENGTH,
        alphabet  : str = ROOM_ID_ALPHABET,
        rng       : random.Random | None = None
    ):
        self.store     = store if store is not None else MemoryRoomStore()
        self.id_length = id_length
        self.alphabet  = alphabet
        self._rng      = rng or random.SystemRandom()
        self._hosts: dict[ConnectionHandle, RoomId] = {}

    def __len__(self) -> int:
        return len(self.store)

    def _generate_room_id(self) -> RoomId:
        while True:
            room_id = RoomId("".join(self._rng.choice(self.alphabet) for _ in range(self.id_length)))
            if room_id not in self.store:
                return room_id

    def create_room(self, host: ConnectionHandle, display_name: str, video_url: str) -> Room:
        room = Room.open(self._generate_room_id(), as_participant(host), display_name, video_url)
        self.store.put(room)
        self._hosts[host] = room.room_id
        return room

    def get(self, room_id: str) -> Room | None:
        return self.store.get(RoomId(room_id))

    def require(self, room_id: str, reply_event: str = "error_message") -> Room:
        room = self.get(room_id)
        if room is None:
            raise RoomNotFound(reply_event=reply_event)
        return room

    def find_hosted_by(self, handle: ConnectionHandle) -> Room | None:
        room_id = self._hosts.get(handle)
        return self.store.get(room_id) if room_id else None

    def find_by_handle(self, handle: ConnectionHandle) -> RoomId | None:
        """Bağlantının katılımcı olduğu oda (host dahil)"""
        participant_id = as_participant(handle)
        for room in self.store:
            if room.has_participant(participant_id):
                return room.room_id
        return None

    def find_pending(self, handle: ConnectionHandle) -> RoomId | None:
        participant_id = as_participant(handle)
        for room in self.store:
            if room.is_pending(participant_id):
                return room.room_id
        return None

    def membership_of(self, handle: ConnectionHandle) -> RoomId | None:
        """Bağlantının üye ya da bekleyen olduğu oda; bir bağlantı en fazla bir odada bulunur"""
        return self.find_by_handle(handle) or self.find_pending(handle)

    def destroy(self, room_id: RoomId) -> bool:
        room = self.store.delete(room_id)
        if room is None:
            return False

        for handle, hosted in list(self._hosts.items()):
            if hosted == room_id:
                del self._hosts[handle]

        konsol.log(f"[yellow][DESTROY_ROOM][/] {room_id} silindi. Aktif oda: {len(self.store)}")
        return True
