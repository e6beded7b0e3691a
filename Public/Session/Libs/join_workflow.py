# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from enum          import Enum
from rich.markup   import escape
from CLI           import konsol
from ..Models      import ConnectionHandle, Room, as_participant, as_handle
from .RoomRegistry import RoomRegistry
from .transport    import Transport
from .errors       import NotHost, RequestNotFound, AlreadyInRoom

class JoinState(str, Enum):
    UNKNOWN        = "unknown"
    PENDING        = "pending"
    APPROVED       = "approved"
    REJECTED       = "rejected"
    ALREADY_MEMBER = "already_member"

class JoinWorkflow:
    """Bir bağlantının katılımcıya dönüşmesini yöneten host onaylı akış"""

    def __init__(self, registry: RoomRegistry, transport: Transport):
        self.registry  = registry
        self.transport = transport

    async def request_join(self, handle: ConnectionHandle, room_id: str, display_name: str) -> JoinState:
        room           = self.registry.require(room_id, reply_event="join_rejected")
        participant_id = as_participant(handle)

        current = self.registry.membership_of(handle)
        if current is not None and current != room.room_id:
            raise AlreadyInRoom(reply_event="join_rejected")

        # Zaten üye: yeniden onay beklemeden tam görüntüyü gönder
        if room.has_participant(participant_id):
            self.transport.join_group(room.room_id, handle)
            await self.transport.emit(handle, "join_approved", room.snapshot())
            await self.transport.emit_to_group(room.room_id, "room_data_update", room.data_update())
            konsol.log(f"[cyan][JOIN_REQUEST][/] {handle} zaten {room.room_id} odasında, doğrudan onaylandı.")
            return JoinState.ALREADY_MEMBER

        if room.is_pending(participant_id):
            await self.transport.emit(handle, "join_pending", "Katılma isteğiniz hâlâ host onayı bekliyor.")
            return JoinState.PENDING

        request = room.enqueue(participant_id, display_name)
        host    = as_handle(room.host_id)

        await self.transport.emit(handle, "join_pending", "Katılma isteğiniz hosta iletildi. Lütfen onay bekleyin.")
        await self.transport.emit(host, "new_join_request", request.to_dict())
        await self.transport.emit(host, "room_data_update", room.data_update())

        konsol.log(f"[cyan][JOIN_REQUEST][/] {escape(display_name)} ({handle}) » {room.room_id} onay bekliyor.")
        return JoinState.PENDING

    def _authorize(self, room_id: str, acting: ConnectionHandle) -> Room:
        room = self.registry.require(room_id)
        if not room.is_host(as_participant(acting)):
            raise NotHost()
        return room

    async def approve(self, acting: ConnectionHandle, room_id: str, target: ConnectionHandle) -> JoinState:
        room        = self._authorize(room_id, acting)
        participant = room.admit(as_participant(target))
        if participant is None:
            raise RequestNotFound()

        self.transport.join_group(room.room_id, target)
        await self.transport.emit(target, "join_approved", room.snapshot())
        await self.transport.emit_to_group(room.room_id, "user_joined", {
            "displayName" : participant.display_name,
            "handle"      : target,
        })
        await self.transport.emit_to_group(room.room_id, "room_data_update", room.data_update())

        konsol.log(
            f"[green][APPROVE_JOIN][/] {escape(participant.display_name)} ({target}) » {room.room_id}"
            f" | katılımcı: {len(room.participants)}, bekleyen: {len(room.pending_requests)}"
        )
        return JoinState.APPROVED

    async def reject(self, acting: ConnectionHandle, room_id: str, target: ConnectionHandle) -> JoinState:
        room    = self._authorize(room_id, acting)
        request = room.withdraw(as_participant(target))
        if request is None:
            raise RequestNotFound()

        await self.transport.emit(target, "join_rejected", "Host katılma isteğinizi reddetti.")
        await self.transport.emit(acting, "room_data_update", room.data_update())

        konsol.log(f"[red][REJECT_JOIN][/] {escape(request.display_name)} ({target}) » {room.room_id} reddedildi.")
        return JoinState.REJECTED
