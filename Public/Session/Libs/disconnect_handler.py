# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from enum          import Enum
from rich.markup   import escape
from CLI           import konsol
from ..Models      import ConnectionHandle, Room, as_participant, as_handle
from .RoomRegistry import RoomRegistry
from .transport    import Transport

class DisconnectOutcome(str, Enum):
    ROOM_CLOSED       = "room_closed"
    PARTICIPANT_LEFT  = "participant_left"
    REQUEST_WITHDRAWN = "request_withdrawn"
    NONE              = "none"

class DisconnectHandler:
    """Transport'tan gelen kopma bildirimine göre oda durumunu geri sarar"""

    def __init__(self, registry: RoomRegistry, transport: Transport):
        self.registry  = registry
        self.transport = transport

    async def handle_disconnect(self, handle: ConnectionHandle) -> DisconnectOutcome:
        # Sıra önemli: host > katılımcı > bekleyen, ilk eşleşme sonlandırır
        room = self.registry.find_hosted_by(handle)
        if room is not None:
            await self._close_room(room)
            return DisconnectOutcome.ROOM_CLOSED

        room_id = self.registry.find_by_handle(handle)
        if room_id is not None:
            await self._participant_left(self.registry.get(room_id), handle)
            return DisconnectOutcome.PARTICIPANT_LEFT

        room_id = self.registry.find_pending(handle)
        if room_id is not None:
            room    = self.registry.get(room_id)
            request = room.withdraw(as_participant(handle))
            await self.transport.emit(as_handle(room.host_id), "room_data_update", room.data_update())
            konsol.log(f"[yellow][DISCONNECT][/] {escape(request.display_name)} ({handle}) bekleyen isteği iptal edildi » {room.room_id}")
            return DisconnectOutcome.REQUEST_WITHDRAWN

        return DisconnectOutcome.NONE

    async def _close_room(self, room: Room) -> None:
        await self.transport.emit_to_group(room.room_id, "room_closed", "Host bağlantısı koptu. Oda kapatıldı.")

        # Bekleyenler gruba dahil değil, ayrıca bilgilendirilir
        for participant_id in list(room.pending_requests):
            await self.transport.emit(as_handle(participant_id), "join_rejected", "Oda kapatıldı.")

        self.transport.drop_group(room.room_id)
        self.registry.destroy(room.room_id)
        konsol.log(f"[red][DISCONNECT][/] Host ayrıldı, {room.room_id} kapatıldı.")

    async def _participant_left(self, room: Room, handle: ConnectionHandle) -> None:
        participant = room.remove_participant(as_participant(handle))
        self.transport.leave_group(room.room_id, handle)

        await self.transport.emit_to_group(room.room_id, "user_left", {
            "displayName" : participant.display_name,
            "handle"      : handle,
        })
        await self.transport.emit_to_group(room.room_id, "room_data_update", room.data_update())

        konsol.log(f"[yellow][DISCONNECT][/] {escape(participant.display_name)} ({handle}) » {room.room_id} odasından ayrıldı.")
