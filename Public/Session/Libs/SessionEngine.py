# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from typing              import Any, Awaitable, Callable
from pydantic            import BaseModel, ValidationError
from rich.markup         import escape
from CLI                 import konsol
from Settings            import HOST_SUFFIX
from ..Models            import (
    ConnectionHandle, RoomId, VideoState,
    CreateRoomPayload, JoinRequestPayload, JoinDecisionPayload,
    VideoSyncPayload, SetVideoUrlPayload, ChatPayload
)
from .RoomRegistry       import RoomRegistry
from .transport          import Transport
from .join_workflow      import JoinWorkflow
from .sync_broadcaster   import SyncBroadcaster
from .chat_relay         import ChatRelay
from .disconnect_handler import DisconnectHandler, DisconnectOutcome
from .errors             import SyncError, InvalidPayload, AlreadyInRoom
import asyncio

def parse_payload(model: type[BaseModel], data: Any) -> BaseModel:
    """Gelen veriyi doğrula, hatayı kullanıcıya dönecek mesaja çevir"""
    try:
        return model.model_validate(data if data is not None else {})
    except ValidationError as hata:
        messages = [f"{'.'.join(str(p) for p in e['loc']) or 'data'}: {e['msg']}" for e in hata.errors()]
        raise InvalidPayload(" | ".join(messages)) from hata

class SessionEngine:
    """Gelen olayları ilgili bileşene yönlendirir; her olay bir sonrakinden önce tamamlanır"""

    def __init__(self, registry: RoomRegistry, transport: Transport, host_suffix: str = HOST_SUFFIX):
        self.registry    = registry
        self.transport   = transport
        self.host_suffix = host_suffix

        self.join_workflow = JoinWorkflow(registry, transport)
        self.sync          = SyncBroadcaster(registry, transport)
        self.chat          = ChatRelay(registry, transport)
        self.disconnects   = DisconnectHandler(registry, transport)

        self._lock = asyncio.Lock()

        # event -> (payload modeli, işleyici)
        self._handlers: dict[str, tuple[type[BaseModel], Callable[[ConnectionHandle, Any], Awaitable[Any]]]] = {
            "create_room"   : (CreateRoomPayload,   self._on_create_room),
            "join_request"  : (JoinRequestPayload,  self._on_join_request),
            "approve_join"  : (JoinDecisionPayload, self._on_approve_join),
            "reject_join"   : (JoinDecisionPayload, self._on_reject_join),
            "video_sync"    : (VideoSyncPayload,    self._on_video_sync),
            "set_video_url" : (SetVideoUrlPayload,  self._on_set_video_url),
            "chat_message"  : (ChatPayload,         self._on_chat_message),
        }

    async def create_room(self, handle: ConnectionHandle, display_name: str, video_url: str) -> RoomId:
        # Bir bağlantı aynı anda tek odada: host, katılımcı ya da bekleyen
        if self.registry.membership_of(handle) is not None:
            raise AlreadyInRoom()

        host_name = f"{display_name}{self.host_suffix}"
        room      = self.registry.create_room(handle, host_name, video_url)

        self.transport.join_group(room.room_id, handle)
        await self.transport.emit(handle, "room_created", room.room_id)
        await self.transport.emit_to_group(room.room_id, "user_joined", {"displayName": host_name, "handle": handle})
        await self.transport.emit_to_group(room.room_id, "room_data_update", room.data_update())

        konsol.log(f"[green][CREATE_ROOM][/] {room.room_id} » host: {escape(host_name)} ({handle}) | video: {escape(video_url)}")
        return room.room_id

    async def dispatch(self, handle: ConnectionHandle, event: str, data: Any = None) -> None:
        """Tek bir olayı işle; hatalar sadece gönderene bildirilir, dışarı taşmaz"""
        entry = self._handlers.get(event)
        if entry is None:
            return

        model, handler = entry
        if model is ChatPayload and isinstance(data, str):
            data = {"text": data}

        async with self._lock:
            # Host olmayanın sync'i bozuk olsa bile hata değil, sessizce yok sayılır
            if event == "video_sync" and self.registry.find_hosted_by(handle) is None:
                return

            try:
                await handler(handle, parse_payload(model, data))
            except SyncError as hata:
                konsol.log(f"[red]{event} » {type(hata).__name__}:[/] {handle} | {escape(hata.message)}")
                await self.transport.emit(handle, hata.reply_event, hata.message)

    async def disconnect(self, handle: ConnectionHandle) -> DisconnectOutcome:
        async with self._lock:
            return await self.disconnects.handle_disconnect(handle)

    # ============== Handlers ==============

    async def _on_create_room(self, handle: ConnectionHandle, payload: CreateRoomPayload):
        return await self.create_room(handle, payload.display_name, payload.video_url)

    async def _on_join_request(self, handle: ConnectionHandle, payload: JoinRequestPayload):
        return await self.join_workflow.request_join(handle, payload.room_id, payload.display_name)

    async def _on_approve_join(self, handle: ConnectionHandle, payload: JoinDecisionPayload):
        return await self.join_workflow.approve(handle, payload.room_id, ConnectionHandle(payload.requester_handle))

    async def _on_reject_join(self, handle: ConnectionHandle, payload: JoinDecisionPayload):
        return await self.join_workflow.reject(handle, payload.room_id, ConnectionHandle(payload.requester_handle))

    async def _on_video_sync(self, handle: ConnectionHandle, payload: VideoSyncPayload):
        state = VideoState(playing=payload.playing, current_time=payload.current_time)
        return await self.sync.push_video_sync(handle, state)

    async def _on_set_video_url(self, handle: ConnectionHandle, payload: SetVideoUrlPayload):
        return await self.sync.set_video_url(handle, payload.room_id, payload.video_url)

    async def _on_chat_message(self, handle: ConnectionHandle, payload: ChatPayload):
        return await self.chat.post_message(handle, payload.text)
