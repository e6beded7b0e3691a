# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from typing       import Any, Protocol
from dataclasses  import dataclass
from fastapi      import WebSocket
from CLI          import konsol
from Settings     import SEND_TIMEOUT, OUTBOX_SIZE
from ..Models     import ConnectionHandle, RoomId
import asyncio, json, uuid

class Transport(Protocol):
    """Oda mantığının gördüğü tek gönderim yüzeyi (fire-and-forget)"""

    async def emit(self, handle: ConnectionHandle, event: str, data: Any = None) -> None: ...

    async def emit_to_group(
        self, room_id: RoomId, event: str, data: Any = None, exclude: ConnectionHandle | None = None
    ) -> None: ...

    def join_group(self, room_id: RoomId, handle: ConnectionHandle) -> None: ...
    def leave_group(self, room_id: RoomId, handle: ConnectionHandle) -> None: ...
    def drop_group(self, room_id: RoomId) -> None: ...

def encode_frame(event: str, data: Any = None) -> str:
    return json.dumps({"type": event, "data": data}, ensure_ascii=False)

# Kuyrukta bekleyen video_sync'in yerini tutar; gönderim anında en son durum okunur
_LATEST_SYNC = object()

@dataclass
class _Peer:
    websocket   : WebSocket
    outbox      : asyncio.Queue
    latest_sync : str | None = None
    dropped     : int = 0
    pump        : asyncio.Task | None = None

    def push(self, event: str, frame: str) -> bool:
        """Kuyruğa ekle; dolu kuyrukta en eski kayıt atılırsa True"""
        # Bekleyen sync varsa sadece içeriği güncellenir, eski ara durumlar sıraya girmez
        if event == "video_sync" and self.latest_sync is not None:
            self.latest_sync = frame
            return False

        dropped = False
        if self.outbox.full():
            if self.outbox.get_nowait() is _LATEST_SYNC:
                self.latest_sync = None
            self.dropped += 1
            dropped = True

        if event == "video_sync":
            self.latest_sync = frame
            self.outbox.put_nowait(_LATEST_SYNC)
        else:
            self.outbox.put_nowait(frame)
        return dropped

    def take(self, item: object) -> str | None:
        if item is _LATEST_SYNC:
            frame, self.latest_sync = self.latest_sync, None
            return frame
        return item

class WebSocketTransport:
    """Her bağlantıya sınırlı bir kuyruk + yazıcı task; yavaş alıcı göndereni bekletmez"""

    def __init__(self, send_timeout: float = SEND_TIMEOUT, outbox_size: int = OUTBOX_SIZE):
        self.send_timeout = send_timeout
        self.outbox_size  = outbox_size
        self._peers : dict[ConnectionHandle, _Peer] = {}
        self._groups: dict[RoomId, dict[ConnectionHandle, None]] = {}

    def __len__(self) -> int:
        return len(self._peers)

    def register(self, websocket: WebSocket) -> ConnectionHandle:
        handle = ConnectionHandle(uuid.uuid4().hex[:12])
        peer   = _Peer(websocket=websocket, outbox=asyncio.Queue(maxsize=self.outbox_size))
        peer.pump = asyncio.create_task(self._pump(handle, peer))
        self._peers[handle] = peer
        return handle

    async def unregister(self, handle: ConnectionHandle) -> None:
        peer = self._peers.pop(handle, None)
        for members in self._groups.values():
            members.pop(handle, None)

        if peer and peer.pump and not peer.pump.done():
            peer.pump.cancel()
            try:
                await peer.pump
            except asyncio.CancelledError:
                pass

    async def _pump(self, handle: ConnectionHandle, peer: _Peer) -> None:
        while True:
            frame = peer.take(await peer.outbox.get())
            if frame is None:
                continue
            try:
                await asyncio.wait_for(peer.websocket.send_text(frame), timeout=self.send_timeout)
            except asyncio.TimeoutError:
                konsol.log(f"[yellow]⏱️ Gönderim zaman aşımı:[/] {handle}")
            except Exception as hata:
                konsol.log(f"[red]Gönderim hatası:[/] {handle} » {type(hata).__name__}: {hata}")

    def _enqueue(self, handle: ConnectionHandle, peer: _Peer, event: str, frame: str) -> None:
        if peer.push(event, frame) and peer.dropped % 100 == 1:
            konsol.log(f"[yellow]Kuyruk dolu, eski mesajlar atılıyor:[/] {handle} (atılan: {peer.dropped})")

    async def emit(self, handle: ConnectionHandle, event: str, data: Any = None) -> None:
        peer = self._peers.get(handle)
        if peer:
            self._enqueue(handle, peer, event, encode_frame(event, data))

    async def emit_to_group(
        self, room_id: RoomId, event: str, data: Any = None, exclude: ConnectionHandle | None = None
    ) -> None:
        frame = encode_frame(event, data)
        for handle in list(self._groups.get(room_id, ())):
            if handle == exclude:
                continue
            peer = self._peers.get(handle)
            if peer:
                self._enqueue(handle, peer, event, frame)

    def join_group(self, room_id: RoomId, handle: ConnectionHandle) -> None:
        self._groups.setdefault(room_id, {})[handle] = None

    def leave_group(self, room_id: RoomId, handle: ConnectionHandle) -> None:
        members = self._groups.get(room_id)
        if members is not None:
            members.pop(handle, None)

    def drop_group(self, room_id: RoomId) -> None:
        self._groups.pop(room_id, None)
