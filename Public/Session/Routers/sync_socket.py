# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from CLI         import konsol
from fastapi     import WebSocket, WebSocketDisconnect
from Settings    import MAX_PAYLOAD, RATE_LIMIT, SYNC_RATE_LIMIT
from .           import session_router
from ..Libs      import SessionEngine, WebSocketTransport
import json, time

HIGH_FREQ_OPS = {"video_sync"}

class RateLimiter:
    """Saniyelik sabit pencere sayacı"""

    def __init__(self, limit: int, window: float = 1.0):
        self.limit   = limit
        self.window  = window
        self.count   = 0
        self.started = time.perf_counter()

    def allow(self, now: float | None = None) -> bool:
        now = time.perf_counter() if now is None else now
        if now - self.started > self.window:
            self.count   = 0
            self.started = now

        self.count += 1
        return self.count <= self.limit

@session_router.websocket("/ws")
async def sync_websocket(websocket: WebSocket):
    engine    : SessionEngine      = websocket.app.state.session_engine
    transport : WebSocketTransport = engine.transport

    await websocket.accept()
    handle = transport.register(websocket)
    konsol.log(f"[green][CONNECT][/] {handle} bağlandı. Aktif bağlantı: {len(transport)}")

    general = RateLimiter(RATE_LIMIT)
    high    = RateLimiter(SYNC_RATE_LIMIT)

    try:
        while True:
            raw = await websocket.receive_text()

            # 1. Flood Control: Payload Size
            if len(raw.encode("utf-8")) > MAX_PAYLOAD:
                await transport.emit(handle, "error_message", "Mesaj boyutu çok büyük")
                continue

            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                await transport.emit(handle, "error_message", "Geçersiz JSON formatı")
                continue

            if not isinstance(msg, dict) or not msg.get("type"):
                continue

            event = msg["type"]

            # 2. Flood Control: Rate Limit (Dual Bucket)
            if event in HIGH_FREQ_OPS:
                if not high.allow():
                    continue
            elif not general.allow():
                await transport.emit(handle, "error_message", "Çok hızlı işlem yapıyorsunuz")
                continue

            await engine.dispatch(handle, event, msg.get("data"))

    except WebSocketDisconnect:
        pass
    except Exception as hata:
        konsol.log(f"[red]WebSocket Error:[/] {handle} » {type(hata).__name__}: {hata}")
    finally:
        outcome = await engine.disconnect(handle)
        await transport.unregister(handle)
        konsol.log(f"[yellow][CONNECT][/] {handle} ayrıldı ({outcome.value}). Aktif bağlantı: {len(transport)}")
