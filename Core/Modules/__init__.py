# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from CLI                 import konsol
from fastapi             import FastAPI
from contextlib          import asynccontextmanager
from Public.Session.Libs import SessionEngine, RoomRegistry, MemoryRoomStore, WebSocketTransport

@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan events - startup ve shutdown"""

    # Oda kayıt defteri ve transport açıkça oluşturulup handler'lara app.state üzerinden verilir
    app.state.session_engine = SessionEngine(
        registry  = RoomRegistry(store=MemoryRoomStore()),
        transport = WebSocketTransport()
    )
    konsol.log("[green]Oturum motoru hazır.[/]")

    yield

    konsol.log(f"[yellow]Kapanış » {len(app.state.session_engine.registry)} aktif oda bellekten silindi.[/]")
