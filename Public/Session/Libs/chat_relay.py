# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from rich.markup   import escape
from CLI           import konsol
from ..Models      import ConnectionHandle, ChatMessage, as_participant
from .RoomRegistry import RoomRegistry
from .transport    import Transport
from .errors       import NotInRoom

class ChatRelay:
    """Chat mesajlarını odanın kalıcı kaydına ekler ve gönderen dahil herkese yayınlar"""

    def __init__(self, registry: RoomRegistry, transport: Transport):
        self.registry  = registry
        self.transport = transport

    async def post_message(self, handle: ConnectionHandle, text: str) -> ChatMessage | None:
        room_id = self.registry.find_by_handle(handle)
        room    = self.registry.get(room_id) if room_id else None
        if room is None:
            raise NotInRoom()

        text = text.strip()
        if not text:
            return None

        message = ChatMessage(author=room.display_name_of(as_participant(handle)), text=text)
        room.messages.append(message)
        await self.transport.emit_to_group(room.room_id, "chat_message", message.to_dict())

        konsol.log(f"[blue][CHAT][/] {room.room_id} » {escape(message.author)}: {escape(text)} (toplam: {len(room.messages)})")
        return message
