# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from CLI           import konsol
from Settings      import SYNC_TOLERANCE
from ..Models      import ConnectionHandle, VideoState, as_participant
from .RoomRegistry import RoomRegistry
from .transport    import Transport
from .errors       import NotHost, EmptyUrl

def needs_reconcile(local: VideoState, remote: VideoState, tolerance: float = SYNC_TOLERANCE) -> bool:
    """
    İstemci tarafı uzlaştırma kuralı: sadece fark toleransı aşarsa
    ya da oynat/duraklat uyuşmazsa seek/play zorlanır.
    """
    if local.playing != remote.playing:
        return True
    return abs(local.current_time - remote.current_time) > tolerance

class SyncBroadcaster:
    """Host'un video durumunu ve URL değişikliklerini odaya dağıtır"""

    def __init__(self, registry: RoomRegistry, transport: Transport):
        self.registry  = registry
        self.transport = transport

    async def push_video_sync(self, acting: ConnectionHandle, state: VideoState) -> bool:
        room = self.registry.find_hosted_by(acting)
        if room is None:
            # Host olmayan bağlantıların sync'i yetkisiz, sessizce yok sayılır
            return False

        room.video_state = state
        await self.transport.emit_to_group(room.room_id, "video_sync", state.to_dict(), exclude=acting)

        konsol.log(f"[magenta][VIDEO_SYNC][/] {room.room_id} » playing: {state.playing}, time: {state.current_time:.2f}")
        return True

    async def set_video_url(self, acting: ConnectionHandle, room_id: str, video_url: str) -> VideoState:
        room = self.registry.require(room_id)
        if not room.is_host(as_participant(acting)):
            raise NotHost("Video URL'sini sadece oda sahibi değiştirebilir.")

        video_url = (video_url or "").strip()
        if not video_url:
            raise EmptyUrl()

        room.video_url   = video_url
        room.video_state = VideoState()
        await self.transport.emit_to_group(room.room_id, "video_url_updated", {
            "videoUrl"   : room.video_url,
            "videoState" : room.video_state.to_dict(),
        })

        konsol.log(f"[magenta][SET_VIDEO_URL][/] {room.room_id} » {video_url}")
        return room.video_state
