# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from dataclasses import dataclass, field
from typing      import NewType
import time

# Transport'un verdiği bağlantı kimliği ile oda içindeki katılımcı kimliği aynı değeri taşır,
# ama ayrı tiplerdir: domain modeli transport'un kimlik şemasına bağlı kalmaz.
ConnectionHandle = NewType("ConnectionHandle", str)
ParticipantId    = NewType("ParticipantId", str)
RoomId           = NewType("RoomId", str)

def as_participant(handle: ConnectionHandle) -> ParticipantId:
    return ParticipantId(str(handle))

def as_handle(participant_id: ParticipantId) -> ConnectionHandle:
    return ConnectionHandle(str(participant_id))

def now_ms() -> int:
    return int(time.time() * 1000)

@dataclass(frozen=True)
class VideoState:
    """Host'un bildirdiği oynatım durumu, iki alan birlikte değiştirilir"""
    playing      : bool  = False
    current_time : float = 0.0

    def to_dict(self) -> dict:
        return {"playing": self.playing, "currentTime": self.current_time}

@dataclass
class Participant:
    """Odaya kabul edilmiş bağlantı (host dahil)"""
    participant_id : ParticipantId
    display_name   : str
    is_host        : bool = False

    def to_dict(self) -> dict:
        return {"handle": self.participant_id, "displayName": self.display_name, "isHost": self.is_host}

@dataclass
class PendingRequest:
    """Host onayı bekleyen katılma isteği"""
    participant_id : ParticipantId
    display_name   : str

    def to_dict(self) -> dict:
        return {"requesterHandle": self.participant_id, "displayName": self.display_name}

@dataclass
class ChatMessage:
    """Chat mesajı"""
    author    : str
    text      : str
    timestamp : int = field(default_factory=now_ms)

    def to_dict(self) -> dict:
        return {"author": self.author, "text": self.text, "timestamp": self.timestamp}

@dataclass
class Room:
    """Senkron izleme odası"""
    room_id          : RoomId
    host_id          : ParticipantId
    video_url        : str = ""
    video_state      : VideoState = field(default_factory=VideoState)
    participants     : dict[ParticipantId, Participant]    = field(default_factory=dict)
    pending_requests : dict[ParticipantId, PendingRequest] = field(default_factory=dict)
    messages         : list[ChatMessage] = field(default_factory=list)

    @classmethod
    def open(cls, room_id: RoomId, host_id: ParticipantId, display_name: str, video_url: str) -> "Room":
        room = cls(room_id=room_id, host_id=host_id, video_url=video_url)
        room.participants[host_id] = Participant(participant_id=host_id, display_name=display_name, is_host=True)
        return room

    def is_host(self, participant_id: ParticipantId) -> bool:
        return participant_id == self.host_id

    def has_participant(self, participant_id: ParticipantId) -> bool:
        return participant_id in self.participants

    def is_pending(self, participant_id: ParticipantId) -> bool:
        return participant_id in self.pending_requests

    def display_name_of(self, participant_id: ParticipantId) -> str | None:
        participant = self.participants.get(participant_id)
        return participant.display_name if participant else None

    def enqueue(self, participant_id: ParticipantId, display_name: str) -> PendingRequest | None:
        """Bekleme listesine ekle; zaten üye ya da bekliyorsa None"""
        if participant_id in self.participants or participant_id in self.pending_requests:
            return None

        request = PendingRequest(participant_id=participant_id, display_name=display_name)
        self.pending_requests[participant_id] = request
        return request

    def admit(self, participant_id: ParticipantId) -> Participant | None:
        """Bekleyen isteği katılımcıya çevir"""
        request = self.pending_requests.pop(participant_id, None)
        if request is None:
            return None

        participant = Participant(participant_id=participant_id, display_name=request.display_name)
        self.participants[participant_id] = participant
        return participant

    def withdraw(self, participant_id: ParticipantId) -> PendingRequest | None:
        return self.pending_requests.pop(participant_id, None)

    def remove_participant(self, participant_id: ParticipantId) -> Participant | None:
        # Host sadece oda kapanırken çıkar
        if participant_id == self.host_id:
            return None
        return self.participants.pop(participant_id, None)

    def participants_payload(self) -> list[dict]:
        return [participant.to_dict() for participant in self.participants.values()]

    def pending_payload(self) -> list[dict]:
        return [request.to_dict() for request in self.pending_requests.values()]

    def data_update(self) -> dict:
        return {"participants": self.participants_payload(), "pendingRequests": self.pending_payload()}

    def snapshot(self) -> dict:
        """Yeni katılana gönderilen tam oda görüntüsü"""
        return {
            "videoUrl"     : self.video_url,
            "videoState"   : self.video_state.to_dict(),
            "participants" : self.participants_payload(),
            "messages"     : [message.to_dict() for message in self.messages],
        }

    def summary(self) -> dict:
        return {
            "room_id"           : self.room_id,
            "video_url"         : self.video_url,
            "participant_count" : len(self.participants),
            "pending_count"     : len(self.pending_requests),
        }
