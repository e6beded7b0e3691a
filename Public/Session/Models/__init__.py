# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from .SessionModels import (
    ConnectionHandle, ParticipantId, RoomId,
    as_participant, as_handle, now_ms,
    VideoState, Participant, PendingRequest, ChatMessage, Room
)
from .EventModels import (
    CreateRoomPayload, JoinRequestPayload, JoinDecisionPayload,
    VideoSyncPayload, SetVideoUrlPayload, ChatPayload
)
