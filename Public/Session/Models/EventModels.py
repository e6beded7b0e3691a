# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from pydantic import BaseModel, ConfigDict, Field, AliasChoices

class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

class CreateRoomPayload(_Payload):
    display_name : str = Field(min_length=1, max_length=64, validation_alias=AliasChoices("displayName", "username", "display_name"))
    video_url    : str = Field(default="", validation_alias=AliasChoices("videoUrl", "video_url"))

class JoinRequestPayload(_Payload):
    room_id      : str = Field(min_length=1, validation_alias=AliasChoices("roomId", "room_id"))
    display_name : str = Field(min_length=1, max_length=64, validation_alias=AliasChoices("displayName", "username", "display_name"))

class JoinDecisionPayload(_Payload):
    """approve_join / reject_join"""
    room_id          : str = Field(min_length=1, validation_alias=AliasChoices("roomId", "room_id"))
    requester_handle : str = Field(min_length=1, validation_alias=AliasChoices("requesterHandle", "requesterSocketId", "requester_handle"))

class VideoSyncPayload(_Payload):
    playing      : bool
    current_time : float = Field(ge=0, allow_inf_nan=False, validation_alias=AliasChoices("currentTime", "current_time"))

class SetVideoUrlPayload(_Payload):
    room_id   : str = Field(min_length=1, validation_alias=AliasChoices("roomId", "room_id"))
    video_url : str = Field(default="", validation_alias=AliasChoices("videoUrl", "video_url"))

class ChatPayload(_Payload):
    text : str = Field(default="", max_length=2000)
