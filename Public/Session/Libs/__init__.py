# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from .errors             import SyncError, RoomNotFound, NotHost, RequestNotFound, EmptyUrl, NotInRoom, InvalidPayload, AlreadyInRoom
from .RoomRegistry       import RoomStore, MemoryRoomStore, RoomRegistry
from .transport          import Transport, WebSocketTransport, encode_frame
from .join_workflow      import JoinState, JoinWorkflow
from .sync_broadcaster   import SyncBroadcaster, needs_reconcile
from .chat_relay         import ChatRelay
from .disconnect_handler import DisconnectOutcome, DisconnectHandler
from .SessionEngine      import SessionEngine, parse_payload
