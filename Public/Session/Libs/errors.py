# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

class SyncError(Exception):
    """Sadece isteği yapan bağlantıya bildirilen, oda durumunu değiştirmeyen hata"""

    default_message = "İşlem gerçekleştirilemedi."

    def __init__(self, message: str | None = None, reply_event: str = "error_message"):
        self.message     = message or self.default_message
        self.reply_event = reply_event
        super().__init__(self.message)

class RoomNotFound(SyncError):
    default_message = "Oda bulunamadı."

class NotHost(SyncError):
    default_message = "Bu işlemi sadece oda sahibi yapabilir."

class RequestNotFound(SyncError):
    default_message = "Katılma isteği bulunamadı ya da zaten işlendi."

class EmptyUrl(SyncError):
    default_message = "Video URL'si boş olamaz."

class NotInRoom(SyncError):
    default_message = "Mesaj gönderilemedi: geçerli bir odada değilsiniz."

class InvalidPayload(SyncError):
    default_message = "Geçersiz mesaj formatı."

class AlreadyInRoom(SyncError):
    default_message = "Zaten başka bir odadasınız ya da onay bekliyorsunuz."
