# Bu araç @keyiflerolsun tarafından | @KekikAkademi için yazılmıştır.

from pathlib import Path
from yaml    import load, FullLoader
from dotenv  import load_dotenv
import os

# .env yükleme
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# AYAR.yml yükleme
ayar_path = Path(__file__).resolve().parent.parent / "AYAR.yml"
with open(ayar_path, "r", encoding="utf-8") as yaml_dosyasi:
    AYAR = load(yaml_dosyasi, Loader=FullLoader)

# Genel ayarlar
PRODUCTION = os.getenv("PRODUCTION", "false").lower() == "true"

PROJE = AYAR["PROJE"]
HOST  = AYAR["APP"]["HOST"]
PORT  = AYAR["APP"]["PORT"]

# Oda ayarları
ROOM_ID_LENGTH   = int(AYAR["ROOM"]["ID_LENGTH"])
ROOM_ID_ALPHABET = str(AYAR["ROOM"]["ID_ALPHABET"])
MAX_PAYLOAD      = int(AYAR["ROOM"]["MAX_PAYLOAD"])
RATE_LIMIT       = int(AYAR["ROOM"]["RATE_LIMIT"])
SYNC_RATE_LIMIT  = int(AYAR["ROOM"]["SYNC_RATE_LIMIT"])
SEND_TIMEOUT     = float(AYAR["ROOM"]["SEND_TIMEOUT"])
OUTBOX_SIZE      = int(AYAR["ROOM"]["OUTBOX_SIZE"])
SYNC_TOLERANCE   = float(AYAR["ROOM"]["SYNC_TOLERANCE"])

# Host görünen adına eklenen son ek
HOST_SUFFIX = os.getenv("HOST_SUFFIX", " - admin")
