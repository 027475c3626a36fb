# wspcheck/config.py
from pathlib import Path
import os
from dotenv import load_dotenv

load_dotenv()

SCHEMAS_PATH = Path(os.getenv("WSPCHECK_SCHEMAS", "/etc/graphite/storage-schemas.conf"))
WHISPER_ROOT = Path(os.getenv("WSPCHECK_ROOT", "/var/lib/graphite/whisper"))
WHISPER_EXT = ".wsp"
