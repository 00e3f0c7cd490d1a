# repository/namespaces.py
from typing import Final

ROOT: Final[str] = "qrrecall"

ENTRIES: Final[str] = f"{ROOT}:entry"  # one JSON document per id
ENTRY_IDS: Final[str] = f"{ROOT}:entry_ids"  # set of registered ids, the listing index
ARTIFACTS: Final[str] = f"{ROOT}:artifact"
