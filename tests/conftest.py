import os
import tempfile

# settings are loaded at import time; keep them away from the source tree
_SETTINGS_DIR = tempfile.mkdtemp(prefix="print-gateway-tests-")
os.environ.setdefault("PRINT_GATEWAY_SETTINGS", os.path.join(_SETTINGS_DIR, "settings.json"))
os.environ.setdefault("LOG_TO_FILE", "false")
