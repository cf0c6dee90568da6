from os import environ
from pathlib import Path

TOP_LEVEL = Path(__file__).resolve().parent

_CONF_DIR = TOP_LEVEL / "config"
CONFIG_YML = _CONF_DIR / "defaults.yml"

INTROSPECT_PY = TOP_LEVEL / "sandbox" / "introspect.py"


SETTINGS_VAR = "pydyn_settings"


DEBUG = "PYDYN_DEBUG" in environ
