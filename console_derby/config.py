import json
import os
from importlib import resources

from dotenv import load_dotenv

# Shipped inside the package so installed copies find it too.
CONFIG_RESOURCE = "configs/game_balance.json"

# Load environment variables from .env file
load_dotenv()


def load_config(path=None):
    """
    Reads the balance JSON. With no path, the copy bundled in the package is used.
    Returns None when the file is missing or unreadable; callers then fall back
    to their code defaults.
    """
    source = path or f"console_derby/{CONFIG_RESOURCE}"
    try:
        if path is None:
            text = resources.files("console_derby").joinpath(CONFIG_RESOURCE).read_text(encoding="utf-8")
        else:
            with open(path, 'r', encoding="utf-8") as f:
                text = f.read()
        return json.loads(text)
    except FileNotFoundError:
        print(f"FATAL ERROR: Could not find config file at {source}")
        return None
    except Exception as e:
        print(f"FATAL ERROR: Could not parse config file {source}: {e}")
        return None

# Read at import; get_config() serves every lookup from this dict.
BALANCE_CONFIG = load_config()


def get_config(key_path, default=None):
    """
    Looks up a nested balance value, e.g. get_config('race.field_size.max', 11).
    Missing keys report a warning and return the default.
    """
    if not BALANCE_CONFIG:
        return default

    value = BALANCE_CONFIG
    try:
        for key in key_path.split('.'):
            value = value[key]
    except (KeyError, TypeError):
        print(f"Warning: No balance setting named {key_path}, using {default!r}")
        return default
    return value


def get_env_setting(name, default=None, cast=str):
    """
    Reads a DERBY_* override from the environment (or .env).
    Values that fail to cast are reported and ignored.
    """
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except (TypeError, ValueError):
        print(f"Warning: Ignoring invalid value for {name}: {raw!r}")
        return default
