"""
Session config file.

A flat JSON object holding the operator's ASP.NET session id. Written by the
configure command and read once at the start of every rip.
"""

import json
import os

from ..core.errors import ConfigMissingError


DEFAULT_CONFIG_PATH = "config.json"
SESSION_KEY = "ASP.NET_SessionId"


def save_session(session_id: str, path: str = DEFAULT_CONFIG_PATH) -> None:
    """Write the session id, replacing any previous config."""
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump({SESSION_KEY: session_id}, f)


def load_session(path: str = DEFAULT_CONFIG_PATH) -> str:
    """
    Read the session id.

    Raises:
        ConfigMissingError: the file is missing, unreadable or has no session id
    """
    if not os.path.exists(path):
        raise ConfigMissingError(f"Config file not found: {path}. Run 'configure' first.")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigMissingError(f"Config file {path} is not valid JSON: {e}") from e

    session_id = data.get(SESSION_KEY) if isinstance(data, dict) else None
    if not session_id:
        raise ConfigMissingError(f"Config file {path} has no {SESSION_KEY}. Run 'configure' first.")
    return session_id
