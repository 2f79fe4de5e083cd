#!/usr/bin/env python3
"""
Utility functions for managing Spotify API credentials.

Credentials come from environment variables first (how the scheduled job
runs), then from a JSON file in the user's home directory that setup_auth.py
can write.

Author: Matt Y
License: MIT
Version: 1.0.0
"""

import os
import json
import stat
import logging

from constants import CONFIG_DIR, CREDENTIALS_FILE, DEFAULT_REDIRECT_URI

logger = logging.getLogger(__name__)

def _load_credentials_file():
    """Return the stored credentials dict, or {} if there is no usable file."""
    if not os.path.exists(CREDENTIALS_FILE):
        return {}

    try:
        with open(CREDENTIALS_FILE, "r") as f:
            credentials = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Error loading credentials file: {e}")
        return {}

    return credentials if isinstance(credentials, dict) else {}

def _lookup(name, stored, default=""):
    return os.environ.get(name) or stored.get(name) or default

def get_spotify_credentials():
    """
    Get Spotify API credentials.

    Returns:
        tuple: (client_id, client_secret, redirect_uri); id and secret are
        empty strings when not configured anywhere
    """
    stored = _load_credentials_file()

    client_id = _lookup("SPOTIFY_CLIENT_ID", stored)
    client_secret = _lookup("SPOTIFY_CLIENT_SECRET", stored)
    redirect_uri = _lookup("SPOTIFY_REDIRECT_URI", stored, DEFAULT_REDIRECT_URI)

    return client_id, client_secret, redirect_uri

def get_refresh_token():
    """Get the Spotify refresh token, or an empty string if none is configured."""
    return _lookup("SPOTIFY_REFRESH_TOKEN", _load_credentials_file())

def save_credentials(updates):
    """
    Merge values into the credentials file with owner-only permissions.

    Args:
        updates: dict of credential names to values
    """
    os.makedirs(CONFIG_DIR, exist_ok=True)

    credentials = _load_credentials_file()
    credentials.update(updates)

    # Set secure file permissions before writing
    old_umask = os.umask(0o077)
    try:
        with open(CREDENTIALS_FILE, "w") as f:
            json.dump(credentials, f, indent=2)
        os.chmod(CREDENTIALS_FILE, stat.S_IRUSR | stat.S_IWUSR)
    finally:
        os.umask(old_umask)

def save_refresh_token(refresh_token):
    """Store the refresh token produced by the one-time authorization."""
    save_credentials({"SPOTIFY_REFRESH_TOKEN": refresh_token})
