#!/usr/bin/env python3
"""
Centralized constants for the Music Monday Curator project.
Contains shared values used across multiple scripts.
"""

import os
import re
from pathlib import Path

# Application metadata
APP_NAME = "Music Monday Curator"
APP_VERSION = "1.0.0"

# Directory paths
CONFIG_DIR = os.path.join(str(Path.home()), ".musicmonday-curator")
CACHE_DIR = os.path.join(CONFIG_DIR, "cache")
CONFIG_FILE = os.path.join(CONFIG_DIR, "config.json")
CREDENTIALS_FILE = os.path.join(CONFIG_DIR, "credentials.json")

# Cache expiration times (in seconds)
CACHE_EXPIRATION = {
    'external': 30 * 24 * 60 * 60        # 30 days (YouTube titles rarely change)
}

# Forem endpoints
FOREM_API_BASE = "https://music.forem.com/api"
FOREM_ARTICLES_URL = f"{FOREM_API_BASE}/articles?username=musicfrorem&tag=musicmonday"
FOREM_COMMENTS_URL = f"{FOREM_API_BASE}/comments"

# YouTube oEmbed (no auth required)
YOUTUBE_OEMBED_URL = "https://www.youtube.com/oembed"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

# Spotify
SPOTIFY_TRACK_URI = "spotify:track:{track_id}"
DEFAULT_REDIRECT_URI = "http://127.0.0.1:3000/callback"
SPOTIFY_SCOPES = {
    'curate': [
        "playlist-modify-public",
        "playlist-modify-private"
    ]
}

# Link patterns found in comment HTML
SPOTIFY_TRACK_PATTERN = re.compile(r'https?://open\.spotify\.com/(?:track|embed/track)/([a-zA-Z0-9]+)')
YOUTUBE_VIDEO_PATTERN = re.compile(r'https?://(?:www\.)?(?:youtube\.com/(?:watch\?v=|embed/)|youtu\.be/)([\w-]+)')
PLAYLIST_URL_PATTERN = re.compile(r'open\.spotify\.com/playlist/([a-zA-Z0-9]+)')

# API batch sizes and limits
BATCH_SIZES = {
    'playlist_items': 100,        # Max items per playlist page / add call
    'search_results': 5           # Candidates considered per catalog search
}

# Rate limiting delays (in seconds)
RATE_LIMITS = {
    'forem_retry_wait': 2,        # Wait before the single retry after a 429
    'request_timeout': 10         # Timeout for Forem and oEmbed requests
}

# Catalog match scoring. Heuristic values kept as-is; changing them alters
# which tracks get added.
MATCH_SCORING = {
    'artist_match': 2,
    'title_match': 2,
    'partial_title_match': 1,
    'threshold': 2                # Minimum "weak match" score
}

# Error messages
ERROR_MESSAGES = {
    'missing_playlist': "PLAYLIST_ID missing. Set PLAYLIST_ID or PLAYLIST_URL in env, or pass --playlist.",
    'missing_credentials': "Spotify credentials missing. Set SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET.",
    'missing_refresh_token': "SPOTIFY_REFRESH_TOKEN missing. Run setup_auth.py to create one."
}

if __name__ == "__main__":
    print(f"{APP_NAME} v{APP_VERSION}")
    print(f"Configuration directory: {CONFIG_DIR}")
    print(f"Available cache expirations: {list(CACHE_EXPIRATION.keys())}")
