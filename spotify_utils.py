#!/usr/bin/env python3
"""
Shared utilities for the Spotify side of the curator: authentication from a
stored refresh token, playlist membership, catalog search and adding tracks.
"""

import time
import logging

import spotipy
from spotipy.cache_handler import MemoryCacheHandler
from spotipy.oauth2 import SpotifyOAuth

from print_utils import print_success, print_info
from constants import BATCH_SIZES, ERROR_MESSAGES, PLAYLIST_URL_PATTERN, SPOTIFY_SCOPES
from track_matcher import MatchCandidate
from tqdm_utils import create_progress_bar, update_progress_bar, close_progress_bar

# Initialize logger
logger = logging.getLogger(__name__)

def create_auth_manager(client_id, client_secret, redirect_uri, scopes=None):
    """
    Build a SpotifyOAuth manager that keeps tokens in memory only.

    The curator runs unattended, so nothing is written to a token cache file
    and no browser is opened.
    """
    if scopes is None:
        scopes = SPOTIFY_SCOPES['curate']

    return SpotifyOAuth(
        client_id=client_id,
        client_secret=client_secret,
        redirect_uri=redirect_uri,
        scope=" ".join(scopes),
        open_browser=False,
        cache_handler=MemoryCacheHandler()
    )

def create_spotify_client(client_id, client_secret, redirect_uri, refresh_token, scopes=None):
    """
    Create an authenticated Spotify client by exchanging a refresh token.

    Args:
        client_id: Spotify app client id
        client_secret: Spotify app client secret
        redirect_uri: Redirect URI registered for the app
        refresh_token: Token produced once by setup_auth.py
        scopes: Optional list of scopes (defaults to playlist modification)

    Returns:
        spotipy.Spotify instance

    Raises:
        ValueError: If credentials or the refresh token are missing
        spotipy.SpotifyOauthError: If the token refresh is rejected
    """
    if not client_id or not client_secret:
        raise ValueError(ERROR_MESSAGES['missing_credentials'])
    if not refresh_token:
        raise ValueError(ERROR_MESSAGES['missing_refresh_token'])

    auth_manager = create_auth_manager(client_id, client_secret, redirect_uri, scopes)
    # Seeds the in-memory cache; spotipy refreshes again on expiry
    auth_manager.refresh_access_token(refresh_token)

    return spotipy.Spotify(
        auth_manager=auth_manager,
        requests_timeout=30,
        retries=3,
        backoff_factor=0.3
    )

def playlist_id_from_url(url):
    """Extract the playlist id from an open.spotify.com playlist URL, or None."""
    if not url:
        return None
    match = PLAYLIST_URL_PATTERN.search(url)
    return match.group(1) if match else None

def resolve_playlist_id(playlist_id=None, playlist_url=None):
    """
    Resolve the target playlist from an explicit id or a playlist URL.

    An argument that itself looks like a playlist URL is accepted as well.

    Raises:
        ValueError: If neither yields an id
    """
    if playlist_id:
        return playlist_id_from_url(playlist_id) or playlist_id

    pid = playlist_id_from_url(playlist_url)
    if not pid:
        raise ValueError(ERROR_MESSAGES['missing_playlist'])
    return pid

def fetch_existing_track_uris(sp, playlist_id, show_progress=True):
    """
    Fetch every track URI currently in a playlist.

    Follows the `next` cursor until it is absent; the set is only returned
    once all pages have been read. Errors propagate to the caller.

    Args:
        sp: Spotify client
        playlist_id: Playlist ID
        show_progress: Whether to show a progress bar

    Returns:
        Set of track URIs
    """
    uris = set()

    results = sp.playlist_items(
        playlist_id,
        fields="items(track(uri)),next,total",
        limit=BATCH_SIZES['playlist_items'],
        additional_types=('track',)
    )
    progress_bar = create_progress_bar(
        total=results.get('total'),
        desc="Fetching playlist tracks",
        unit="track",
        enabled=show_progress
    )

    try:
        while True:
            items = results.get('items') or []
            for item in items:
                track = (item or {}).get('track')
                if track and track.get('uri'):
                    uris.add(track['uri'])
            update_progress_bar(progress_bar, len(items))

            if not results.get('next'):
                break
            time.sleep(0.05)  # Rate limiting (20 req/s)
            results = sp.next(results)
            if results is None:
                break
    finally:
        close_progress_bar(progress_bar)

    return uris

def search_tracks(sp, query, limit=BATCH_SIZES['search_results']):
    """
    Search the Spotify catalog for tracks.

    Returns:
        List of MatchCandidate in Spotify's result order
    """
    results = sp.search(q=query, type='track', limit=limit)
    tracks = ((results or {}).get('tracks') or {}).get('items') or []

    candidates = []
    for track in tracks:
        if not track or not track.get('uri'):
            continue
        candidates.append(MatchCandidate(
            uri=track['uri'],
            name=track.get('name') or '',
            artists=tuple((artist or {}).get('name') or '' for artist in track.get('artists') or [])
        ))
    return candidates

def add_tracks_to_playlist(sp, playlist_id, uris, dry_run=False):
    """
    Add track URIs to a playlist, or just list them in dry-run mode.

    Spotify accepts at most 100 URIs per request, so larger lists are sent
    in batches. Errors propagate to the caller; when a later batch fails,
    the URIs already committed by earlier batches are logged first.

    Returns:
        Number of tracks added (0 for dry runs and empty input)
    """
    if not uris:
        return 0

    if dry_run:
        print_info(f"DRY_RUN: Would add {len(uris)} tracks to playlist {playlist_id}:")
        for uri in uris:
            print(f"  - {uri}")
        return 0

    batch_size = BATCH_SIZES['playlist_items']
    for i in range(0, len(uris), batch_size):
        batch = uris[i:i + batch_size]
        try:
            sp.playlist_add_items(playlist_id, batch)
        except Exception:
            # Earlier batches are already in the playlist at this point
            logger.error(f"Adding tracks to {playlist_id} failed after {i} of {len(uris)} were committed: "
                         f"{uris[:i]}")
            raise
        logger.debug(f"Added batch {i // batch_size + 1} ({len(batch)} tracks) to {playlist_id}")

    print_success(f"Added {len(uris)} tracks to playlist {playlist_id}.")
    return len(uris)
