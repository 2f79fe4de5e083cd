#!/usr/bin/env python3
"""
Music Monday Curator

Collects the music people share in the comments of the #musicmonday threads
on music.forem.com and adds it to a Spotify playlist.

Features:
- Direct Spotify track links and embeds are added as-is
- YouTube links are resolved to their title and matched against Spotify search
- Tracks already in the playlist (or found twice in one run) are skipped
- Dry-run mode to preview additions without touching the playlist

Usage:
    python musicmonday_curator.py --playlist https://open.spotify.com/playlist/<id> --dry-run

Environment:
    SPOTIFY_CLIENT_ID, SPOTIFY_CLIENT_SECRET, SPOTIFY_REFRESH_TOKEN (see setup_auth.py)
    PLAYLIST_ID or PLAYLIST_URL, DRY_RUN=1, SHOW_ALL_MATCHES=1

Author: Matt Y
License: MIT
Version: 1.0.0
"""

import os
import sys
import logging
import argparse

# Add the script directory to the Python path
script_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, script_dir)

from cache_utils import clear_cache
from comment_links import collect_bodies, extract_links
from config import Config
from constants import APP_NAME, APP_VERSION, SPOTIFY_TRACK_URI
from credentials_manager import get_spotify_credentials, get_refresh_token
from forem_client import ForemClient
from print_utils import print_success, print_error, print_warning, print_info, print_header, print_match
from spotify_utils import create_spotify_client, fetch_existing_track_uris, search_tracks, add_tracks_to_playlist
from track_matcher import TrackMatcher
from youtube_titles import YouTubeTitleResolver, TRANSIENT_FAILURE

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger(__name__)


def collect_new_track_uris(articles, existing_uris, forem, resolver, matcher, show_all_matches=False):
    """
    Find the Spotify tracks mentioned in the articles' comments that aren't
    in the playlist yet.

    Args:
        articles: Forem article dicts, processed in order
        existing_uris: Complete set of URIs already in the playlist
        forem: ForemClient used to fetch each article's comments
        resolver: YouTubeTitleResolver for video links
        matcher: TrackMatcher for resolved video titles
        show_all_matches: Also report matches that are already in the playlist

    Returns:
        List of new track URIs, unique, in the order they were first found
    """
    new_uris = []
    seen = set()

    def consider(uri, label, indent):
        if uri in existing_uris:
            if show_all_matches:
                print_match(f"{label} (already in playlist): {uri}", indent=indent)
            return
        if uri in seen:
            logger.debug(f"Skipping {uri}: already collected this run")
            return
        seen.add(uri)
        new_uris.append(uri)
        if indent:
            print_match(f"{label}: {uri}")
        else:
            print_success(f"{label}: {uri}")

    for article in articles:
        article_id = article.get('id')
        logger.debug(f"Processing article {article_id}: {article.get('title', '')}")

        comments = forem.fetch_comments(article_id)
        for html in collect_bodies(comments):
            # Direct Spotify tracks come first, then YouTube videos
            for link in extract_links(html):
                if link.is_direct_track:
                    uri = SPOTIFY_TRACK_URI.format(track_id=link.value)
                    consider(uri, "Found Spotify track", indent=False)
                    continue

                video_id = link.value
                lookup = resolver.resolve(video_id)
                if not lookup.is_found:
                    if lookup.status == TRANSIENT_FAILURE:
                        logger.debug(f"Skipping YouTube video {video_id}: {lookup.error}")
                    continue

                print_info(f"YouTube video: {lookup.title}")
                uri = matcher.match_track(lookup.title)
                if uri is None:
                    print_match("No Spotify match found")
                    continue
                consider(uri, "Matched Spotify", indent=True)

    return new_uris


def run_curator(settings, sp, forem, resolver):
    """
    Run one curation pass against the configured playlist.

    The playlist membership is read in full before any comment is looked at,
    and tracks are only added once every article has been processed.

    Returns:
        List of URIs that were (or in dry-run mode would be) added
    """
    existing_uris = fetch_existing_track_uris(sp, settings.playlist_id)
    print_info(f"Existing tracks in playlist: {len(existing_uris)}")

    articles = forem.fetch_recent_articles(limit=settings.article_limit)
    print_info(f"Fetched {len(articles)} recent articles.")

    matcher = TrackMatcher(
        search=lambda query, limit: search_tracks(sp, query, limit),
        search_limit=settings.search_limit,
        threshold=settings.match_threshold
    )

    new_uris = collect_new_track_uris(
        articles,
        existing_uris,
        forem,
        resolver,
        matcher,
        show_all_matches=settings.show_all_matches
    )
    print_info(f"Collected {len(new_uris)} new track URIs.")

    add_tracks_to_playlist(sp, settings.playlist_id, new_uris, dry_run=settings.dry_run)
    return new_uris


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Add music shared in #musicmonday comments to a Spotify playlist")
    parser.add_argument("--playlist", help="Target playlist ID or open.spotify.com playlist URL (default: PLAYLIST_ID / PLAYLIST_URL)")
    parser.add_argument("--dry-run", action="store_true", help="Show the tracks that would be added without modifying the playlist")
    parser.add_argument("--show-all-matches", action="store_true", help="Also report matches that are already in the playlist")
    parser.add_argument("--limit", type=int, help="Number of recent articles to scan (default: 10)")
    parser.add_argument("--no-cache", action="store_true", help="Don't read or write the YouTube title cache")
    parser.add_argument("--clear-cache", action="store_true", help="Clear cached YouTube titles and exit")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    """Main function to run the script. Returns the process exit code."""
    args = parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Debug logging enabled")

    if args.clear_cache:
        clear_cache()
        return 0

    print_header(f"{APP_NAME} v{APP_VERSION}")

    try:
        config = Config()
        config.apply_args(args)
        settings = config.to_settings()

        if settings.dry_run:
            print_warning("Dry run: the playlist will not be modified.")

        client_id, client_secret, redirect_uri = get_spotify_credentials()
        sp = create_spotify_client(client_id, client_secret, redirect_uri, get_refresh_token())

        forem = ForemClient(
            rate_limit_wait=settings.rate_limit_wait_seconds,
            timeout=settings.request_timeout_seconds
        )
        resolver = YouTubeTitleResolver(
            timeout=settings.request_timeout_seconds,
            use_cache=settings.cache_enabled
        )

        run_curator(settings, sp, forem, resolver)
    except KeyboardInterrupt:
        print_warning("\nInterrupted.")
        return 130
    except Exception as e:
        logger.exception("Curator run failed")
        print_error(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
