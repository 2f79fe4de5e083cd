#!/usr/bin/env python3
"""
YouTube video title lookup through the oEmbed endpoint (no auth required).

A lookup never raises: callers get a TitleLookup telling them whether the
title was found, the video doesn't exist (or has no title), or the request
failed in a way that might succeed on a later run.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from cache_utils import save_to_cache, load_from_cache
from constants import CACHE_EXPIRATION, RATE_LIMITS, YOUTUBE_OEMBED_URL, YOUTUBE_WATCH_URL

logger = logging.getLogger(__name__)

FOUND = "found"
NOT_FOUND = "not_found"
TRANSIENT_FAILURE = "transient_failure"


@dataclass(frozen=True)
class TitleLookup:
    """Outcome of resolving a video id to its display title."""

    status: str
    title: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def found(cls, title):
        return cls(FOUND, title=title)

    @classmethod
    def not_found(cls, error=None):
        return cls(NOT_FOUND, error=error)

    @classmethod
    def transient_failure(cls, error):
        return cls(TRANSIENT_FAILURE, error=error)

    @property
    def is_found(self):
        return self.status == FOUND


class YouTubeTitleResolver:
    """Resolves YouTube video ids to titles, caching the ones it finds."""

    def __init__(self, session=None, timeout=RATE_LIMITS['request_timeout'], use_cache=True):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.use_cache = use_cache
        self.cache_expiration = CACHE_EXPIRATION['external']

    def resolve(self, video_id):
        """
        Look up the title of a YouTube video.

        Args:
            video_id: The id from a watch, embed or youtu.be link

        Returns:
            TitleLookup
        """
        cache_key = f"youtube_title_{video_id}"
        if self.use_cache:
            cached_title = load_from_cache(cache_key, self.cache_expiration)
            if cached_title:
                return TitleLookup.found(cached_title)

        lookup = self._fetch(video_id)

        if lookup.is_found:
            if self.use_cache:
                save_to_cache(lookup.title, cache_key)
        elif lookup.status == TRANSIENT_FAILURE:
            logger.warning(f"Failed to fetch YouTube title for {video_id}: {lookup.error}")
        else:
            logger.debug(f"No YouTube title for {video_id}: {lookup.error}")

        return lookup

    def resolve_title(self, video_id):
        """Return the video title, or None when it couldn't be resolved."""
        lookup = self.resolve(video_id)
        return lookup.title if lookup.is_found else None

    def _fetch(self, video_id):
        params = {
            'url': YOUTUBE_WATCH_URL.format(video_id=video_id),
            'format': 'json'
        }

        try:
            response = self.session.get(YOUTUBE_OEMBED_URL, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            return TitleLookup.transient_failure(f"Request failed: {e}")

        if response.status_code == 429 or response.status_code >= 500:
            return TitleLookup.transient_failure(f"HTTP {response.status_code}")
        if response.status_code != 200:
            # 400/401/404: removed, private or non-embeddable video
            return TitleLookup.not_found(f"HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError:
            return TitleLookup.not_found("Invalid JSON response from oEmbed")

        title = data.get('title') if isinstance(data, dict) else None
        if not title:
            return TitleLookup.not_found("Response has no title")
        return TitleLookup.found(title)
