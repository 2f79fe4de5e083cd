#!/usr/bin/env python3
"""
Match free-text video titles to Spotify tracks.

The title is split into (artist, song), Spotify is searched with both, and
each of the top results is scored by loose substring overlap on normalized
text:

    artist match   +2  (result artist contains target artist, or vice versa)
    title match    +2  (result name contains target song, or vice versa)
    partial title  +1  (first two words of the song appear in the result name)

The highest score wins (first result on ties). Anything below the weak
match threshold of 2 is rejected, so a bare partial-title hit never counts.

Author: Matt Y
License: MIT
Version: 1.0.0
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import requests
from spotipy.exceptions import SpotifyException
from spotipy.oauth2 import SpotifyOauthError

from constants import BATCH_SIZES, MATCH_SCORING
from text_utils import normalize, parse_title_artist

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchCandidate:
    """A Spotify search result."""

    uri: str
    name: str
    artists: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ScoredCandidate:
    candidate: MatchCandidate
    artist_score: int
    title_score: int

    @property
    def score(self):
        return self.artist_score + self.title_score


def _overlaps(target, value):
    """Symmetric substring check used for both artist and title matching."""
    return target in value or value in target


def score_candidate(target_artist, target_song, candidate, scoring=MATCH_SCORING):
    """
    Score a search result against a normalized (artist, song) target.

    Args:
        target_artist: Normalized artist, "" when the title had none
        target_song: Normalized song
        candidate: MatchCandidate from the search
        scoring: Points per rule (see MATCH_SCORING)

    Returns:
        ScoredCandidate
    """
    name = normalize(candidate.name)
    artists = [normalize(artist) for artist in candidate.artists]

    artist_score = 0
    if target_artist and any(_overlaps(target_artist, artist) for artist in artists):
        artist_score = scoring['artist_match']

    title_score = 0
    if target_song and _overlaps(target_song, name):
        title_score = scoring['title_match']

    partial_title = ' '.join(target_song.split()[:2])
    if partial_title and partial_title in name:
        title_score += scoring['partial_title_match']

    return ScoredCandidate(candidate, artist_score, title_score)


def select_best_match(scored, threshold=MATCH_SCORING['threshold']):
    """
    Pick the highest scoring candidate, keeping the earliest one on ties.

    Returns:
        The winning ScoredCandidate, or None if nothing reaches the threshold
    """
    if not scored:
        return None
    # max() returns the first maximal element, so search order breaks ties
    best = max(scored, key=lambda s: s.score)
    if best.score < threshold:
        return None
    return best


class TrackMatcher:
    """
    Finds the Spotify track URI for a video title.

    Args:
        search: Callable (query, limit) -> list of MatchCandidate
        search_limit: Number of results to consider
        threshold: Minimum accepted score
    """

    def __init__(self, search, search_limit=BATCH_SIZES['search_results'], threshold=MATCH_SCORING['threshold']):
        self.search = search
        self.search_limit = search_limit
        self.threshold = threshold

    def match_track(self, raw_title) -> Optional[str]:
        """Return the URI of the best matching track, or None."""
        artist, song = parse_title_artist(raw_title)
        query = ' '.join(part for part in (artist, song) if part is not None)

        try:
            candidates = self.search(query, self.search_limit)
        except (SpotifyException, SpotifyOauthError, requests.exceptions.RequestException) as e:
            logger.warning(f"Spotify search failed for '{raw_title}': {e}")
            return None

        if not candidates:
            logger.debug(f"No search results for '{query}'")
            return None

        target_artist = normalize(artist or '')
        target_song = normalize(song or '')
        scored = [score_candidate(target_artist, target_song, c) for c in candidates]

        best = select_best_match(scored, self.threshold)
        if best is None:
            logger.debug(f"Best score below {self.threshold} for '{raw_title}'")
            return None

        logger.debug(
            f"Matched '{raw_title}' -> {best.candidate.name} by "
            f"{', '.join(best.candidate.artists)} (score: {best.score})"
        )
        return best.candidate.uri
