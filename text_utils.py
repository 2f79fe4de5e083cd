#!/usr/bin/env python3
"""
Text helpers for comparing free-text video titles with Spotify metadata.

Author: Matt Y
License: MIT
Version: 1.0.0
"""

import re

_NON_ALNUM = re.compile(r'[^a-z0-9\s]')
_WHITESPACE = re.compile(r'\s+')
_PARENTHETICAL = re.compile(r'\([^)]*\)')
_BRACKETED = re.compile(r'\[[^\]]*\]')


def normalize(text):
    """
    Canonicalize a string for loose comparison.

    Lower-cases, turns anything that isn't a-z, 0-9 or whitespace into a
    space, collapses whitespace runs and trims.

    Example:
        normalize("Drake - God's Plan (Official Video)")
        -> "drake god s plan official video"
    """
    if not text:
        return ""
    cleaned = _NON_ALNUM.sub(' ', text.lower())
    return _WHITESPACE.sub(' ', cleaned).strip()


def parse_title_artist(title):
    """
    Split a raw video title into an (artist, song) pair.

    Parenthetical and bracketed groups such as "(Official Video)" or
    "[Live]" are dropped first. The remainder is split on '-': the first
    segment is the artist and the rest, joined by a space, is the song.
    Titles with several dashes ("Jay-Z - Song") still split at the first
    one, so the artist comes out as "Jay".

    Args:
        title: Raw title, e.g. "Billie Eilish - bury a friend (Audio)"

    Returns:
        tuple: (artist or None, song)
    """
    cleaned = title or ""
    cleaned = _PARENTHETICAL.sub(' ', cleaned)
    cleaned = _BRACKETED.sub(' ', cleaned)

    # Empty segments ("A -- B", trailing dash) carry no text
    parts = [part.strip() for part in cleaned.split('-')]
    parts = [part for part in parts if part]
    if len(parts) >= 2:
        return parts[0], ' '.join(parts[1:])
    return None, cleaned.strip()
