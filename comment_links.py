#!/usr/bin/env python3
"""
Comment tree flattening and music link extraction.

Forem returns comments as a forest: each comment carries its rendered
`body_html` and a list of `children` replies. This module flattens that
forest into HTML fragments and pulls Spotify track ids and YouTube video
ids out of them.

Author: Matt Y
License: MIT
Version: 1.0.0
"""

from dataclasses import dataclass

from constants import SPOTIFY_TRACK_PATTERN, YOUTUBE_VIDEO_PATTERN

SPOTIFY_TRACK = "spotify_track"
YOUTUBE_VIDEO = "youtube_video"


@dataclass(frozen=True)
class ExtractedLink:
    """A music link found in comment HTML: a Spotify track id or a YouTube video id."""

    kind: str
    value: str

    @property
    def is_direct_track(self):
        return self.kind == SPOTIFY_TRACK


def collect_bodies(comment_tree):
    """
    Flatten a comment tree into its HTML bodies, depth-first pre-order.

    Args:
        comment_tree: None, a single comment dict, or a list of comment dicts

    Returns:
        List of body_html strings, parents before their replies
    """
    if not comment_tree:
        return []

    roots = comment_tree if isinstance(comment_tree, list) else [comment_tree]
    bodies = []
    # Reversed pushes keep siblings in their original order when popped
    stack = list(reversed(roots))

    while stack:
        node = stack.pop()
        if not isinstance(node, dict):
            continue

        html = node.get('body_html')
        if html:
            bodies.append(html)

        children = node.get('children') or []
        stack.extend(reversed(children))

    return bodies


def extract_spotify_track_ids(html, pattern=SPOTIFY_TRACK_PATTERN):
    """Return every Spotify track id linked or embedded in the HTML, in order."""
    if not html or not isinstance(html, str):
        return []
    return pattern.findall(html)


def extract_youtube_video_ids(html, pattern=YOUTUBE_VIDEO_PATTERN):
    """Return every YouTube video id (watch, embed or youtu.be links) in the HTML, in order."""
    if not html or not isinstance(html, str):
        return []
    return pattern.findall(html)


def extract_links(html):
    """
    Extract all music links from an HTML fragment as tagged values.

    Direct Spotify tracks come first, then YouTube videos, matching the order
    in which the curator processes them. Duplicates are preserved.
    """
    links = [ExtractedLink(SPOTIFY_TRACK, track_id) for track_id in extract_spotify_track_ids(html)]
    links.extend(ExtractedLink(YOUTUBE_VIDEO, video_id) for video_id in extract_youtube_video_ids(html))
    return links
