#!/usr/bin/env python3
"""
Unit tests for track_matcher.py - scoring of Spotify search results against
parsed video titles.
"""

import unittest
from unittest.mock import Mock
import sys
import os

import requests
from spotipy.exceptions import SpotifyException
from spotipy.oauth2 import SpotifyOauthError

# Add the script directory to the Python path
script_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, script_dir)

from track_matcher import MatchCandidate, ScoredCandidate, TrackMatcher, score_candidate, select_best_match


def candidate(uri, name, *artists):
    return MatchCandidate(uri=uri, name=name, artists=tuple(artists))


class TestScoreCandidate(unittest.TestCase):
    """Test the per-result scoring rules."""

    def test_artist_and_title_match(self):
        scored = score_candidate("billie eilish", "bury a friend",
                                 candidate("spotify:track:1", "bury a friend", "Billie Eilish"))
        self.assertEqual(scored.artist_score, 2)
        # full title overlap (2) + first two words "bury a" (1)
        self.assertEqual(scored.title_score, 3)
        self.assertEqual(scored.score, 5)

    def test_symmetric_substring_on_artist(self):
        # Target artist longer than the result artist
        scored = score_candidate("drake feat rihanna", "too good",
                                 candidate("u", "Too Good", "Drake"))
        self.assertEqual(scored.artist_score, 2)

        # Result artist longer than the target artist
        scored = score_candidate("drake", "too good",
                                 candidate("u", "Too Good", "Drake & Future"))
        self.assertEqual(scored.artist_score, 2)

    def test_any_contributing_artist_counts(self):
        scored = score_candidate("rihanna", "too good",
                                 candidate("u", "Too Good", "Drake", "Rihanna"))
        self.assertEqual(scored.artist_score, 2)

    def test_empty_artist_scores_zero(self):
        scored = score_candidate("", "too good", candidate("u", "Too Good", "Drake"))
        self.assertEqual(scored.artist_score, 0)

    def test_remix_suffix_in_result_still_matches_title(self):
        scored = score_candidate("daft punk", "one more time",
                                 candidate("u", "One More Time - Radio Edit", "Daft Punk"))
        self.assertEqual(scored.title_score, 3)

    def test_partial_title_only(self):
        scored = score_candidate("", "hello from the other side",
                                 candidate("u", "Hello From Home", "Somebody"))
        self.assertEqual(scored.artist_score, 0)
        self.assertEqual(scored.title_score, 1)
        self.assertEqual(scored.score, 1)

    def test_empty_song_scores_zero(self):
        scored = score_candidate("adele", "", candidate("u", "Hello", "Someone Else"))
        self.assertEqual(scored.title_score, 0)


class TestSelectBestMatch(unittest.TestCase):
    """Test threshold and tie-breaking."""

    def test_empty(self):
        self.assertIsNone(select_best_match([]))

    def test_score_one_rejected(self):
        weak = ScoredCandidate(candidate("u", "x"), artist_score=0, title_score=1)
        self.assertIsNone(select_best_match([weak]))

    def test_score_two_accepted(self):
        ok = ScoredCandidate(candidate("u", "x"), artist_score=2, title_score=0)
        self.assertIs(select_best_match([ok]), ok)

    def test_ties_keep_first(self):
        first = ScoredCandidate(candidate("first", "x"), 2, 2)
        second = ScoredCandidate(candidate("second", "x"), 2, 2)
        self.assertIs(select_best_match([first, second]), first)

    def test_highest_wins(self):
        low = ScoredCandidate(candidate("low", "x"), 2, 0)
        high = ScoredCandidate(candidate("high", "x"), 2, 3)
        self.assertIs(select_best_match([low, high]), high)


class TestTrackMatcher(unittest.TestCase):
    """Test the full title -> URI matching flow with a mocked search."""

    def setUp(self):
        self.search = Mock()
        self.matcher = TrackMatcher(self.search)

    def test_query_built_from_artist_and_song(self):
        self.search.return_value = [candidate("spotify:track:bury", "bury a friend", "Billie Eilish")]

        uri = self.matcher.match_track("Billie Eilish - bury a friend (Official Audio)")

        self.assertEqual(uri, "spotify:track:bury")
        self.search.assert_called_once_with("Billie Eilish bury a friend", 5)

    def test_query_without_artist(self):
        self.search.return_value = []
        self.matcher.match_track("Just A Song")
        self.search.assert_called_once_with("Just A Song", 5)

    def test_no_results(self):
        self.search.return_value = []
        self.assertIsNone(self.matcher.match_track("Artist - Song"))

    def test_best_of_several_results(self):
        self.search.return_value = [
            candidate("spotify:track:cover", "God's Plan", "Piano Covers Inc"),
            candidate("spotify:track:orig", "God's Plan", "Drake"),
            candidate("spotify:track:other", "Plan B", "Drake"),
        ]
        self.assertEqual(self.matcher.match_track("Drake - God's Plan (Official Video)"), "spotify:track:orig")

    def test_weak_partial_match_rejected(self):
        self.search.return_value = [candidate("spotify:track:x", "Hello From Home", "Somebody")]
        self.assertIsNone(self.matcher.match_track("Hello From The Other Side"))

    def test_title_only_match_accepted(self):
        self.search.return_value = [candidate("spotify:track:x", "Hello From The Other Side", "Somebody")]
        self.assertEqual(self.matcher.match_track("Hello From The Other Side"), "spotify:track:x")

    def test_search_failure_returns_none(self):
        self.search.side_effect = SpotifyException(500, -1, "server error")
        self.assertIsNone(self.matcher.match_track("Artist - Song"))

    def test_token_refresh_failure_returns_none(self):
        self.search.side_effect = SpotifyOauthError("invalid_grant")
        self.assertIsNone(self.matcher.match_track("Artist - Song"))

    def test_network_failure_returns_none(self):
        self.search.side_effect = requests.exceptions.ConnectionError("down")
        self.assertIsNone(self.matcher.match_track("Artist - Song"))

    def test_custom_threshold(self):
        matcher = TrackMatcher(self.search, search_limit=3, threshold=4)
        self.search.return_value = [candidate("spotify:track:x", "Song", "Nobody")]
        self.assertIsNone(matcher.match_track("Artist - Song"))
        self.search.assert_called_once_with("Artist Song", 3)


if __name__ == '__main__':
    unittest.main()
