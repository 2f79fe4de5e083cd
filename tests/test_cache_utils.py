#!/usr/bin/env python3
"""
Unit tests for cache_utils module.
"""

import unittest
import tempfile
import os
import shutil
from unittest.mock import patch
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cache_utils import save_to_cache, load_from_cache, clear_cache, sanitize_cache_key


class TestCacheUtils(unittest.TestCase):

    def setUp(self):
        """Set up test environment with temporary cache directory."""
        self.test_cache_dir = tempfile.mkdtemp()
        self.cache_dir_patcher = patch('cache_utils.CACHE_DIR', self.test_cache_dir)
        self.cache_dir_patcher.start()

    def tearDown(self):
        """Clean up test environment."""
        self.cache_dir_patcher.stop()
        if os.path.exists(self.test_cache_dir):
            shutil.rmtree(self.test_cache_dir)

    def test_save_and_load_cache(self):
        """Test basic save and load functionality."""
        self.assertTrue(save_to_cache("Drake - God's Plan", "youtube_title_xpVfcZ0ZcFM"))
        self.assertEqual(load_from_cache("youtube_title_xpVfcZ0ZcFM", 3600), "Drake - God's Plan")

    def test_save_when_cache_dir_cannot_be_created(self):
        """A file where the cache directory should be makes the save fail softly."""
        blocker = os.path.join(self.test_cache_dir, "not_a_dir")
        with open(blocker, "w") as f:
            f.write("")

        with patch('cache_utils.CACHE_DIR', os.path.join(blocker, "cache")):
            with patch('cache_utils.print_warning') as mock_warning:
                self.assertFalse(save_to_cache("title", "youtube_title_abc"))
                self.assertIsNone(load_from_cache("youtube_title_abc", 3600))

        mock_warning.assert_called_once()

    def test_cache_expiration(self):
        """Test that expired cache returns None."""
        save_to_cache({"expired": "data"}, "expired_cache")
        self.assertIsNone(load_from_cache("expired_cache", 0))

    def test_no_expiration(self):
        save_to_cache([1, 2, 3], "forever")
        self.assertEqual(load_from_cache("forever"), [1, 2, 3])

    def test_nonexistent_cache(self):
        """Test loading non-existent cache returns None."""
        self.assertIsNone(load_from_cache("nonexistent_cache", 3600))

    def test_corrupted_cache_is_removed(self):
        save_to_cache("ok", "corrupt_me")
        cache_file = os.path.join(self.test_cache_dir, "corrupt_me.cache")
        with open(cache_file, "w") as f:
            f.write("{not json")

        self.assertIsNone(load_from_cache("corrupt_me", 3600))
        self.assertFalse(os.path.exists(cache_file))

    def test_clear_specific_cache(self):
        """Test clearing a specific cache file."""
        save_to_cache({"to_be_cleared": "data"}, "clear_test")
        self.assertTrue(clear_cache("clear_test"))
        self.assertIsNone(load_from_cache("clear_test", 3600))

    def test_clear_missing_cache(self):
        self.assertFalse(clear_cache("never_saved"))

    def test_clear_all_caches(self):
        """Test clearing all cache files."""
        save_to_cache({"data1": "value1"}, "cache1")
        save_to_cache({"data2": "value2"}, "cache2")

        self.assertTrue(clear_cache())

        self.assertIsNone(load_from_cache("cache1", 3600))
        self.assertIsNone(load_from_cache("cache2", 3600))

    def test_sanitize_cache_key(self):
        self.assertEqual(sanitize_cache_key('a/b:c"d'), 'a_b_c_d')
        long_key = "x" * 300
        self.assertLessEqual(len(sanitize_cache_key(long_key)), 210)


if __name__ == '__main__':
    unittest.main()
