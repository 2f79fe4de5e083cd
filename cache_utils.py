#!/usr/bin/env python3
"""
Utility functions for managing cache files.

Used to remember YouTube titles between runs so repeated links in old
threads don't hit oEmbed again.
"""

import os
import re
import glob
import json
import time
import hashlib
import logging

from constants import CACHE_DIR
from print_utils import print_success, print_error, print_warning

logger = logging.getLogger(__name__)

def sanitize_cache_key(cache_key):
    """Sanitize cache key to be safe for filesystem."""
    # Replace problematic characters with underscores
    sanitized = re.sub(r'[<>:"/\\|?*]', '_', cache_key)
    sanitized = re.sub(r'_+', '_', sanitized)
    if len(sanitized) > 200:
        # Keep first 100 and last 100 chars with hash in middle
        middle_hash = hashlib.md5(sanitized.encode()).hexdigest()[:8]
        sanitized = sanitized[:100] + '_' + middle_hash + '_' + sanitized[-100:]
    return sanitized

def _cache_path(cache_key):
    return os.path.join(CACHE_DIR, f"{sanitize_cache_key(cache_key)}.cache")

def save_to_cache(data, cache_key):
    """Save data to cache. Returns True on success, False (with a warning) otherwise."""
    cache_file = _cache_path(cache_key)

    try:
        os.makedirs(CACHE_DIR, exist_ok=True)
        with open(cache_file, "w") as f:
            json.dump({"timestamp": time.time(), "data": data}, f)
        return True
    except (OSError, TypeError, ValueError) as e:
        print_warning(f"Error saving to cache {cache_key}: {e}")
        return False

def load_from_cache(cache_key, expiration=None):
    """Load data from cache if it exists and is not expired.

    Args:
        cache_key: The cache key to load
        expiration: Optional expiration time in seconds

    Returns:
        Cached data if valid, None otherwise
    """
    cache_file = _cache_path(cache_key)
    if not os.path.exists(cache_file):
        return None

    try:
        with open(cache_file, "r") as f:
            cache_data = json.load(f)

        if not isinstance(cache_data, dict) or "data" not in cache_data:
            raise ValueError("Invalid cache structure")

        if expiration is not None:
            if time.time() - cache_data.get("timestamp", 0) >= expiration:
                return None

        return cache_data.get("data")
    except (ValueError, IOError) as e:
        # Corrupted file: drop it so the next save recreates it
        print_warning(f"Corrupted cache detected for {cache_key}: {e}")
        try:
            os.remove(cache_file)
        except OSError as remove_error:
            logger.debug(f"Could not remove corrupted cache {cache_key}: {remove_error}")
        return None

def clear_cache(cache_name=None):
    """Clear a specific cache or all caches."""
    if cache_name:
        cache_file = _cache_path(cache_name)
        if not os.path.exists(cache_file):
            print_warning(f"Cache not found: {cache_name}")
            return False
        try:
            os.remove(cache_file)
            print_success(f"Cleared cache: {cache_name}")
            return True
        except OSError as e:
            print_error(f"Error clearing cache {cache_name}: {e}")
            return False

    cleared = 0
    for cache_file in glob.glob(os.path.join(CACHE_DIR, "*.cache")):
        try:
            os.remove(cache_file)
            cleared += 1
        except OSError as e:
            print_error(f"Error clearing cache {cache_file}: {e}")

    print_success(f"Cleared {cleared} cache files")
    return cleared > 0
