#!/usr/bin/env python3
"""
Configuration management for the Music Monday Curator.
Handles loading settings from a file, environment variables and the command line.
"""

import os
import json
import logging
from dataclasses import dataclass
from typing import Optional

from constants import CONFIG_FILE, BATCH_SIZES, MATCH_SCORING, RATE_LIMITS
from spotify_utils import resolve_playlist_id

logger = logging.getLogger(__name__)

# Default configuration values
DEFAULT_CONFIG = {
    # Target playlist
    "playlist_id": None,
    "playlist_url": None,

    # Behaviour
    "dry_run": False,
    "show_all_matches": False,
    "article_limit": 10,

    # API settings
    "rate_limit_wait_seconds": RATE_LIMITS['forem_retry_wait'],
    "request_timeout_seconds": RATE_LIMITS['request_timeout'],
    "search_limit": BATCH_SIZES['search_results'],
    "match_threshold": MATCH_SCORING['threshold'],

    # Cache settings
    "cache_enabled": True
}

ENV_MAPPINGS = {
    "PLAYLIST_ID": ("playlist_id", str),
    "PLAYLIST_URL": ("playlist_url", str),
    "DRY_RUN": ("dry_run", bool),
    "SHOW_ALL_MATCHES": ("show_all_matches", bool),
    "ARTICLE_LIMIT": ("article_limit", int),
    "RATE_LIMIT_WAIT": ("rate_limit_wait_seconds", float),
    "MUSICMONDAY_CACHE": ("cache_enabled", bool),
}


@dataclass(frozen=True)
class CuratorSettings:
    """Settings for one curator run, built once at startup."""

    playlist_id: str
    dry_run: bool = False
    show_all_matches: bool = False
    article_limit: int = 10
    search_limit: int = BATCH_SIZES['search_results']
    match_threshold: int = MATCH_SCORING['threshold']
    rate_limit_wait_seconds: float = RATE_LIMITS['forem_retry_wait']
    request_timeout_seconds: float = RATE_LIMITS['request_timeout']
    cache_enabled: bool = True


def _parse_bool(value):
    return str(value).strip().lower() in ('true', '1', 'yes', 'on')


class Config:
    """Configuration manager: defaults < config file < environment < CLI."""

    def __init__(self, config_file=CONFIG_FILE, environ=None):
        self.config_file = config_file
        self.environ = os.environ if environ is None else environ
        self._config = DEFAULT_CONFIG.copy()
        self.load_config()

    def load_config(self):
        """Load configuration from file and environment variables."""
        if self.config_file and os.path.exists(self.config_file):
            try:
                with open(self.config_file, 'r') as f:
                    file_config = json.load(f)
                if isinstance(file_config, dict):
                    self._config.update(file_config)
                else:
                    logger.warning(f"Ignoring config file {self.config_file}: expected a JSON object")
            except (json.JSONDecodeError, IOError) as e:
                logger.warning(f"Could not load config file: {e}")

        self._load_from_env()

    def _load_from_env(self):
        """Load configuration from environment variables."""
        for env_var, (config_key, type_func) in ENV_MAPPINGS.items():
            raw = self.environ.get(env_var)
            if raw is None or raw == "":
                continue
            try:
                if type_func == bool:
                    value = _parse_bool(raw)
                else:
                    value = type_func(raw)
                self._config[config_key] = value
            except (ValueError, TypeError) as e:
                logger.warning(f"Invalid value for {env_var}: {e}")

    def apply_args(self, args):
        """
        Apply command-line overrides.

        Only flags that were actually given override the loaded values.
        """
        if getattr(args, 'playlist', None):
            self._config['playlist_id'] = args.playlist
        if getattr(args, 'dry_run', False):
            self._config['dry_run'] = True
        if getattr(args, 'show_all_matches', False):
            self._config['show_all_matches'] = True
        if getattr(args, 'limit', None) is not None:
            self._config['article_limit'] = args.limit
        if getattr(args, 'no_cache', False):
            self._config['cache_enabled'] = False

    def get(self, key, default=None):
        """Get a configuration value."""
        return self._config.get(key, default)

    def set(self, key, value):
        """Set a configuration value."""
        self._config[key] = value

    def to_settings(self) -> CuratorSettings:
        """
        Freeze the configuration into CuratorSettings.

        Raises:
            ValueError: If no playlist id can be resolved, or the article
                limit is negative
        """
        playlist_id: Optional[str] = resolve_playlist_id(self.get('playlist_id'), self.get('playlist_url'))

        article_limit = int(self.get('article_limit'))
        if article_limit < 0:
            raise ValueError(f"Article limit must be zero or more, got {article_limit}")

        return CuratorSettings(
            playlist_id=playlist_id,
            dry_run=bool(self.get('dry_run')),
            show_all_matches=bool(self.get('show_all_matches')),
            article_limit=article_limit,
            search_limit=int(self.get('search_limit')),
            match_threshold=int(self.get('match_threshold')),
            rate_limit_wait_seconds=float(self.get('rate_limit_wait_seconds')),
            request_timeout_seconds=float(self.get('request_timeout_seconds')),
            cache_enabled=bool(self.get('cache_enabled'))
        )

    @property
    def all_settings(self):
        """Get all configuration settings."""
        return self._config.copy()
