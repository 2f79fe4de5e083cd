#!/usr/bin/env python3
"""
Forem (music.forem.com) API client for #musicmonday articles and their comments.
"""

import time
import logging

import requests

from constants import FOREM_ARTICLES_URL, FOREM_COMMENTS_URL, RATE_LIMITS
from print_utils import print_warning

logger = logging.getLogger(__name__)


class ForemError(Exception):
    """Raised when the article list can't be fetched."""


class ForemClient:
    """Client for the public Forem articles and comments endpoints."""

    def __init__(self, session=None, articles_url=FOREM_ARTICLES_URL, comments_url=FOREM_COMMENTS_URL,
                 rate_limit_wait=RATE_LIMITS['forem_retry_wait'], timeout=RATE_LIMITS['request_timeout']):
        self.session = session or requests.Session()
        self.articles_url = articles_url
        self.comments_url = comments_url
        self.rate_limit_wait = rate_limit_wait
        self.timeout = timeout

    def fetch_recent_articles(self, limit=10):
        """
        Fetch the most recent #musicmonday articles.

        Args:
            limit: Maximum number of articles to return

        Returns:
            List of article dicts, newest first

        Raises:
            ForemError: If the request fails or returns a non-200 status
        """
        try:
            response = self.session.get(self.articles_url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise ForemError(f"Forem articles fetch failed: {e}") from e

        if response.status_code != 200:
            raise ForemError(f"Forem articles fetch failed: {response.status_code} {response.text}")

        try:
            articles = response.json()
        except ValueError as e:
            raise ForemError(f"Forem articles response is not JSON: {e}") from e

        if not isinstance(articles, list):
            raise ForemError(f"Unexpected Forem articles response: {type(articles).__name__}")
        return articles[:limit]

    def fetch_comments(self, article_id):
        """
        Fetch the comment forest for an article.

        A 429 is retried exactly once after `rate_limit_wait` seconds. Any
        other failure is reported and yields an empty list so the batch
        can carry on with the next article.

        Returns:
            List of top-level comment dicts (each with nested 'children')
        """
        params = {'a_id': article_id}

        try:
            response = self.session.get(self.comments_url, params=params, timeout=self.timeout)
            if response.status_code == 429:
                print_warning(f"Rate limited on article {article_id}, waiting {self.rate_limit_wait} seconds...")
                time.sleep(self.rate_limit_wait)
                response = self.session.get(self.comments_url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            print_warning(f"Forem comments fetch failed (a_id={article_id}): {e}")
            return []

        if response.status_code != 200:
            print_warning(f"Forem comments fetch failed (a_id={article_id}): {response.status_code}")
            logger.debug(f"Forem comments response body: {response.text}")
            return []

        try:
            comments = response.json()
        except ValueError as e:
            print_warning(f"Forem comments response for a_id={article_id} is not JSON: {e}")
            return []

        return comments if isinstance(comments, list) else []
