#!/usr/bin/env python3
"""
One-time Spotify authorization for the Music Monday Curator.

Prints the authorization URL, exchanges the returned code for a refresh
token, and prints it (or saves it with --save). The curator then uses the
refresh token on every run without a browser.

Author: Matt Y
License: MIT
Version: 1.0.0
"""

import os
import sys
import argparse

# Add the script directory to the Python path
script_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, script_dir)

from spotipy.oauth2 import SpotifyOauthError

from constants import ERROR_MESSAGES
from credentials_manager import get_spotify_credentials, save_refresh_token
from print_utils import print_success, print_error, print_info, print_header
from spotify_utils import create_auth_manager


def exchange_code(auth_manager, response):
    """
    Exchange an authorization code for tokens.

    Args:
        auth_manager: SpotifyOAuth from create_auth_manager
        response: The `code` value, or the full redirect URL it came back on

    Returns:
        Token info dict with 'access_token' and 'refresh_token'
    """
    code = auth_manager.parse_response_code(response)
    return auth_manager.get_access_token(code, check_cache=False)


def main(argv=None):
    """Main function to run the script. Returns the process exit code."""
    parser = argparse.ArgumentParser(description="Create a Spotify refresh token for the curator")
    parser.add_argument("--save", action="store_true", help="Store the refresh token in the credentials file")
    args = parser.parse_args(argv)

    client_id, client_secret, redirect_uri = get_spotify_credentials()
    if not client_id or not client_secret:
        print_error(ERROR_MESSAGES['missing_credentials'])
        return 1

    auth_manager = create_auth_manager(client_id, client_secret, redirect_uri)

    print_header("Spotify authorization")
    print(f"Authorize the app by visiting:\n\n{auth_manager.get_authorize_url()}\n")

    try:
        response = input("After authorizing, paste the returned `code` parameter (or the full redirect URL) here: ").strip()
    except EOFError:
        response = ""

    if not response:
        print_error("No code provided. Exiting.")
        return 1

    try:
        token_info = exchange_code(auth_manager, response)
    except SpotifyOauthError as e:
        print_error(f"Token exchange failed: {e}")
        return 1

    refresh_token = (token_info or {}).get('refresh_token')
    if not refresh_token:
        print_error("Token exchange succeeded but no refresh token was returned.")
        return 1

    print_success(f"\nSuccess! Your refresh_token:\n{refresh_token}\n")

    if args.save:
        save_refresh_token(refresh_token)
        print_success("Refresh token saved to the credentials file.")
    else:
        print_info("Store SPOTIFY_REFRESH_TOKEN in your environment or CI secrets, or re-run with --save.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
