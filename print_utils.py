#!/usr/bin/env python3
"""
Console reporting for curator runs.

Every line the curator shows the user goes through these helpers so runs
read the same locally and in CI logs. Kept free of project imports so any
module can use them.

Author: Matt Y
License: MIT
Version: 1.0.0
"""

import colorama
from colorama import Fore, Style

colorama.init(autoreset=True)

HEADER_WIDTH = 50
MATCH_PREFIX = "  → "

# Message kind -> colour
STYLES = {
    'success': Fore.GREEN,
    'error': Fore.RED,
    'warning': Fore.YELLOW,
    'info': Fore.BLUE,
    'match': Fore.WHITE,
}

def _emit(kind, text):
    print(f"{STYLES[kind]}{text}{Style.RESET_ALL}")

def print_success(text):
    """New tracks and completed steps."""
    _emit('success', text)

def print_error(text):
    _emit('error', text)

def print_warning(text):
    """Recoverable problems: rate limits, skipped comments, cache trouble."""
    _emit('warning', text)

def print_info(text):
    _emit('info', text)

def print_header(text, width=HEADER_WIDTH):
    """Print a run or section title between two cyan rules."""
    rule = "=" * width
    print(f"\n{Fore.CYAN}{Style.BRIGHT}{rule}")
    print(f"{Fore.CYAN}{Style.BRIGHT}{text}")
    print(f"{Fore.CYAN}{Style.BRIGHT}{rule}{Style.RESET_ALL}")

def print_match(message, indent=True):
    """
    Print a per-link result line. Indented lines sit under the
    "YouTube video: ..." line they belong to.
    """
    _emit('match', f"{MATCH_PREFIX if indent else ''}{message}")
