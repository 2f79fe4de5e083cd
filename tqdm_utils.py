#!/usr/bin/env python3
"""
Utilities for consistent progress bar formatting.

This module provides functions to create, update, and close progress bars using tqdm.

Author: Matt Y
License: MIT
Version: 1.0.0
"""

from tqdm import tqdm

def create_progress_bar(total, desc=None, unit=None, enabled=True):
    """
    Create a consistently formatted progress bar.

    Args:
        total: Total number of items (None when the size is unknown)
        desc: Description for the progress bar
        unit: Unit name for the items being processed
        enabled: When False the bar is created disabled and prints nothing

    Returns:
        A tqdm progress bar instance
    """
    if unit is None:
        unit = "item"

    return tqdm(
        total=total,
        desc=desc,
        unit=str(unit),
        bar_format='{l_bar}{bar:30}{r_bar}{bar:-30b}',
        ncols=100,
        leave=False,
        disable=not enabled
    )

def update_progress_bar(progress_bar, n=1):
    """Update a progress bar safely (None is ignored)."""
    if progress_bar is not None:
        progress_bar.update(n)

def close_progress_bar(progress_bar):
    """Close a progress bar safely (None is ignored)."""
    if progress_bar is not None:
        progress_bar.close()
