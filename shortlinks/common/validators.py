"""Validation utilities for shortlinks."""

import re
from typing import Tuple

SLUG_PATTERN = re.compile(r'^[A-Za-z0-9_-]+$')


def is_valid_url(url) -> Tuple[bool, str]:
    """Check that a destination URL was supplied.
    
    Destinations are stored as given; only presence is required.
    
    Args:
        url: The URL to validate
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str) or not url.strip():
        return False, "Destination URL is required"
    return True, ""


def is_valid_slug(slug, max_length: int = 64) -> Tuple[bool, str]:
    """Validate a caller-supplied slug.
    
    Args:
        slug: The slug to validate
        max_length: Maximum length for the slug
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not slug or not isinstance(slug, str):
        return False, "Slug is required"
    
    if len(slug) > max_length:
        return False, f"Slug must be at most {max_length} characters"
    
    if not SLUG_PATTERN.match(slug):
        return False, "Slug can only contain letters, numbers, hyphens, and underscores"
    
    return True, ""


def is_valid_prefix(prefix, max_length: int = 32) -> Tuple[bool, str]:
    """Validate a bulk-generation prefix (empty is allowed).
    
    Args:
        prefix: The prefix to validate
        max_length: Maximum length for the prefix
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if not prefix:
        return True, ""
    
    if not isinstance(prefix, str):
        return False, "Prefix must be a string"
    
    if len(prefix) > max_length:
        return False, f"Prefix must be at most {max_length} characters"
    
    if not SLUG_PATTERN.match(prefix):
        return False, "Prefix can only contain letters, numbers, hyphens, and underscores"
    
    return True, ""
