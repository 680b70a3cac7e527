"""Short-link building utilities."""


def build_short_url(slug: str, base_url: str) -> str:
    """Build the externally visible short link for a slug.
    
    Args:
        slug: The slug
        base_url: Configured base URL (e.g., https://sho.rt)
        
    Returns:
        Complete short link
    """
    return f"{base_url.rstrip('/')}/{slug}"
