"""
Secret masking for configuration summaries.
"""


def mask_secret(value: str, visible_chars: int = 4) -> str:
    """
    Mask a secret, keeping a few characters at both ends.

    Example:
        >>> mask_secret("bdt_0123456789abcdef")
        'bdt_***cdef'
        >>> mask_secret("short")
        '***'
    """
    if not value:
        return ""

    if len(value) <= (visible_chars * 2):
        return "***"

    return f"{value[:visible_chars]}***{value[-visible_chars:]}"
