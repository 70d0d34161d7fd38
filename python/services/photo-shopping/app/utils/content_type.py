"""
Content-Type detection for uploaded photos.
"""

import mimetypes
from typing import Optional


def detect_content_type(filename: Optional[str], provided_type: Optional[str] = None) -> str:
    """
    Detect Content-Type for an uploaded file.

    Falls back to the filename extension when the client sent no type or a generic one,
    and to 'application/octet-stream' as last resort.

    Examples:
        >>> detect_content_type("photo.jpg")
        'image/jpeg'

        >>> detect_content_type("photo.png", "image/png")
        'image/png'

        >>> detect_content_type("", None)
        'application/octet-stream'
    """
    # If client provided a specific type (not generic), use it
    if provided_type and provided_type != "application/octet-stream":
        return provided_type

    guessed_type = None
    if filename:
        guessed_type, _ = mimetypes.guess_type(filename)

    return guessed_type or provided_type or "application/octet-stream"
