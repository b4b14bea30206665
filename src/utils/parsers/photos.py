"""
Photo URL parsing utilities.

Turn the photo column of a listing export into a short list of URLs a
browser can load. The column is filled by hand or by scripts, so it mixes
JSON arrays, separator-joined lists, local drive paths and share links.
"""

import json
import re
from collections.abc import Iterable

from loguru import logger

photos_log = logger.bind(module="Photos")

MAX_PHOTOS = 10
DEFAULT_THUMBNAIL_WIDTH = 800

DRIVE_THUMBNAIL_URL = "https://drive.google.com/thumbnail"

# Comma before a scheme, semicolon, pipe, newline, or comma + space
SEPARATOR_PATTERN = re.compile(r",\s*(?=https?://)|[;|\r\n]+|,\s+")

URL_PATTERN = re.compile(r"https?://[^\s,;|\"'<>]+")
TRAILING_PUNCTUATION = ".,;:)]}\"'"

DRIVE_FILE_PATTERN = re.compile(r"drive\.google\.com/file/d/([a-zA-Z0-9_-]+)")
DRIVE_OPEN_PATTERN = re.compile(r"drive\.google\.com/open\?id=([a-zA-Z0-9_-]+)")
DRIVE_ID_PARAM_PATTERN = re.compile(r"[?&]id=([a-zA-Z0-9_-]+)")
DRIVE_FOLDER_MARKERS = ("/drive/folders/", "/u/0/drive/")
DRIVE_DIRECT_MARKERS = ("drive.google.com/uc", "drive.google.com/thumbnail")

WINDOWS_PATH_PATTERN = re.compile(r"^[a-zA-Z]:[\\/]")


def is_local_path(token: str) -> bool:
    """
    Check whether a token is a filesystem path rather than a URL.

    Examples:
        >>> is_local_path("/content/drive/MyDrive/images/A100-01.jpg")
        True
        >>> is_local_path("C:\\\\photos\\\\a.jpg")
        True
        >>> is_local_path("https://x/a.jpg")
        False
    """
    return (
        token.startswith("/")
        or "/content/drive/" in token
        or token.lower().startswith("file://")
        or bool(WINDOWS_PATH_PATTERN.match(token))
    )


def extract_drive_file_id(url: str) -> str | None:
    """
    Extract a Google Drive file ID from the known share link shapes.

    Examples:
        >>> extract_drive_file_id("https://drive.google.com/file/d/XYZ123/view")
        'XYZ123'
        >>> extract_drive_file_id("https://drive.google.com/open?id=ABC")
        'ABC'
        >>> extract_drive_file_id("https://drive.google.com/uc?export=view&id=QQ")
        'QQ'
        >>> extract_drive_file_id("https://cdn.example.com/img?id=5") is None
        True
    """
    if "drive.google.com" not in url:
        return None

    for pattern in (DRIVE_FILE_PATTERN, DRIVE_OPEN_PATTERN, DRIVE_ID_PARAM_PATTERN):
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def canonicalize_photo_url(
    url: str,
    width: int = DEFAULT_THUMBNAIL_WIDTH,
    proxy_url: str | None = None,
) -> str | None:
    """
    Convert a photo URL into a directly loadable image URL.

    Args:
        url: Absolute http(s) URL
        width: Target display width for drive thumbnails
        proxy_url: Optional image proxy endpoint for drive files

    Returns:
        Canonical URL, or None when the URL is not an image (drive folder)

    Examples:
        >>> canonicalize_photo_url("https://drive.google.com/file/d/XYZ123/view")
        'https://drive.google.com/thumbnail?id=XYZ123&sz=w800'
        >>> canonicalize_photo_url("https://drive.google.com/drive/folders/abc") is None
        True
        >>> canonicalize_photo_url("https://cdn.example.com/a.jpg")
        'https://cdn.example.com/a.jpg'
    """
    url = url.strip().rstrip(TRAILING_PUNCTUATION)
    if not url:
        return None

    file_id = extract_drive_file_id(url)
    if file_id:
        if proxy_url:
            return f"{proxy_url}?id={file_id}"
        return f"{DRIVE_THUMBNAIL_URL}?id={file_id}&sz=w{width}"

    if any(marker in url for marker in DRIVE_FOLDER_MARKERS):
        return None

    if any(marker in url for marker in DRIVE_DIRECT_MARKERS) and "sz=" not in url:
        separator = "&" if "?" in url else "?"
        return f"{url}{separator}sz=w{width}"

    return url


def split_photo_field(raw: str) -> list[str]:
    """
    Split a raw photo field into candidate tokens.

    JSON arrays are used as-is; anything else is split on the usual list
    separators.

    Examples:
        >>> split_photo_field('["https://x/a.jpg", "https://x/b.jpg"]')
        ['https://x/a.jpg', 'https://x/b.jpg']
        >>> split_photo_field("https://x/a.jpg,https://x/b.jpg")
        ['https://x/a.jpg', 'https://x/b.jpg']
        >>> split_photo_field("https://x/a.jpg | https://x/b.jpg")
        ['https://x/a.jpg', 'https://x/b.jpg']
    """
    raw = raw.strip()

    if raw.startswith("["):
        try:
            parsed = json.loads(raw)
        except ValueError:
            parsed = None
        if isinstance(parsed, list):
            tokens = [str(item).strip() for item in parsed if item is not None]
            return [token for token in tokens if token]

    return [token.strip() for token in SEPARATOR_PATTERN.split(raw) if token.strip()]


def normalize_photos(
    raw: str | Iterable[str] | None,
    width: int = DEFAULT_THUMBNAIL_WIDTH,
    proxy_url: str | None = None,
    limit: int = MAX_PHOTOS,
) -> list[str]:
    """
    Parse a raw photo field into an ordered list of image URLs.

    Never raises: malformed input degrades to fewer (or zero) photos.

    Args:
        raw: Photo column value, or an already split list of tokens
        width: Target display width for drive thumbnails
        proxy_url: Optional image proxy endpoint for drive files
        limit: Maximum number of URLs to return

    Returns:
        Up to `limit` URLs, in order of first appearance (not deduplicated)

    Examples:
        >>> normalize_photos("https://x/a.jpg, https://x/b.jpg")
        ['https://x/a.jpg', 'https://x/b.jpg']
        >>> normalize_photos("/content/drive/MyDrive/a.jpg")
        []
        >>> normalize_photos("")
        []
    """
    if not raw:
        return []

    photos: list[str] = []
    try:
        if isinstance(raw, str):
            tokens = split_photo_field(raw)
        else:
            tokens = [str(token).strip() for token in raw if token]

        for token in tokens:
            if is_local_path(token):
                photos_log.debug(f"Skipping local path: {token.rsplit('/', 1)[-1]}")
                continue

            for match in URL_PATTERN.findall(token):
                url = canonicalize_photo_url(match, width=width, proxy_url=proxy_url)
                if url:
                    photos.append(url)
                if len(photos) >= limit:
                    return photos
    except Exception as e:
        photos_log.warning(f"Failed to parse photo field: {e}")

    return photos[:limit]
