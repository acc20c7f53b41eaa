from __future__ import annotations

from typing import Optional
from urllib.parse import parse_qs, urlparse


def extract_video_id(url: str) -> Optional[str]:
    """Video id from a youtu.be/<id> or youtube.com/watch?v=<id> URL, else None."""
    try:
        u = urlparse((url or "").strip())
    except ValueError:
        return None
    host = (u.hostname or "").lower()
    if "youtu.be" in host:
        vid = u.path.lstrip("/").split("/")[0]
        return vid or None
    if "youtube.com" in host:
        vid = parse_qs(u.query).get("v", [""])[0]
        return vid or None
    return None
