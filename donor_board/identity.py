"""Resolution of a donor's social-platform identity.

Raw records describe social presence in several shapes: a bare platform name,
a structured ``social`` object, or the legacy flat ``type``/``username``/
``social_link`` fields. Each shape is resolved once into a
:class:`SocialIdentity` whose URL is regenerated from the platform's profile
template whenever one is known.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import parse_qs, urlsplit

from .coercion import clean_text


PROFILE_TEMPLATES = {
    "facebook": "https://www.facebook.com/{uid}",
    "instagram": "https://www.instagram.com/{uid}",
    "tiktok": "https://www.tiktok.com/@{uid}",
    "threads": "https://www.threads.net/@{uid}",
    "twitter": "https://x.com/{uid}",
    "x": "https://x.com/{uid}",
    "youtube": "https://www.youtube.com/@{uid}",
    "github": "https://github.com/{uid}",
    "telegram": "https://t.me/{uid}",
    "discord": "https://discord.com/users/{uid}",
}

_YOUTUBE_CHANNEL_TEMPLATE = "https://www.youtube.com/{uid}"
_YOUTUBE_CHANNEL_PREFIX = "channel/"

PLATFORM_ALIASES = {
    "fb": "facebook",
    "ig": "instagram",
    "tg": "telegram",
    "yt": "youtube",
    "tw": "twitter",
}

_PLATFORM_KEYS = ("platform", "network", "name", "type")
_USERNAME_KEYS = ("username", "handle")
_URL_KEYS = ("url", "link", "social_link", "profile_url")


@dataclass(frozen=True)
class SocialIdentity:
    platform: str
    uid: str
    username: str
    url: str


@dataclass(frozen=True)
class PlatformName:
    """A social field given as a bare platform name."""

    platform: str


@dataclass(frozen=True)
class SocialFields:
    """A social field given as an object with any subset of known keys."""

    platform: str
    username: str
    uid: str
    url: str


RawSocial = PlatformName | SocialFields


def _first_text(source: Mapping[str, Any], keys: tuple[str, ...]) -> str:
    for key in keys:
        text = clean_text(source.get(key))
        if text:
            return text
    return ""


def _canonical_platform(value: str) -> str:
    platform = value.strip().lower()
    return PLATFORM_ALIASES.get(platform, platform)


def parse_raw_social(raw: Any) -> RawSocial | None:
    """Resolve an untrusted social value into one of the known shapes."""
    if isinstance(raw, str):
        return PlatformName(platform=_canonical_platform(raw))
    if isinstance(raw, Mapping):
        return SocialFields(
            platform=_canonical_platform(_first_text(raw, _PLATFORM_KEYS)),
            username=_first_text(raw, _USERNAME_KEYS),
            uid=_first_text(raw, ("uid",)),
            url=_first_text(raw, _URL_KEYS),
        )
    return None


def strip_handle(value: str) -> str:
    return value.strip().lstrip("@")


def uid_from_url(url: str) -> str:
    """Extract the profile handle from a legacy profile URL."""
    if not url:
        return ""
    parts = urlsplit(url if "://" in url else f"https://{url}")
    segments = [segment for segment in parts.path.split("/") if segment]
    if not segments:
        return ""

    head = segments[0]
    if head == "profile.php":
        ids = parse_qs(parts.query).get("id")
        return ids[0].strip() if ids else ""
    if head == "channel" and len(segments) > 1:
        return f"{_YOUTUBE_CHANNEL_PREFIX}{segments[1]}"
    if head in ("users", "c", "user") and len(segments) > 1:
        return segments[1]
    return strip_handle(head)


def profile_url(platform: str, uid: str) -> str:
    """Return the canonical profile URL, or an empty string when unknown."""
    if not uid:
        return ""
    if platform == "youtube" and uid.startswith(_YOUTUBE_CHANNEL_PREFIX):
        return _YOUTUBE_CHANNEL_TEMPLATE.format(uid=uid)
    template = PROFILE_TEMPLATES.get(platform)
    if template is None:
        return ""
    return template.format(uid=uid)


def resolve_identity(shape: RawSocial) -> SocialIdentity | None:
    if isinstance(shape, PlatformName):
        platform, username, uid, legacy_url = shape.platform, "", "", ""
    else:
        platform, username, legacy_url = shape.platform, shape.username, shape.url
        uid = strip_handle(shape.uid) or strip_handle(username) or uid_from_url(legacy_url)

    url = profile_url(platform, uid) or legacy_url
    if not (platform or uid or username or url):
        return None
    return SocialIdentity(platform=platform, uid=uid, username=username, url=url)


def normalize_social(raw: Any) -> SocialIdentity | None:
    """Normalize any raw social value; idempotent on its own output."""
    shape = parse_raw_social(raw)
    if shape is None:
        return None
    return resolve_identity(shape)


def legacy_social_fields(record: Mapping[str, Any]) -> dict[str, Any]:
    """Rebuild a social object from the legacy flat fields of a donor record."""
    return {
        "platform": record.get("type"),
        "username": record.get("username"),
        "uid": record.get("uid"),
        "url": record.get("social_link"),
    }
