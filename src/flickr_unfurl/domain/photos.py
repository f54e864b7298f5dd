"""Domain models for Flickr photos."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ImageVariant:
    """One rendition of a photo at a fixed size."""

    url: str
    width: int
    height: int


@dataclass(frozen=True)
class PhotoOwner:
    """Owner of a photo."""

    username: str
    profile_url: str
    name: str | None = None
    icon_url: str | None = None


@dataclass(frozen=True)
class PhotoTag:
    """Tag as the owner typed it."""

    raw: str


@dataclass(frozen=True)
class PhotoContext:
    """Album or group a photo belongs to."""

    id: str
    title: str
    url: str


@dataclass(frozen=True)
class PhotoRecord:
    """Aggregated metadata for a single photo."""

    id: str
    title: str
    url: str
    owner: PhotoOwner
    description: str | None = None
    tags: list[PhotoTag] = field(default_factory=list)
    taken_at: datetime | None = None
    posted_at: datetime | None = None
    image_variants: list[ImageVariant] = field(default_factory=list)
    albums: list[PhotoContext] = field(default_factory=list)
    groups: list[PhotoContext] = field(default_factory=list)
