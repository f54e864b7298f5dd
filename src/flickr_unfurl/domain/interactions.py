"""Interaction identifiers used by attachment buttons."""

from dataclasses import dataclass
from enum import Enum

CALLBACK_ID_SEPARATOR = ":"


class InteractionKind(Enum):
    """Families of interactions, selected by the first ``callback_id`` segment."""

    PHOTO_DETAILS = "photo_details"
    UNRECOGNIZED = None

    @classmethod
    def from_callback_id(cls, callback_id: str) -> "InteractionKind":
        """Resolve the family encoded in a callback id."""
        family = callback_id.split(CALLBACK_ID_SEPARATOR, maxsplit=1)[0]
        for kind in cls:
            if kind.value == family:
                return kind
        return cls.UNRECOGNIZED


@dataclass(frozen=True)
class PhotoDetail:
    """Button definition for one kind of photo detail."""

    name: str
    label: str
    empty_text: str


class PhotoDetailsAction(Enum):
    """Buttons offered by ``photo_details`` attachments."""

    LIST_PHOTOSETS = PhotoDetail(
        "list_photosets", "Albums", "This photo is not in any albums"
    )
    LIST_POOLS = PhotoDetail("list_pools", "Groups", "This photo is not in any groups")
    UNRECOGNIZED = None

    @classmethod
    def from_name(cls, name: str) -> "PhotoDetailsAction":
        """Resolve the action for a pressed button name."""
        for action in cls:
            if action.value is not None and action.value.name == name:
                return action
        return cls.UNRECOGNIZED


def photo_details_callback_id(photo_id: str) -> str:
    """Build the callback id for a photo's detail buttons."""
    return f"{InteractionKind.PHOTO_DETAILS.value}{CALLBACK_ID_SEPARATOR}{photo_id}"


def parse_callback_id(callback_id: str) -> tuple[InteractionKind, str | None]:
    """Split a callback id into its family and optional photo id."""
    _, _, photo_id = callback_id.partition(CALLBACK_ID_SEPARATOR)
    return InteractionKind.from_callback_id(callback_id), photo_id or None
