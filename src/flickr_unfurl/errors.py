"""Application error types."""


class InvalidPhotoUrlError(ValueError):
    """Raised when a shared URL does not point at a Flickr photo."""


class NoSuitableImageError(LookupError):
    """Raised when no image variant is large enough for an attachment."""


class UnrecognizedInteractionError(ValueError):
    """Raised for callback ids or action names this app does not handle."""


class FlickrApiError(RuntimeError):
    """Raised when the Flickr API responds with ``stat: fail``."""


class SlackApiError(RuntimeError):
    """Raised when the Slack Web API responds with ``ok: false``."""
