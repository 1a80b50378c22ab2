"""Exceptions raised by the shortcode registry.

Every error here is a caller input or state error. They are reported
synchronously to the immediate caller and never retried internally.
"""


class ShortlinkError(Exception):
    """Base exception for all registry errors."""
    pass


class ShortcodeCreationError(ShortlinkError):
    """Base exception for errors raised while creating a shortcode."""
    pass


class InvalidUrlError(ShortcodeCreationError):
    """The URL is missing or is not an absolute, well-formed URL."""
    pass


class InvalidShortcodeError(ShortcodeCreationError):
    """The custom shortcode is not alphanumeric or is too short."""
    pass


class InvalidValidityError(ShortcodeCreationError):
    """The validity period is not a positive integer number of minutes."""
    pass


class ShortcodeConflictError(ShortcodeCreationError):
    """The requested custom shortcode is already in use."""
    pass


class ShortcodeLookupError(ShortlinkError):
    """Base exception for errors raised while looking up a shortcode."""
    pass


class NotFoundError(ShortcodeLookupError):
    """No record exists for the shortcode."""
    pass


class ExpiredError(ShortcodeLookupError):
    """The shortcode exists but no longer serves redirects."""
    pass
