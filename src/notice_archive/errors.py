"""Errors raised while reading and writing notice archives."""


class NoticeArchiveError(Exception):
    """Base class for all notice archive errors."""


class InvalidFormat(NoticeArchiveError, ValueError):
    """The archive has no manifest, so it is not a notice document."""


class MalformedManifest(NoticeArchiveError, ValueError):
    """The manifest is present but cannot be parsed or lacks required fields."""


class ArchiveIOFailure(NoticeArchiveError, OSError):
    """The zip container could not be opened, read, written or closed.

    Also raised when an entry the manifest requires is missing.
    """


class EncodingFailure(NoticeArchiveError, ValueError):
    """A text entry is not valid UTF-8."""


class InvalidDocument(NoticeArchiveError, ValueError):
    """The tree handed to export is structurally ill-formed."""
