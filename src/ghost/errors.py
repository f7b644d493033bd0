from __future__ import annotations


class GhostError(ValueError):
    pass


class GhostParseError(GhostError):
    """Input data cannot be turned into a trustworthy ghost.

    Raised for malformed bootstrap weapon lists, chat from unknown senders and
    sound messages without any resource index. Reconstruction stops and no
    partial track is produced.
    """


class UnknownFormatError(GhostError):
    pass


class GhostResourceWarning(UserWarning):
    """A single event referenced a resource that the recording never declared."""
