class RevkidsError(Exception):
    """Base class for errors raised outside the pure scheduling engine."""


class CardStoreError(RevkidsError):
    """A card store could not be read or written."""
