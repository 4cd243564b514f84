# app/errors.py
"""Feed error taxonomy."""


class FeedError(Exception):
    """Unexpected failure while assembling a feed."""
    pass


class StoreUnavailableError(FeedError):
    """A count or fetch query against the listing store failed."""

    def __init__(self, phase, message="Database error"):
        super().__init__(f"{message} during {phase}")
        self.phase = phase
