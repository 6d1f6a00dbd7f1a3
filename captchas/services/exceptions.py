"""Provides exceptions occurring with external services."""


class ChallengeUnknown(RuntimeError):
    """Failed to locate a challenge in the challenge store."""


class ReloadFailed(RuntimeError):
    """Failed to replace the solution of a challenge."""


class RenderFailed(RuntimeError):
    """Failed to draw the image for a challenge."""


class StoreUnavailable(RuntimeError):
    """Could not communicate with the challenge store."""
