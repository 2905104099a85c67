"""Exceptions raised by the concierge engine.

Only two failure kinds leave the inference layer:

- ``TransportError``: the Gemini backend was unreachable or answered with a
  non-success status. Never caught inside the swarm.
- ``MalformedResponseError``: structured output could not be decoded or lacks
  a required field. Always caught at the decode site.
"""


class ConciergeError(Exception):
    """Base class for all LifeSync concierge errors."""


class TransportError(ConciergeError):
    """Backend unreachable or returned a failed response."""


class MalformedResponseError(ConciergeError):
    """Expected structured field missing or undecodable."""

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text
