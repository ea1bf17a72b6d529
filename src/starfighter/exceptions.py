"""Consolidated exceptions for the Starfighter client.

All custom exceptions are defined here to provide a single source of truth
for error handling across the library.
"""


class StarfighterError(Exception):
    """Base exception for Starfighter client errors"""

    pass


class TransportError(StarfighterError):
    """Raised when the request never got a response (client-side fault)"""

    pass


class APIError(StarfighterError):
    """Raised when the request processed but the API returned ok = false

    The message is the one returned in the JSON response.
    """

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"starfighter api error ({code}): {message}")


class DecodeError(StarfighterError):
    """Raised when a response body does not match the expected JSON shape"""

    pass
