"""Configuration for the Starfighter client"""

from dataclasses import dataclass

AUTH_HEADER = "X-Starfighter-Authorization"
API_LOCATION = "https://api.stockfighter.io/ob/api"


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings supplied by the embedding application"""

    # Starfighter API token
    token: str

    # Location of the API, without a trailing slash
    base_url: str = API_LOCATION

    # Request timeout (seconds) for the transport the client builds itself
    timeout: float = 30.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    def __repr__(self) -> str:
        return (
            f"ClientConfig(token='***', base_url={self.base_url!r}, "
            f"timeout={self.timeout!r})"
        )
