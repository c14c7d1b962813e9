from typing import Optional


class UpstreamError(Exception):
    """An external service (itinerary backend, Nominatim, Wikipedia) failed or answered badly."""

    def __init__(self, service: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{service}: {message}")
        self.service = service
        self.message = message
        self.status_code = status_code


class MalformedResponse(UpstreamError):
    """Upstream answered, but the payload could not be parsed."""

    def __init__(self, message: str, raw: Optional[str] = None):
        super().__init__("parser", message)
        self.raw = raw
