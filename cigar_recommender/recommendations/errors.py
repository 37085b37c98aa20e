from __future__ import annotations


class RecommenderError(Exception):
    """Base error carrying the HTTP status and the message shown to clients."""

    status_code: int = 500
    message: str = "Unexpected server error - please try again later."

    def __init__(self, message: str | None = None) -> None:
        if message:
            self.message = message
        super().__init__(self.message)


class InvalidInputError(RecommenderError):
    status_code = 400
    message = "Invalid input"


class MissingAPIKeyError(RecommenderError):
    status_code = 500
    message = "Server missing API key"


class UpstreamError(RecommenderError):
    status_code = 502
    message = (
        "Sorry - our cigar recommender is temporarily unavailable. "
        "Please try again later."
    )
