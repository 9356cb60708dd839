"""Vote use cases."""

from .vote import VoteRequest, VoteResponse, VoteUseCase

__all__ = [
    "VoteRequest",
    "VoteResponse",
    "VoteUseCase",
]
