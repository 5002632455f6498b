"""Vote use cases."""

from .toggle_vote import ToggleVoteRequest, ToggleVoteUseCase

__all__ = ["ToggleVoteRequest", "ToggleVoteUseCase"]
