"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services.

    A use case takes one request model, calls the domain services and
    returns a view or response model. Domain errors propagate to the
    interface layer, which maps them onto HTTP status codes.
    """

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
