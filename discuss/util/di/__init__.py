"""Dependency injection for the comment engine.

Config, domain and application providers are always real. Persistence
(Postgres or in-memory) and realtime (WebSocket fan-out or a recording
sink) are components with a production and a mock implementation each.
"""

from typing import Type

from discuss.util.di.application import ProdApplicationProvider
from discuss.util.di.base import Component, ProviderBase
from discuss.util.di.core import ProdConfigProvider
from discuss.util.di.domain import ProdDomainProvider
from discuss.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
    ProdRealtimeProvider,
    RealtimeProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Swappable components
    PersistenceProvider,
    RealtimeProvider,
]

COMPONENTS: frozenset[Component] = frozenset(
    base.__mock_component__
    for base in PROVIDERS
    if base.__mock_component__ is not None
)


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the implementation of a provider.

    Providers without a component name are used as they are. For a
    component, the subclass whose __is_mock__ matches use_mock is chosen;
    mock subclasses only exist once tests.di has been imported.

    Raises:
        ValueError: If the component has no such implementation
    """
    if base.__mock_component__ is None:
        return base

    impl = next(
        (c for c in base.__subclasses__() if c.__is_mock__ == use_mock),
        None,
    )
    if not impl:
        kind = "mock" if use_mock else "production"
        raise ValueError(f"No {kind} implementation for {base.__mock_component__}")

    return impl


def build_providers(
    mocked: set[Component] | frozenset[Component],
) -> list[ProviderBase]:
    """Instantiate one provider per entry in PROVIDERS.

    Args:
        mocked: Components to take the mock implementation of

    Raises:
        ValueError: If mocked names an unknown component
    """
    unknown = set(mocked) - COMPONENTS
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")

    return [
        get_provider(base, use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]


__all__ = [
    "COMPONENTS",
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "build_providers",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "RealtimeProvider",
    "ProdPersistenceProvider",
    "ProdRealtimeProvider",
]
