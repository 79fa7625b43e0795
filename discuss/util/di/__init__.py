"""Dependency injection module.

Infrastructure components (``persistence``, ``community``) each have a
base provider with one production and one mock subclass. Everything else
is a concrete provider used as-is.
"""

from typing import Iterable, Type

from dishka import Provider

from discuss.util.di.application import ProdApplicationProvider
from discuss.util.di.base import Component, ProviderBase
from discuss.util.di.core import ProdConfigProvider
from discuss.util.di.domain import ProdDomainProvider
from discuss.util.di.infrastructure import (
    CommunityProvider,
    PersistenceProvider,
    ProdCommunityProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
    CommunityProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the implementation of a provider.

    Args:
        base: Entry of PROVIDERS
        use_mock: Whether to pick the mock implementation of a component

    Returns:
        Provider class (not instantiated)

    Raises:
        ValueError: If the component has no implementation of that kind
    """
    if base.__mock_component__ is None:
        return base

    for impl in base.__subclasses__():
        if impl.__is_mock__ == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    raise ValueError(f"No {kind} implementation for {base.__mock_component__}")


def components() -> dict[Component, Type[ProviderBase]]:
    """Mockable components by name."""
    return {
        base.__mock_component__: base
        for base in PROVIDERS
        if base.__mock_component__ is not None
    }


def resolve_providers(mocked: Iterable[Component] = ()) -> list[Provider]:
    """Instantiate every provider, using mocks for the named components."""
    mocked = set(mocked)
    return [
        get_provider(base, use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "components",
    "get_provider",
    "resolve_providers",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "CommunityProvider",
    "PersistenceProvider",
    "ProdCommunityProvider",
    "ProdPersistenceProvider",
]
