"""Base class for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Infrastructure components that tests can swap for in-memory versions
Component = Literal["persistence", "community"]


class ProviderBase(Provider):
    """Provider with component metadata.

    A mockable component is declared by a base class that sets
    ``__mock_component__``; its production and mock subclasses set
    ``__is_mock__``. ``__depends_on__`` names the components whose real
    implementation this one needs, e.g. the community tables need the
    database engine.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
    __depends_on__: ClassVar[set[Component]] = set()
