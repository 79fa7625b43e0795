"""Dependency injection container."""

from typing import Iterable

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from discuss.util.di import Component, resolve_providers


def create_container(mocked: Iterable[Component] = ()) -> AsyncContainer:
    """Build the DI container.

    Settings are loaded from environment variables automatically.

    Args:
        mocked: Components to replace with their in-memory implementations.
            Production wiring passes nothing.

    Returns:
        Container that can also serve FastAPI requests
    """
    return make_async_container(*resolve_providers(mocked), FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the application."""
    setup_dishka(container, app)
