"""Container wiring for the API process."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from discuss.util.di import build_providers


def create_container() -> AsyncContainer:
    """Build the production container: Postgres persistence, WebSocket fan-out.

    Settings are read from the environment on first use, not here.
    """
    providers = build_providers(mocked=frozenset())
    logfire.info(
        "DI container built",
        providers=[type(provider).__name__ for provider in providers],
    )
    return make_async_container(*providers, FastapiProvider())


@asynccontextmanager
async def container_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close the app's container on shutdown.

    Closing runs the APP-scoped finalizers: the engine pool is disposed and
    open WebSocket clients are sent 1001.
    """
    yield
    await app.state.dishka_container.close()
    logfire.info("DI container closed")


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app for FromDishka injection."""
    setup_dishka(container, app)
