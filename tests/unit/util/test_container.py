"""Unit tests for provider selection and container shutdown."""

import pytest
from dishka import make_async_container
from fastapi import FastAPI

from discuss.adapter.realtime import WebSocketBroadcaster
from discuss.util.di import (
    COMPONENTS,
    ProdConfigProvider,
    ProdPersistenceProvider,
    ProdRealtimeProvider,
    build_providers,
)
from discuss.util.di.container import container_lifespan, setup_di
from tests.di import MockPersistenceProvider, MockRealtimeProvider


class ClosableWebSocket:
    def __init__(self):
        self.close_code = None

    async def accept(self):
        pass

    async def close(self, code=1000):
        self.close_code = code


class TestBuildProviders:
    """Tests for build_providers."""

    def test_components_are_persistence_and_realtime(self):
        assert COMPONENTS == {"persistence", "realtime"}

    def test_nothing_mocked_gives_production_providers(self):
        kinds = {type(provider) for provider in build_providers(mocked=frozenset())}

        assert ProdPersistenceProvider in kinds
        assert ProdRealtimeProvider in kinds
        assert ProdConfigProvider in kinds

    def test_mocked_component_is_swapped_alone(self):
        kinds = {type(provider) for provider in build_providers(mocked={"realtime"})}

        assert MockRealtimeProvider in kinds
        assert ProdPersistenceProvider in kinds
        assert MockPersistenceProvider not in kinds

    def test_unknown_component_is_rejected(self):
        with pytest.raises(ValueError, match="Unknown components"):
            build_providers(mocked={"search"})  # type: ignore[arg-type]


class TestContainerLifespan:
    """Shutdown closes the container and its APP-scoped resources."""

    @pytest.mark.asyncio
    async def test_shutdown_closes_open_websockets(self):
        container = make_async_container(ProdConfigProvider(), ProdRealtimeProvider())
        app = FastAPI(lifespan=container_lifespan)
        setup_di(app, container)
        websocket = ClosableWebSocket()

        async with container_lifespan(app):
            broadcaster = await container.get(WebSocketBroadcaster)
            await broadcaster.connect(websocket)

        assert websocket.close_code == 1001
        assert broadcaster.active_connections == []
