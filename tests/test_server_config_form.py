from __future__ import annotations

import asyncio

from adapters.default_config import StaticDefaultConfigSource
from core.config import ValidationConfig
from core.models import Field
from frontend.app import ServerConfigApp
from frontend.server_config import ServerConfigForm

from fakes import CUSTOM, DEFAULT, FakeDiscovery


def test_submit_while_blur_validation_runs_is_not_dropped() -> None:
    async def scenario():
        pending: asyncio.Future = asyncio.get_running_loop().create_future()
        discovery = FakeDiscovery(pending, CUSTOM)
        app = ServerConfigApp(
            server_config=DEFAULT,
            discovery=discovery,
            default_source=StaticDefaultConfigSource(DEFAULT),
            validation_config=ValidationConfig(),
        )
        async with app.run_test() as pilot:
            controller = app.controller
            controller.on_field_change(Field.HS, CUSTOM.hs_url)
            controller.on_field_change(Field.IS, CUSTOM.is_url)
            controller.on_field_blur(Field.HS)
            await pilot.pause(0.05)
            assert controller.busy

            app.query_one(ServerConfigForm)._submit()
            await app.workers.wait_for_complete()

        pending.set_result(CUSTOM)
        await controller.wait_idle()
        return app, discovery

    app, discovery = asyncio.run(scenario())

    assert app.app_state.submitted is True
    assert app.return_value == CUSTOM
    assert discovery.calls[:2] == [(CUSTOM.hs_url, CUSTOM.is_url)] * 2


def test_default_source_feeds_reset_binding() -> None:
    source = StaticDefaultConfigSource(DEFAULT)

    assert source.get() is DEFAULT
