from __future__ import annotations

import asyncio

from core.models import EditState, Field, ServerConfig, ValidationState

from fakes import CUSTOM, DEFAULT, FakeDiscovery, make_controller


def test_edits_start_from_owner_config() -> None:
    controller, _ = make_controller(FakeDiscovery(), server_config=CUSTOM)

    assert controller.edit == EditState(hs_url=CUSTOM.hs_url, is_url=CUSTOM.is_url)
    assert controller.validation == ValidationState()


def test_field_change_updates_only_that_field() -> None:
    discovery = FakeDiscovery()
    controller, recorder = make_controller(discovery)

    controller.on_field_change(Field.IS, "https://id.example")
    controller.on_field_change("hs", "https://hs.example")

    assert controller.edit.hs_url == "https://hs.example"
    assert controller.edit.is_url == "https://id.example"
    assert discovery.calls == []
    assert recorder.configs == []
    assert not controller.is_pending(Field.HS)
    assert not controller.is_pending(Field.IS)


def test_external_config_with_same_urls_is_ignored() -> None:
    discovery = FakeDiscovery()
    controller, recorder = make_controller(discovery, server_config=CUSTOM)

    async def scenario() -> None:
        controller.on_external_config_change(
            ServerConfig(hs_url=CUSTOM.hs_url, is_url=CUSTOM.is_url, hs_name="other")
        )
        await controller.wait_idle()

    asyncio.run(scenario())

    assert discovery.calls == []
    assert recorder.states == []


def test_external_config_is_adopted_and_validated() -> None:
    discovery = FakeDiscovery(CUSTOM)
    controller, recorder = make_controller(discovery)

    async def scenario() -> None:
        controller.on_external_config_change(CUSTOM)
        assert controller.edit.hs_url == CUSTOM.hs_url
        await controller.wait_idle()

    asyncio.run(scenario())

    assert discovery.calls == [(CUSTOM.hs_url, CUSTOM.is_url)]
    assert recorder.configs == [CUSTOM]
    assert controller.edit == EditState(hs_url=CUSTOM.hs_url, is_url=CUSTOM.is_url)


def test_external_default_config_takes_fast_path() -> None:
    discovery = FakeDiscovery()
    controller, recorder = make_controller(discovery, server_config=CUSTOM)

    async def scenario() -> None:
        controller.on_external_config_change(DEFAULT)
        await controller.wait_idle()

    asyncio.run(scenario())

    assert discovery.calls == []
    assert recorder.configs == [DEFAULT]
    assert controller.edit.hs_url == DEFAULT.hs_url


def test_server_config_matches_urls_exactly() -> None:
    assert DEFAULT.matches_urls("https://matrix.org", "https://vector.im")
    assert not DEFAULT.matches_urls("https://matrix.org/", "https://vector.im")
    assert not DEFAULT.matches_urls("https://matrix.org", "")
