"""Configuration resolution, validation and ambient scoping."""

from __future__ import annotations

import asyncio

import pytest

from extresult import ConfigurationError, FrozenConfig, config_scope, current_config
from extresult._dev_flags import dev_validate_enabled
from extresult.config import ambient_config, load_env, resolve_config, resolve_setting

pytestmark = pytest.mark.unit


class TestResolveConfig:
    def test_defaults(self) -> None:
        cfg = resolve_config()
        assert cfg == FrozenConfig(merge_priority="pending", validate_contracts=False)

    def test_environment_values(self, monkeypatch) -> None:
        monkeypatch.setenv("EXTRESULT_MERGE_PRIORITY", "  FAILURE ")
        monkeypatch.setenv("EXTRESULT_VALIDATE", "true")
        cfg = resolve_config()
        assert cfg.merge_priority == "failure"
        assert cfg.validate_contracts is True

    def test_overrides_beat_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("EXTRESULT_MERGE_PRIORITY", "failure")
        assert resolve_config({"merge_priority": "pending"}).merge_priority == "pending"

    def test_load_env_only_reports_present_variables(self, monkeypatch) -> None:
        assert load_env() == {}
        monkeypatch.setenv("EXTRESULT_VALIDATE", "0")
        assert load_env() == {"validate_contracts": "0"}

    def test_invalid_priority_raises_with_hint(self, monkeypatch) -> None:
        monkeypatch.setenv("EXTRESULT_MERGE_PRIORITY", "loudest")
        with pytest.raises(ConfigurationError) as exc:
            resolve_config()
        assert "merge_priority" in str(exc.value)
        assert exc.value.hint is not None
        assert "EXTRESULT_MERGE_PRIORITY" in exc.value.hint

    def test_unknown_override_key_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            resolve_config({"merge_strategy": "failure"})

    def test_frozen_config_is_immutable(self) -> None:
        cfg = resolve_config()
        with pytest.raises(AttributeError):
            cfg.merge_priority = "failure"  # type: ignore[misc]


class TestConfigScope:
    def test_scope_installs_and_restores(self) -> None:
        assert ambient_config() is None
        with config_scope(merge_priority="failure") as cfg:
            assert current_config() is cfg
            assert cfg.merge_priority == "failure"
            with config_scope(FrozenConfig(validate_contracts=True)) as inner:
                assert current_config() is inner
            assert current_config() is cfg
        assert ambient_config() is None

    def test_scope_accepts_mapping(self) -> None:
        with config_scope({"validate_contracts": "1"}) as cfg:
            assert cfg.validate_contracts is True

    def test_scope_restores_after_error(self) -> None:
        with pytest.raises(RuntimeError):
            with config_scope(merge_priority="failure"):
                raise RuntimeError("boom")
        assert ambient_config() is None

    def test_frozen_config_with_overrides_is_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            with config_scope(FrozenConfig(), merge_priority="failure"):
                pass

    @pytest.mark.asyncio
    async def test_scope_is_task_local(self) -> None:
        seen: dict[str, str] = {}
        entered = asyncio.Event()
        release = asyncio.Event()

        async def scoped() -> None:
            with config_scope(merge_priority="failure"):
                entered.set()
                await release.wait()
                seen["scoped"] = current_config().merge_priority

        async def unscoped() -> None:
            await entered.wait()
            seen["unscoped"] = current_config().merge_priority
            release.set()

        await asyncio.gather(scoped(), unscoped())
        assert seen == {"scoped": "failure", "unscoped": "pending"}


class TestDevValidateFlag:
    def test_override_wins(self, monkeypatch) -> None:
        monkeypatch.setenv("EXTRESULT_VALIDATE", "1")
        assert dev_validate_enabled(override=False) is False
        assert dev_validate_enabled(override=True) is True

    def test_scope_wins_over_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("EXTRESULT_VALIDATE", "1")
        with config_scope(validate_contracts=False):
            assert dev_validate_enabled() is False

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("1", True), ("on", True), ("t", True), ("y", True), ("0", False), ("off", False)],
    )
    def test_environment_values(self, monkeypatch, raw, expected) -> None:
        monkeypatch.setenv("EXTRESULT_VALIDATE", raw)
        assert dev_validate_enabled() is expected
        assert resolve_config().validate_contracts is expected

    def test_unset_is_off(self) -> None:
        assert dev_validate_enabled() is False

    def test_invalid_environment_value_raises(self, monkeypatch) -> None:
        monkeypatch.setenv("EXTRESULT_VALIDATE", "maybe")
        with pytest.raises(ConfigurationError) as exc:
            dev_validate_enabled()
        assert "EXTRESULT_VALIDATE" in (exc.value.hint or "")

    @pytest.mark.allow_dotenv
    def test_reads_dotenv_before_first_use(self, monkeypatch) -> None:
        def fake_load_dotenv(*_args, **_kwargs):
            monkeypatch.setenv("EXTRESULT_VALIDATE", "1")
            return True

        monkeypatch.setattr("dotenv.load_dotenv", fake_load_dotenv)
        monkeypatch.setattr("extresult.config._DOTENV_LOADED", False)
        assert dev_validate_enabled() is True


class TestResolveSetting:
    def test_reads_only_the_requested_field(self, monkeypatch) -> None:
        monkeypatch.setenv("EXTRESULT_VALIDATE", "maybe")
        monkeypatch.setenv("EXTRESULT_MERGE_PRIORITY", " Failure ")
        assert resolve_setting("merge_priority") == "failure"

    def test_scope_wins(self, monkeypatch) -> None:
        monkeypatch.setenv("EXTRESULT_MERGE_PRIORITY", "failure")
        with config_scope(merge_priority="pending"):
            assert resolve_setting("merge_priority") == "pending"

    def test_default_when_unset(self) -> None:
        assert resolve_setting("validate_contracts") is False

    def test_unknown_name_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            resolve_setting("retries")
