"""Unit tests for client settings and their loaders."""

from __future__ import annotations

import pytest

from truevault.config import (
    ConfigError,
    DotenvSettingsLoader,
    EnvSettingsLoader,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    TrueVaultSettings,
)


class TestTrueVaultSettings:
    def test_defaults(self) -> None:
        s = TrueVaultSettings(api_key="k")
        assert s.base_url == "https://api.truevault.com"
        assert s.timeout == 10.0

    def test_repr_hides_api_key(self) -> None:
        assert "secret-key" not in repr(TrueVaultSettings(api_key="secret-key"))

    def test_empty_api_key_rejected(self) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            TrueVaultSettings(api_key="")
        assert exc_info.value.setting_name == "api_key"

    @pytest.mark.parametrize("url", ["api.truevault.com", "ftp://api.truevault.com", "https://"])
    def test_bad_base_url_rejected(self, url) -> None:
        with pytest.raises(InvalidSettingValueError):
            TrueVaultSettings(api_key="k", base_url=url)

    def test_non_positive_timeout_rejected(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            TrueVaultSettings(api_key="k", timeout=0)

    def test_is_frozen(self) -> None:
        s = TrueVaultSettings(api_key="k")
        with pytest.raises(AttributeError):
            s.api_key = "other"  # type: ignore[misc]


class TestEnvSettingsLoader:
    def test_loads_and_coerces(self) -> None:
        env = {
            "TRUEVAULT_API_KEY": "k",
            "TRUEVAULT_BASE_URL": "https://eu.tv.test",
            "TRUEVAULT_TIMEOUT": "2.5",
        }
        s = EnvSettingsLoader(env).load(TrueVaultSettings)
        assert s == TrueVaultSettings(api_key="k", base_url="https://eu.tv.test", timeout=2.5)

    def test_missing_api_key(self) -> None:
        with pytest.raises(MissingRequiredSettingError) as exc_info:
            EnvSettingsLoader({}).load(TrueVaultSettings)
        assert exc_info.value.setting_name == "TRUEVAULT_API_KEY"

    def test_unparseable_timeout(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            EnvSettingsLoader({"TRUEVAULT_API_KEY": "k", "TRUEVAULT_TIMEOUT": "soon"}).load(TrueVaultSettings)

    def test_reads_os_environ_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TRUEVAULT_API_KEY", "from-env")
        assert EnvSettingsLoader().load(TrueVaultSettings).api_key == "from-env"

    def test_config_errors_share_a_base(self) -> None:
        assert issubclass(MissingRequiredSettingError, ConfigError)
        assert issubclass(InvalidSettingValueError, ConfigError)


class TestDotenvSettingsLoader:
    def test_loads_from_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        # setenv first so monkeypatch removes whatever load_dotenv exports
        for name in ("TRUEVAULT_API_KEY", "TRUEVAULT_TIMEOUT"):
            monkeypatch.setenv(name, "placeholder")
            monkeypatch.delenv(name)
        env_file = tmp_path / ".env"
        env_file.write_text("TRUEVAULT_API_KEY=dotenv-key\nTRUEVAULT_TIMEOUT=4\n")

        s = DotenvSettingsLoader(str(env_file)).load(TrueVaultSettings)

        assert s.api_key == "dotenv-key"
        assert s.timeout == 4.0
