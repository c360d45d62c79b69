"""
Settings 테스트
"""

import pytest

from ..config import Settings
from ..exceptions import ConfigError


class TestSettings:
    """환경 변수 기반 Settings 테스트"""

    def test_defaults(self, monkeypatch):
        for name in ("CL_TOKEN0_DECIMALS", "CL_TOKEN1_DECIMALS", "CL_LOG_LEVEL", "CL_LOG_FORMAT"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()
        assert settings.TOKEN0_DECIMALS == 18
        assert settings.TOKEN1_DECIMALS == 18
        assert settings.LOG_LEVEL == "WARNING"
        assert settings.LOG_FORMAT == Settings.DEFAULT_LOG_FORMAT

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("CL_TOKEN0_DECIMALS", "18")
        monkeypatch.setenv("CL_TOKEN1_DECIMALS", "6")
        monkeypatch.setenv("CL_LOG_LEVEL", "debug")

        settings = Settings()
        assert settings.TOKEN1_DECIMALS == 6
        assert settings.LOG_LEVEL == "DEBUG"

    def test_blank_uses_default(self, monkeypatch):
        monkeypatch.setenv("CL_TOKEN0_DECIMALS", " ")
        assert Settings().TOKEN0_DECIMALS == 18

    @pytest.mark.parametrize("raw", ["six", "1.5", "-1"])
    def test_invalid_decimals(self, monkeypatch, raw):
        monkeypatch.setenv("CL_TOKEN1_DECIMALS", raw)
        with pytest.raises(ConfigError):
            Settings()

    @pytest.mark.parametrize("raw", ["VERBOSE", "10"])
    def test_invalid_log_level(self, monkeypatch, raw):
        monkeypatch.setenv("CL_LOG_LEVEL", raw)
        with pytest.raises(ConfigError, match="CL_LOG_LEVEL"):
            Settings()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
