"""
설정 테스트
"""

from ..config import Settings
from ..constants import DEFAULT_MAX_REMAIN_RATE, MAX_SEARCH_ITERATIONS


class TestSettings:
    """환경 변수 기반 설정"""

    def test_defaults(self, monkeypatch):
        for name in ("CLMM_MAX_RETRIES", "CLMM_MAX_REMAIN_RATE", "CLMM_MAX_SEARCH_ITERATIONS", "CLMM_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()
        assert settings.MAX_RETRIES == 3
        assert settings.MAX_REMAIN_RATE == DEFAULT_MAX_REMAIN_RATE
        assert settings.MAX_SEARCH_ITERATIONS == MAX_SEARCH_ITERATIONS
        assert settings.LOG_LEVEL == "INFO"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("CLMM_MAX_RETRIES", "5")
        monkeypatch.setenv("CLMM_REQUEST_TIMEOUT", "2.5")
        monkeypatch.setenv("CLMM_AGGREGATOR_URL", "https://router.test/find_routes")
        monkeypatch.setenv("CLMM_LOG_LEVEL", "debug")

        settings = Settings()
        assert settings.MAX_RETRIES == 5
        assert settings.REQUEST_TIMEOUT == 2.5
        assert settings.AGGREGATOR_URL == "https://router.test/find_routes"
        assert settings.LOG_LEVEL == "DEBUG"
