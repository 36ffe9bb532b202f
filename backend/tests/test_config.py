"""
Pet Adoption API — Settings Tests
==================================

What we test:
    ✅ environment and log level are normalized and validated
    ✅ CORS origins split from a comma-separated string
    ✅ production checks flag SQLite and wildcard CORS
"""

import pydantic
import pytest

from adoption_api.config import Settings


class TestSettings:

    def test_environment_normalized(self):
        config = Settings(environment="Development")

        assert config.environment == "development"
        assert config.is_development

    def test_invalid_environment_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            Settings(environment="staging")

    def test_log_level_uppercased(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            Settings(log_level="LOUD")

    def test_cors_origins_list(self):
        config = Settings(cors_origins="http://a.test, http://b.test,")

        assert config.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_production_rejects_sqlite_and_wildcard_cors(self):
        config = Settings(
            environment="production",
            database_url="sqlite+aiosqlite:///adoption.db",
            cors_origins="*",
        )

        with pytest.raises(ValueError) as exc_info:
            config.validate_required_for_production()

        assert "DATABASE_URL" in str(exc_info.value)
        assert "CORS_ORIGINS" in str(exc_info.value)

    def test_production_with_postgres_passes(self):
        config = Settings(
            environment="production",
            database_url="postgresql+asyncpg://u:p@db:5432/adoption",
            cors_origins="https://adopt.example.com",
        )

        config.validate_required_for_production()
