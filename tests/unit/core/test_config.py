import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from cmsbase.core.config import Settings, get_settings


def test_settings_defaults():
    """Test that settings load with correct defaults."""
    get_settings.cache_clear()

    settings = Settings()

    assert settings.app_name == "CMSBase"
    assert settings.environment == "development"
    assert settings.debug is False
    assert settings.item_limit == 4000
    assert settings.id_length == 13
    assert settings.seed_on_startup is True
    assert settings.csv_import_coerce is False
    assert settings.restore_name_suffix == " (Imported)"
    assert settings.is_development is True


def test_settings_env_override():
    """Test that environment variables override defaults."""
    get_settings.cache_clear()

    with patch.dict(os.environ, {
        "CMSBASE_APP_NAME": "TestApp",
        "CMSBASE_ENVIRONMENT": "production",
        "CMSBASE_DEBUG": "true",
        "CMSBASE_ITEM_LIMIT": "250",
        "CMSBASE_LOG_FORMAT": "console",
    }):
        settings = Settings()

        assert settings.app_name == "TestApp"
        assert settings.environment == "production"
        assert settings.debug is True
        assert settings.item_limit == 250
        assert settings.log_format == "console"
        assert settings.is_development is False


def test_id_length_bounds():
    """Test that id_length must stay between 8 and 32."""
    with pytest.raises(ValidationError):
        Settings(id_length=4)
    with pytest.raises(ValidationError):
        Settings(id_length=40)
    assert Settings(id_length=8).id_length == 8


def test_item_limit_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(item_limit=0)


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        Settings(log_level="VERBOSE")


def test_get_settings_is_cached():
    get_settings.cache_clear()

    assert get_settings() is get_settings()
