import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from ledgerly.core.config import Settings, get_settings


def test_settings_defaults():
    """Test that settings load with correct defaults."""
    get_settings.cache_clear()

    settings = Settings()

    assert settings.app_name == "Ledgerly"
    assert settings.api_prefix == "/api"
    assert settings.invoice_tax_rate == 0.14
    assert settings.permission_cache_ttl_seconds == 300
    assert settings.access_token_expire_minutes == 60 * 24 * 7


def test_settings_env_override():
    """Test that environment variables override defaults."""
    with patch.dict(os.environ, {
        "LEDGERLY_ENVIRONMENT": "production",
        "LEDGERLY_INVOICE_TAX_RATE": "0.1",
        "LEDGERLY_PORT": "9000",
    }):
        settings = Settings()

        assert settings.is_production is True
        assert settings.is_development is False
        assert settings.is_testing is False
        assert settings.invoice_tax_rate == 0.1
        assert settings.port == 9000


def test_cors_origins_parsing():
    """CSV strings are split into a list."""
    settings = Settings(cors_origins="http://example.com, http://test.com")
    assert settings.cors_origins == ["http://example.com", "http://test.com"]


@pytest.mark.parametrize("rate", [-0.01, 1.5])
def test_tax_rate_must_be_a_fraction(rate):
    with pytest.raises(ValidationError) as exc_info:
        Settings(invoice_tax_rate=rate)
    assert "invoice_tax_rate must be between 0 and 1" in str(exc_info.value)
