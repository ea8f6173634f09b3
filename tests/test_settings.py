"""Tests for application settings."""

import pytest
from unittest.mock import patch

from src.config.settings import Settings


def test_owner_email():
    """Test the configured owner address is returned."""
    with patch.object(Settings, 'OWNER_EMAIL', 'owner@chrono.app'):
        assert Settings.get_owner_email() == 'owner@chrono.app'


def test_owner_email_missing():
    """Test that a missing owner address is an error."""
    with patch.object(Settings, 'OWNER_EMAIL', None):
        with pytest.raises(ValueError, match="OWNER_EMAIL"):
            Settings.get_owner_email()


def test_cors_origins_split():
    """Test comma separated origins."""
    with patch.object(Settings, 'CORS_ORIGINS', 'https://chrono.app, http://localhost:3000,'):
        assert Settings.get_cors_origins() == ['https://chrono.app', 'http://localhost:3000']


def test_record_defaults():
    """Test the anonymous record defaults."""
    assert Settings.ANONYMOUS_NAME == 'Anonymous User'
    assert Settings.NO_EMAIL_PLACEHOLDER == 'No email provided'
