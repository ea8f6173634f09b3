"""Tests for caller identity verification."""

import pytest
from unittest.mock import MagicMock, patch
from firebase_admin import auth as firebase_auth

from src.feedback.auth import extract_bearer_token, get_caller_identity, verify_id_token


@pytest.mark.parametrize('header,expected', [
    ('Bearer abc.def.ghi', 'abc.def.ghi'),
    ('bearer token', 'token'),
    ('Basic dXNlcjpwYXNz', None),
    ('Bearer ', None),
    ('', None),
    (None, None),
])
def test_extract_bearer_token(header, expected):
    """Test bearer token extraction."""
    assert extract_bearer_token(header) == expected


def test_verify_id_token_success():
    """Test that verified claims become a caller identity."""
    claims = {'uid': 'uid-123', 'email': 'alice@x.com'}
    with patch('src.feedback.auth.get_firebase_app'), \
            patch('src.feedback.auth.firebase_auth.verify_id_token', return_value=claims):
        identity = verify_id_token('token')

    assert identity.uid == 'uid-123'
    assert identity.email == 'alice@x.com'


def test_verify_id_token_rejected():
    """Test that an invalid token yields no identity."""
    error = firebase_auth.InvalidIdTokenError('bad token')
    with patch('src.feedback.auth.get_firebase_app'), \
            patch('src.feedback.auth.firebase_auth.verify_id_token', side_effect=error):
        assert verify_id_token('token') is None


@pytest.mark.asyncio
async def test_get_caller_identity_without_header():
    """Test that a request without Authorization resolves to None."""
    request = MagicMock()
    request.headers = {}

    with patch('src.feedback.auth.verify_id_token') as verify:
        assert await get_caller_identity(request) is None
        verify.assert_not_called()


@pytest.mark.asyncio
async def test_get_caller_identity_with_token():
    """Test that a bearer token is handed to verification."""
    request = MagicMock()
    request.headers = {'Authorization': 'Bearer abc'}

    with patch('src.feedback.auth.verify_id_token', return_value='identity') as verify:
        assert await get_caller_identity(request) == 'identity'
        verify.assert_called_once_with('abc')
