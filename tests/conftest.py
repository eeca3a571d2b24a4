# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

"""
Shared pytest fixtures for the HotelLux admin client tests.
"""

from unittest.mock import MagicMock

import pytest
from azure.core.credentials import AccessToken, TokenCredential

from HotelLux.Admin.core.config import AdminConfig


@pytest.fixture
def mock_credential():
    """Credential returning a long-lived dummy token."""
    credential = MagicMock(spec=TokenCredential)
    credential.get_token.return_value = AccessToken("test_token_12345", 4102444800)
    return credential


@pytest.fixture
def test_config():
    """Test configuration with safe defaults."""
    return AdminConfig(
        http_retries=1,
        http_backoff=0.1,
        http_timeout=5,
    )


@pytest.fixture
def sample_base_url():
    """Standard test base URL."""
    return "https://admin.hotellux.example"


@pytest.fixture
def sample_users_payload():
    """Raw user rows as the REST API returns them."""
    return [
        {"id": 1, "username": "ada", "email": "ada@hotellux.example", "role": "ADMIN"},
        {"id": 2, "username": "bob", "email": "bob@hotellux.example", "role": "CUSTOMER"},
    ]
