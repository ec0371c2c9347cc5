"""
Unit tests for credential and service helpers.
"""

import pytest
from unittest.mock import Mock, patch

from google.oauth2.credentials import Credentials

from google_drive_agent.auth.credentials import (
    SCOPES, TOKEN_URI, build_credentials, get_drive_service, to_user_creds, to_client_creds,
    run_authorization_flow
)


@pytest.mark.unit
class TestCredentials:

    def test_build_credentials_defers_token_fetch(self):
        """No access token is fetched at construction time."""
        creds = build_credentials("client_id", "client_secret", "refresh_token")

        assert isinstance(creds, Credentials)
        assert creds.token is None
        assert creds.refresh_token == "refresh_token"
        assert creds.client_id == "client_id"
        assert creds.client_secret == "client_secret"
        assert creds.token_uri == TOKEN_URI
        assert not creds.valid

    @patch('google_drive_agent.auth.credentials.build')
    def test_get_drive_service(self, mock_build):
        creds = Mock(spec=Credentials)

        service = get_drive_service(creds)

        mock_build.assert_called_once_with("drive", "v3", credentials=creds, cache_discovery=False)
        assert service is mock_build.return_value

    def test_aiogoogle_creds(self, mock_credentials):
        user_creds = to_user_creds(mock_credentials)
        client_creds = to_client_creds(mock_credentials)

        assert user_creds["access_token"] == "mock_token"
        assert user_creds["refresh_token"] == "mock_refresh_token"
        assert client_creds["client_id"] == "mock_client_id"
        assert client_creds["client_secret"] == "mock_client_secret"

    @patch('google_drive_agent.auth.credentials.InstalledAppFlow.from_client_secrets_file')
    def test_run_authorization_flow(self, mock_from_file, mock_credentials):
        mock_flow = Mock()
        mock_flow.run_local_server.return_value = mock_credentials
        mock_from_file.return_value = mock_flow

        creds = run_authorization_flow("client.json", port=9090)

        mock_from_file.assert_called_once_with("client.json", SCOPES)
        mock_flow.run_local_server.assert_called_once_with(port=9090, access_type="offline", prompt="consent")
        assert creds is mock_credentials
