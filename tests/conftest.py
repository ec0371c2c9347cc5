import pytest
import sys
from pathlib import Path
from unittest.mock import Mock, MagicMock, AsyncMock, patch

# Add the src directory to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from google.oauth2.credentials import Credentials


@pytest.fixture
def mock_drive_service():
    """Mock Drive v3 resource for testing."""
    mock_service = Mock()
    mock_files = Mock()
    mock_service.files.return_value = mock_files
    return mock_service


@pytest.fixture
def mock_files(mock_drive_service):
    """The files() collection of the mock Drive resource."""
    return mock_drive_service.files.return_value


@pytest.fixture
def drive_service(mock_drive_service):
    """DriveService wrapping the mock Drive resource."""
    from google_drive_agent.services.drive import DriveService
    return DriveService(mock_drive_service)


@pytest.fixture
def sample_drive_files():
    """Sample files() list response; the third file has no name or link."""
    return {
        "files": [
            {
                "id": "file_1",
                "name": "Project Plan",
                "mimeType": "application/vnd.google-apps.document",
                "webViewLink": "https://docs.google.com/document/d/file_1/edit"
            },
            {
                "id": "file_2",
                "name": "project-notes.txt",
                "mimeType": "text/plain",
                "webViewLink": "https://drive.google.com/file/d/file_2/view"
            },
            {
                "id": "file_3",
                "mimeType": "application/pdf"
            }
        ]
    }


@pytest.fixture
def mock_credentials():
    """Valid OAuth2 credentials that never hit the network."""
    creds = Mock(spec=Credentials)
    creds.valid = True
    creds.expired = False
    creds.token = "mock_token"
    creds.refresh_token = "mock_refresh_token"
    creds.token_uri = "https://oauth2.googleapis.com/token"
    creds.client_id = "mock_client_id"
    creds.client_secret = "mock_client_secret"
    creds.scopes = None
    return creds


@pytest.fixture
def mock_async_drive_context():
    """Mock aiogoogle instance and discovered Drive API."""
    mock_aiogoogle = MagicMock()
    mock_drive_api = Mock()
    mock_aiogoogle.discover = AsyncMock(return_value=mock_drive_api)
    mock_aiogoogle.as_user = AsyncMock()
    return mock_aiogoogle, mock_drive_api


@pytest.fixture
def mock_aiogoogle(mock_async_drive_context):
    """Patch the Aiogoogle class used by the async Drive service."""
    mock_aiogoogle, _ = mock_async_drive_context
    with patch('google_drive_agent.services.drive.async_api_service.Aiogoogle') as mock_cls:
        mock_cls.return_value.__aenter__.return_value = mock_aiogoogle
        mock_cls.return_value.__aexit__.return_value = None
        yield mock_cls


@pytest.fixture
def async_drive_service(mock_credentials, mock_aiogoogle):
    """AsyncDriveService with Aiogoogle patched out."""
    from google_drive_agent.services.drive import AsyncDriveService
    return AsyncDriveService(mock_credentials)


@pytest.fixture
def clean_environment(monkeypatch):
    """Remove agent settings from the process environment."""
    for name in (
        "DAEMO_AGENT_API_KEY", "GOOGLE_CLIENT_ID", "GOOGLE_CLIENT_SECRET", "GOOGLE_REFRESH_TOKEN",
        "DAEMO_GATEWAY_URL", "DRIVE_AGENT_SERVICE_NAME", "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
