import json
import pytest
from unittest.mock import Mock, patch

from google_drive_agent.cli import main
from google_drive_agent.services.drive import DriveService


@pytest.fixture
def env_file(tmp_path):
    path = tmp_path / ".env"
    path.write_text(
        "DAEMO_AGENT_API_KEY=agent-key\n"
        "GOOGLE_CLIENT_ID=client-id\n"
        "GOOGLE_CLIENT_SECRET=client-secret\n"
        "GOOGLE_REFRESH_TOKEN=refresh-token\n",
        encoding="utf-8",
    )
    return path


@pytest.mark.unit
class TestCli:

    def test_functions(self, capsys):
        assert main(["functions"]) == 0

        functions = json.loads(capsys.readouterr().out)
        assert [f["name"] for f in functions] == ["searchFiles", "readFileContent", "createFolder", "moveFile"]

    def test_check_config(self, clean_environment, env_file, capsys):
        assert main(["--env-file", str(env_file), "check-config"]) == 0

        out = capsys.readouterr().out
        assert "Configuration looks good." in out
        assert "client-secret" not in out

    def test_missing_config_exits_with_error(self, clean_environment, tmp_path, capsys):
        empty = tmp_path / "empty.env"
        empty.write_text("", encoding="utf-8")

        assert main(["--env-file", str(empty), "check-config"]) == 1

        err = capsys.readouterr().err
        assert "Missing required environment variables: DAEMO_AGENT_API_KEY" in err
        assert "Please check your .env file." in err

    def test_call_search(self, clean_environment, env_file, mock_drive_service, sample_drive_files, capsys):
        mock_drive_service.files.return_value.list.return_value.execute.return_value = sample_drive_files

        with patch('google_drive_agent.cli.DriveService.from_credentials',
                   return_value=DriveService(mock_drive_service)) as mock_from_credentials:
            code = main(["--env-file", str(env_file), "call", "searchFiles",
                         "--args", '{"query": "project", "limit": 5}'])

        assert code == 0
        mock_from_credentials.assert_called_once_with("client-id", "client-secret", "refresh-token")
        result = json.loads(capsys.readouterr().out)
        assert len(result["files"]) == 3

    def test_start(self, clean_environment, env_file, mock_drive_service, capsys):
        with patch('google_drive_agent.cli.DriveService.from_credentials',
                   return_value=DriveService(mock_drive_service)):
            assert main(["--env-file", str(env_file), "start"]) == 0

        out = capsys.readouterr().out
        assert "Google Drive Knowledge Agent online!" in out
        mock_drive_service.files.assert_not_called()

    @pytest.mark.parametrize("raw_args", ["not json", "[1, 2]"])
    def test_call_with_bad_args(self, clean_environment, env_file, raw_args, capsys):
        assert main(["--env-file", str(env_file), "call", "searchFiles", "--args", raw_args]) == 2
        assert "Error" in capsys.readouterr().err

    def test_call_unknown_function(self, clean_environment, env_file, mock_drive_service, capsys):
        with patch('google_drive_agent.cli.DriveService.from_credentials',
                   return_value=DriveService(mock_drive_service)):
            assert main(["--env-file", str(env_file), "call", "deleteFile"]) == 2

        assert "Unknown function: deleteFile" in capsys.readouterr().err

    def test_authorize(self, capsys):
        with patch('google_drive_agent.cli.run_authorization_flow',
                   return_value=Mock(refresh_token="1//new-token")) as mock_flow:
            assert main(["authorize", "--client-secrets", "client.json", "--port", "9090"]) == 0

        mock_flow.assert_called_once_with("client.json", port=9090)
        assert "GOOGLE_REFRESH_TOKEN=1//new-token" in capsys.readouterr().out

    def test_authorize_without_refresh_token(self, capsys):
        with patch('google_drive_agent.cli.run_authorization_flow', return_value=Mock(refresh_token=None)):
            assert main(["authorize", "--client-secrets", "client.json"]) == 1
