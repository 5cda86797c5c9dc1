# Tests
from unittest.mock import AsyncMock, patch

import pytest

from gitfs.config import FileContent, FileEntry
from gitfs.exceptions import Conflict, ContentError, FileNotFound
from gitfs.main import main


def _mock_client(MockClient) -> AsyncMock:
    client = AsyncMock()
    MockClient.return_value.__aenter__.return_value = client
    MockClient.return_value.__aexit__.return_value = False
    return client


# CLI Tests
class TestMain:

    def test_requires_token(self, monkeypatch):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        assert main(["ls", "user/repo"]) == 5

    @patch("gitfs.main.GitHubContentClient")
    def test_ls_prints_entries(self, MockClient, mock_token, config, capsys):
        client = _mock_client(MockClient)
        client.list.return_value = [FileEntry(path="a.ly", sha="111")]

        assert main(["--ref", "main", "ls", "user/repo"]) == 0
        client.list.assert_awaited_once_with("ghp_test_12345", "user/repo", "main")
        assert "111  a.ly" in capsys.readouterr().out

    @patch("gitfs.main.GitHubContentClient")
    def test_cat_prints_content(self, MockClient, mock_token, config, capsys):
        client = _mock_client(MockClient)
        client.read.return_value = FileContent(content="{ c'4 }", sha="111")

        assert main(["cat", "user/repo", "a.ly"]) == 0
        assert capsys.readouterr().out == "{ c'4 }"

    @patch("gitfs.main.GitHubContentClient")
    def test_write_encodes_file(self, MockClient, mock_token, config, tmp_path):
        client = _mock_client(MockClient)
        source = tmp_path / "a.ly"
        source.write_text("abc")

        assert main(["-t", "tok", "write", "user/repo", "a.ly", str(source), "--sha", "111"]) == 0
        client.write.assert_awaited_once_with("tok", "user/repo", "a.ly", "YWJj", "111", None)

    @patch("gitfs.main.GitHubContentClient")
    @pytest.mark.parametrize(
        "error,code",
        [(FileNotFound(), 3), (Conflict(), 4), (ContentError("Status: Bad Gateway", 502), 2)],
    )
    def test_maps_errors_to_exit_codes(self, MockClient, mock_token, config, error, code):
        client = _mock_client(MockClient)
        client.rm.side_effect = error
        assert main(["rm", "user/repo", "a.ly", "111"]) == code

    @patch("gitfs.main.GitHubContentClient")
    def test_missing_sha_is_not_a_config_error(self, MockClient, mock_token, config, caplog):
        client = _mock_client(MockClient)
        client.rm.side_effect = ValueError("A sha is required to delete a.ly")
        assert main(["rm", "user/repo", "a.ly", ""]) == 2
        assert "Invalid request" in caplog.text
        assert "Configuration error" not in caplog.text

    @patch("gitfs.main.GitHubContentClient")
    def test_invalid_settings_exit_with_config_error(self, MockClient, mock_token, config, monkeypatch):
        monkeypatch.setenv("API_URL", "ftp://example.com")
        assert main(["ls", "user/repo"]) == 5
        MockClient.assert_not_called()
