"""Tests for the lftp client."""
import subprocess
from unittest.mock import patch

import pytest

from fetchq.core.config import TransferClientConfig
from fetchq.core.errors import ListingParseError, ProcessError
from fetchq.services.transfer import LftpClient


LISTING = (
    b"2016-01-02 15:04:05 +0100 CET /misc/The.Wire.S01E01/\n"
    b"2016-01-02 15:04:06 +0100 CET /misc/link@\n"
)


def completed(returncode=0, stdout=b"", stderr=b""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestLftpClient:
    """Tests for LftpClient."""

    @pytest.fixture
    def client(self):
        return LftpClient(TransferClientConfig(tool_path="/bin/lftp", get_command="mirror"))

    def test_list_command(self, client):
        """Test the listing command for a site and directory."""
        assert client.list_command("siteA", "/misc") == [
            "/bin/lftp",
            "-c",
            "open siteA; cls --date --time-style='%F %T %z %Z' /misc/",
        ]

    def test_list_command_quotes_path(self, client):
        """Test directories with spaces are quoted."""
        assert client.list_command("siteA", "/my dir/")[2].endswith("'/my dir/'")

    def test_list_dirs(self, client):
        """Test the listing output is parsed."""
        with patch("fetchq.services.transfer.subprocess.run", return_value=completed(stdout=LISTING)) as run:
            entries = client.list_dirs("siteA", "/misc")

        assert run.call_args.args[0][0] == "/bin/lftp"
        assert [e.path for e in entries] == ["/misc/The.Wire.S01E01", "/misc/link"]
        assert entries[1].is_symlink is True

    def test_list_dirs_malformed(self, client):
        """Test malformed output raises ListingParseError."""
        with patch("fetchq.services.transfer.subprocess.run", return_value=completed(stdout=b"oops\n")):
            with pytest.raises(ListingParseError):
                client.list_dirs("siteA", "/misc")

    def test_run_script(self, client):
        """Test the script is passed on stdin."""
        with patch("fetchq.services.transfer.subprocess.run", return_value=completed()) as run:
            client.run_script("open siteA\nexit\n")

        assert run.call_args.args[0] == ["/bin/lftp"]
        assert run.call_args.kwargs["input"] == b"open siteA\nexit\n"

    def test_nonzero_exit(self, client):
        """Test a failing lftp raises ProcessError with its stderr."""
        with patch(
            "fetchq.services.transfer.subprocess.run",
            return_value=completed(returncode=1, stderr=b"Login failed\n"),
        ):
            with pytest.raises(ProcessError) as exc_info:
                client.run_script("exit\n")

        assert exc_info.value.returncode == 1
        assert exc_info.value.stderr == "Login failed"

    def test_missing_binary(self, client):
        """Test a binary that cannot start raises ProcessError."""
        with patch("fetchq.services.transfer.subprocess.run", side_effect=FileNotFoundError("lftp")):
            with pytest.raises(ProcessError, match="failed to start"):
                client.list_dirs("siteA", "/misc")
