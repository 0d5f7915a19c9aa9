"""lftp client: fetches directory listings and runs generated scripts."""
from __future__ import annotations

import logging
import shlex
import subprocess

from ..core.config import TransferClientConfig
from ..core.errors import ProcessError
from ..core.models import DirectoryEntry
from .listing import parse_listing

logger = logging.getLogger(__name__)

LIST_FORMAT = "%F %T %z %Z"


class LftpClient:
    """Runs lftp as a subprocess.

    Each call is a single attempt without timeout.
    """

    def __init__(self, config: TransferClientConfig):
        self._config = config

    @property
    def config(self) -> TransferClientConfig:
        return self._config

    def list_command(self, site: str, remote_dir: str) -> list[str]:
        """Command that prints the listing of remote_dir."""
        path = remote_dir if remote_dir.endswith("/") else remote_dir + "/"
        return [
            self._config.tool_path,
            "-c",
            f"open {site}; cls --date --time-style={shlex.quote(LIST_FORMAT)} {shlex.quote(path)}",
        ]

    def list_dirs(self, site: str, remote_dir: str) -> list[DirectoryEntry]:
        """Fetch and parse the listing of remote_dir on site.

        Raises:
            ProcessError: lftp failed.
            ListingParseError: the output contained a malformed line.
        """
        output = self._run(self.list_command(site, remote_dir))
        return parse_listing(output.decode("utf-8", errors="replace"))

    def run_script(self, script: str) -> None:
        """Feed a script to lftp on stdin."""
        self._run([self._config.tool_path], stdin=script.encode("utf-8"))

    def _run(self, args: list[str], stdin: bytes | None = None) -> bytes:
        logger.debug("Running: %s", shlex.join(args))
        try:
            result = subprocess.run(args, input=stdin, capture_output=True)
        except OSError as e:
            raise ProcessError(f"{args[0]!r} failed to start: {e}") from e
        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise ProcessError(
                f"{shlex.join(args)!r} exited with status {result.returncode}: {stderr}",
                returncode=result.returncode,
                stderr=stderr,
            )
        return result.stdout
