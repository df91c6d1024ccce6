"""File transport (requires a file system)"""

from pathlib import Path
from typing import Any, Dict, Union
import os

from loggical.core.log_metadata import LogMetadata
from loggical.environment import has_filesystem
from loggical.transports.base_transport import BaseTransport


class FileTransport(BaseTransport):
    """
    Append log lines to a file.

    Every write opens the file, appends one line and closes it again, so
    no handle is held between calls. There is no rotation.
    """

    name = "file"

    def __init__(
        self,
        filename: Union[str, Path],
        append: bool = True,
        eol: str = os.linesep,
        include_timestamp: bool = True,
        encoding: str = "utf-8",
        **kwargs,
    ):
        """
        Initialize file transport.

        Args:
            filename: Path to log file
            append: Keep existing content (False truncates once, now)
            eol: Line terminator
            include_timestamp: Reported in status only; the formatted
                               line already carries the timestamp
            encoding: File encoding
            **kwargs: min_level, filter, silent

        Raises:
            RuntimeError: If the runtime has no file system
        """
        super().__init__(**kwargs)
        if not has_filesystem():
            raise RuntimeError("FileTransport is only available where a file system exists")

        self.filepath = Path(filename)
        self.append = append
        self.eol = eol
        self.include_timestamp = include_timestamp
        self.encoding = encoding
        self._initialize_file()

    @property
    def filename(self) -> str:
        return str(self.filepath)

    def _initialize_file(self):
        if not self.append and self.filepath.exists():
            self.filepath.write_text("", encoding=self.encoding)

    def write(self, formatted_message: str, metadata: LogMetadata):
        """Append message + eol."""
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(self.filepath, "a", encoding=self.encoding, newline="") as f:
            f.write(f"{formatted_message}{self.eol}")

    def configure(self, **options):
        """
        Update options.

        append is fixed at construction and ignored here. A new filename
        is prepared with the construction-time append mode.
        """
        super().configure(**options)
        if isinstance(options.get("eol"), str):
            self.eol = options["eol"]
        if isinstance(options.get("include_timestamp"), bool):
            self.include_timestamp = options["include_timestamp"]
        if isinstance(options.get("filename"), (str, Path)):
            self.filepath = Path(options["filename"])
            self._initialize_file()

    def get_status(self) -> Dict[str, Any]:
        status = super().get_status()
        exists = self.filepath.exists()
        status.update(
            filename=self.filename,
            append=self.append,
            eol=self.eol.replace("\r", "\\r").replace("\n", "\\n"),
            include_timestamp=self.include_timestamp,
            file_exists=exists,
            file_size=self.filepath.stat().st_size if exists else 0,
        )
        return status
