"""Read one file and scan it line by line."""

from pathlib import Path
from typing import List, Optional

from .line_scanner import LineScanner
from .models import Finding
from ..utils.logger import get_logger

logger = get_logger(__name__)


class FileScanner:
    """Produce findings for a single file."""

    def __init__(self, line_scanner: LineScanner, encoding: str = "utf-8"):
        self.line_scanner = line_scanner
        self.encoding = encoding

    def scan_file(self, path: Path) -> List[Finding]:
        """
        Scan a single file for secrets.

        A path that turns out to be a directory is ignored silently. Any
        other read failure logs a warning and yields no findings.

        Args:
            path: File path

        Returns:
            Findings in line order (possibly empty)
        """
        return self.try_scan_file(path) or []

    def try_scan_file(self, path: Path) -> Optional[List[Finding]]:
        """Like ``scan_file`` but returns None when the file was skipped with a warning."""
        path = Path(path)

        try:
            content = path.read_text(encoding=self.encoding)
        except IsADirectoryError:
            return []
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {path}: {e}")
            return None

        findings: List[Finding] = []
        file_path = str(path)

        # read_text already folded \r\n and \r into \n; other Unicode breaks stay in-line
        lines = content.split("\n")
        if lines[-1] == "":
            lines.pop()

        for linenum, line in enumerate(lines, 1):
            findings.extend(self.line_scanner.scan_line(line, linenum, file_path))

        return findings
