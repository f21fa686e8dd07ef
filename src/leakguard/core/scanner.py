"""Scan orchestrator: walk the tree, scan files, aggregate the report."""

import threading
import uuid
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .file_scanner import FileScanner
from .line_scanner import LineScanner
from .models import Finding, Report, Severity
from .rules import RuleSet, default_rule_set
from .walker import TreeWalker
from ..utils.config import Config
from ..utils.exceptions import InvalidTargetError
from ..utils.logger import get_logger, PerformanceLogger

logger = get_logger(__name__)


class ReportAggregator:
    """Collect findings from any number of producers and build the report."""

    def __init__(self):
        self._lock = threading.Lock()
        self._findings: List[Finding] = []
        self._files_scanned = 0
        self._files_skipped = 0

    def add(self, findings: Iterable[Finding]) -> None:
        """Record the findings of one scanned file."""
        with self._lock:
            self._findings.extend(findings)
            self._files_scanned += 1

    def skip(self) -> None:
        """Record a file that could not be read."""
        with self._lock:
            self._files_skipped += 1

    def bucket(self) -> Dict[Severity, List[Finding]]:
        """Findings grouped by severity."""
        with self._lock:
            return Report(findings=list(self._findings)).by_severity()

    def build(self, target: str, scan_id: str, started_at: datetime) -> Report:
        """Freeze the collected findings into a Report."""
        completed_at = datetime.now()
        with self._lock:
            return Report(
                findings=list(self._findings),
                scan_id=scan_id,
                target=target,
                started_at=started_at,
                completed_at=completed_at,
                duration_seconds=(completed_at - started_at).total_seconds(),
                files_scanned=self._files_scanned,
                files_skipped=self._files_skipped,
            )


class Engine:
    """Credential-leak scanner."""

    def __init__(
        self,
        config: Optional[Config] = None,
        rule_set: Optional[RuleSet] = None,
    ):
        """
        Initialize the engine.

        Args:
            config: Configuration object (defaults only if None)
            rule_set: Rules to apply (the built-in set if None)
        """
        self.config = config or Config(load_files=False)
        self.rule_set = rule_set or default_rule_set()
        self.walker = TreeWalker(
            excluded_dir_names=self.config.scan.excluded_dirs,
            excluded_file_names=self.config.scan.excluded_files,
        )
        self.file_scanner = FileScanner(LineScanner(self.rule_set))
        logger.debug(
            f"Engine initialized with {len(self.rule_set.rules)} rules, "
            f"{len(self.rule_set.suppressions)} suppressions"
        )

    def scan(self, root: Path) -> Report:
        """
        Scan a directory tree.

        Args:
            root: Directory to scan

        Returns:
            Report with every finding; ``passed`` only when there are none

        Raises:
            InvalidTargetError: root is not a directory
            TraversalError: a directory could not be listed (no report)
        """
        root = Path(root)
        if not root.is_dir():
            raise InvalidTargetError(
                f"Target is not a directory: {root}",
                suggestion="Pass the root directory of the source tree to scan",
            )

        scan_id = str(uuid.uuid4())[:8]
        started_at = datetime.now()
        aggregator = ReportAggregator()

        logger.info(f"Starting scan {scan_id} on {root}")

        with PerformanceLogger(logger, f"scan {scan_id}"):
            files = self.walker.walk(root)
            logger.debug(f"Collected {len(files)} files to scan")

            max_workers = self.config.scan.max_workers
            if max_workers > 1 and len(files) > 1:
                with ThreadPoolExecutor(max_workers=max_workers) as executor:
                    futures = [executor.submit(self._scan_one, path, aggregator) for path in files]
                    for future in futures:
                        future.result()
            else:
                for path in files:
                    self._scan_one(path, aggregator)

        report = aggregator.build(str(root), scan_id, started_at)

        logger.info(
            f"Scan {scan_id} complete: {report.total_findings} findings "
            f"in {report.files_scanned} files ({report.files_skipped} skipped)"
        )
        return report

    def _scan_one(self, path: Path, aggregator: ReportAggregator) -> None:
        findings = self.file_scanner.try_scan_file(path)
        if findings is None:
            aggregator.skip()
        else:
            aggregator.add(findings)
