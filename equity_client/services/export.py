import json
import logging
import os
import re
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Optional, Protocol

from ..schemas.analysis import AnalysisResult
from .state import ResultState, current_result

logger = logging.getLogger("services.export")

_UNSAFE = re.compile(r"[:.]")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(ts: datetime) -> str:
    """``2026-10-19T08:15:30.123Z`` (UTC, millisecond precision)."""
    ts = ts.astimezone(timezone.utc)
    return ts.strftime("%Y-%m-%dT%H:%M:%S.") + f"{ts.microsecond // 1000:03d}Z"


def export_filename(ts: datetime) -> str:
    return f"equity-analysis-{_UNSAFE.sub('-', iso_timestamp(ts))}.json"


def serialize_result(result: AnalysisResult) -> bytes:
    return json.dumps(result.to_payload(), indent=2, ensure_ascii=False).encode("utf-8")


class ExportPort(Protocol):
    """Host-side download primitive.

    ``create_downloadable`` stages the bytes and returns a handle,
    ``trigger`` hands it to the user, ``release`` frees whatever was staged.
    ``release`` is always called, also when ``trigger`` fails.
    """

    def create_downloadable(self, data: bytes, filename: str) -> Any:
        ...

    def trigger(self, handle: Any) -> None:
        ...

    def release(self, handle: Any) -> None:
        ...


@dataclass
class StagedFile:
    staging: Path
    target: Path


class DirectoryExportPort:
    """Writes exports into a local directory.

    Bytes are staged in a temporary file next to the target and moved into
    place on trigger, so a failed export never leaves a half-written file.
    """

    def __init__(self, directory):
        self.directory = Path(directory)

    def create_downloadable(self, data: bytes, filename: str) -> StagedFile:
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.directory, prefix=".export-", suffix=".part")
        staged = StagedFile(staging=Path(tmp), target=self.directory / filename)
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
        except OSError:
            self.release(staged)
            raise
        return staged

    def trigger(self, handle: StagedFile) -> None:
        os.replace(handle.staging, handle.target)

    def release(self, handle: StagedFile) -> None:
        handle.staging.unlink(missing_ok=True)


class ExportService:
    def __init__(self, port: ExportPort, clock: Callable[[], datetime] = utcnow):
        self.port = port
        self.clock = clock

    def export(self, state: ResultState) -> Optional[str]:
        """Hand the current result to the port; ``None`` when there is nothing to export."""
        result = current_result(state)
        if result is None:
            return None

        filename = export_filename(self.clock())
        handle = self.port.create_downloadable(serialize_result(result), filename)
        try:
            self.port.trigger(handle)
        finally:
            self.port.release(handle)
        logger.info("exported %s", filename)
        return filename
