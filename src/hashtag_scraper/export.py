"""CSV export of scraped records."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from hashtag_scraper.models import ErrorKind

logger = logging.getLogger(__name__)

CSV_MEDIA_TYPE = "text/csv;charset=utf-8"
DEFAULT_FILENAME = "scraped_posts.csv"

ColumnPolicy = Literal["first", "union"]


class EmptyInputError(ValueError):
    """Raised when an export is attempted without any records."""

    kind = ErrorKind.EMPTY_INPUT

    def __init__(self, message: str = "There are no records to export.") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class ExportArtifact:
    """A file ready to be handed to the host's download mechanism."""

    filename: str
    media_type: str
    content: bytes

    @property
    def content_disposition(self) -> str:
        """Header value that makes browsers save the artifact as a file."""
        return f'attachment; filename="{self.filename}"'


def _columns(records: Sequence[Mapping[str, Any]], column_policy: ColumnPolicy) -> list[str]:
    if column_policy == "first":
        return list(records[0].keys())
    if column_policy == "union":
        # dict keeps first-seen order
        seen: dict[str, None] = {}
        for record in records:
            seen.update(dict.fromkeys(record.keys()))
        return list(seen)
    raise ValueError(f"Unknown column policy: {column_policy}")


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _cell(value: Any) -> str:
    return json.dumps(_stringify(value), ensure_ascii=False)


def to_delimited_text(
    records: Sequence[Mapping[str, Any]],
    column_policy: ColumnPolicy = "first",
) -> str:
    """Flatten records into CSV text.

    With the default ``"first"`` policy the columns are the first record's
    keys in order; keys only present in later records are dropped. The
    ``"union"`` policy uses every key seen, in first-seen order. Missing and
    None values render as empty cells.

    Header names are written as-is. Each cell is written as a JSON string
    literal, so commas, quotes and newlines inside a value stay in one cell.
    This is not strict RFC 4180 quoting: embedded quotes come out as ``\\"``
    rather than ``""``.

    Args:
        records: Records to export, in display order
        column_policy: How the column set is derived

    Returns:
        Header line and one line per record, joined by ``\\n`` with no
        trailing newline

    Raises:
        EmptyInputError: If records is empty
    """
    if not records:
        raise EmptyInputError()

    columns = _columns(records, column_policy)
    lines = [",".join(columns)]
    for record in records:
        lines.append(",".join(_cell(record.get(column)) for column in columns))
    return "\n".join(lines)


def build_artifact(text: str, filename: str = DEFAULT_FILENAME) -> ExportArtifact:
    """Package CSV text as a downloadable artifact."""
    return ExportArtifact(
        filename=filename,
        media_type=CSV_MEDIA_TYPE,
        content=text.encode("utf-8"),
    )


class FileDelivery(ABC):
    """Host mechanism that saves an artifact for the user."""

    @abstractmethod
    def deliver(self, artifact: ExportArtifact) -> None:
        """Save or offer the artifact to the user."""
        pass


class DirectoryDelivery(FileDelivery):
    """Saves artifacts into a download directory."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)
        self.last_path: Path | None = None

    def deliver(self, artifact: ExportArtifact) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        # Keep the artifact inside the download directory
        path = self.directory / Path(artifact.filename).name
        path.write_bytes(artifact.content)
        self.last_path = path
        logger.info(f"Saved {artifact.filename} ({len(artifact.content)} bytes) to {path}")


def deliver_as_file(text: str, filename: str, delivery: FileDelivery) -> None:
    """Hand CSV text to the host as a downloadable file.

    Delivery is best effort: failures are logged and not reported back.

    Args:
        text: CSV text to deliver
        filename: Name the file should be saved under
        delivery: Host delivery mechanism
    """
    artifact = build_artifact(text, filename)
    try:
        delivery.deliver(artifact)
    except OSError as e:
        logger.error(f"Could not deliver {filename}: {e}")
