"""Domain models for one ingestion run."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict


def file_extension(name: str) -> str:
    """Return the lower-cased extension of *name* including the dot.

    The extension is whatever follows the last ``.``; a name without any
    dot has no extension and yields ``""``.
    """
    _, dot, suffix = name.rpartition(".")
    if not dot:
        return ""
    return f".{suffix.lower()}"


class SourceFile(BaseModel):
    """A regular file discovered while scanning the documents directory."""

    model_config = ConfigDict(frozen=True)

    path: Path
    name: str
    extension: str
    size_bytes: int

    @classmethod
    def from_path(cls, path: Path) -> SourceFile:
        return cls(
            path=path,
            name=path.name,
            extension=file_extension(path.name),
            size_bytes=path.stat().st_size,
        )

    @property
    def size_mb(self) -> float:
        return self.size_bytes / (1024.0 * 1024.0)


class IngestionReport(BaseModel):
    """Immutable summary of one :meth:`IngestionPipeline.run`.

    Attributes
    ----------
    succeeded:
        Files whose segments were all embedded and stored.
    failed:
        Files that raised during conversion, embedding or storage.
    skipped:
        Regular files with an unsupported extension.
    total_segments:
        Segments stored across all succeeded files.
    failed_files:
        Names of the failed files, in processing order.
    elapsed_seconds:
        Wall-clock duration of the run.
    """

    model_config = ConfigDict(frozen=True)

    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    total_segments: int = 0
    failed_files: tuple[str, ...] = ()
    elapsed_seconds: float = 0.0

    def summary(self) -> str:
        return (
            f"Success: {self.succeeded}, Failures: {self.failed}, "
            f"Skipped: {self.skipped}, Total segments: {self.total_segments}"
        )
