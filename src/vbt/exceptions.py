"""Exception hierarchy for batch transcoding.

Precondition errors are fatal and raised before any output is written.
Per-file and concatenation failures are never raised; they are recorded
in the RunSummary instead.
"""

from pathlib import Path


class VBTError(Exception):
    """Base class for all vbt errors."""

    pass


class ConfigError(VBTError):
    """Raised when a configuration file cannot be loaded or validated."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


class PreconditionError(VBTError):
    """Raised when a run cannot start. Nothing has been written yet."""

    pass


class ToolNotFoundError(PreconditionError):
    """Raised when the encoder executable cannot be resolved."""

    def __init__(self, tool: str) -> None:
        self.tool = tool
        super().__init__(
            f"Encoder executable not found: {tool}. "
            "Install ffmpeg or set encoder_path / VBT_ENCODER_PATH."
        )


class NoInputFilesError(PreconditionError):
    """Raised when the input mask matches no files."""

    def __init__(self, directory: Path, mask: str) -> None:
        self.directory = directory
        self.mask = mask
        super().__init__(f"No input files match '{mask}' in {directory}")


class OutputDirectoryError(PreconditionError):
    """Raised when the output directory cannot be created."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot create output directory {path}: {reason}")


class OutputCollisionError(PreconditionError):
    """Raised when output paths are not unique or would replace an input.

    Attributes:
        conflicts: Maps each contested output path to everything that
            would write it or already lives there.
    """

    def __init__(self, conflicts: dict[Path, list[str]]) -> None:
        self.conflicts = conflicts
        details = "; ".join(
            f"{output} (from {', '.join(sources)})"
            for output, sources in conflicts.items()
        )
        super().__init__(f"Conflicting output paths: {details}")
