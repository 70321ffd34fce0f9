from pathlib import Path
from typing import Optional


class PipelineError(RuntimeError):
    """Base class for conditions that abort a whole generation run."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class TemplateError(PipelineError):
    pass


class InputDirectoryError(PipelineError):
    pass


class EmptyImageStoreError(PipelineError):
    pass


class OutputDirectoryError(PipelineError):
    pass


class AssetWriteError(PipelineError):
    pass
