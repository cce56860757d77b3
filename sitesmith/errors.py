from pathlib import Path


class SiteBuildError(Exception):
    """Base class for everything a build can fail with."""


class FileIOError(SiteBuildError):
    """A file could not be opened, decoded, written or created."""

    def __init__(self, message: str, path: Path = None):
        super().__init__(message)
        self.path = path


class PathError(SiteBuildError):
    pass


class MalformedDocumentError(SiteBuildError):
    """Front matter was opened with a marker but never closed."""


class RenderError(SiteBuildError):
    """The template engine rejected a document or one of its layouts."""

    def __init__(self, message: str, path: Path = None):
        super().__init__(message)
        self.path = path


class ConfigError(SiteBuildError):
    pass
