from __future__ import annotations


class LogoFetcherError(RuntimeError):
    """Base class for errors raised by logo_fetcher."""


class MalformedInputError(LogoFetcherError):
    """Upstream symbol table cannot be parsed or lacks a mandatory column."""


class TransportError(LogoFetcherError):
    def __init__(self, *, url: str, cause: Exception):
        super().__init__(f"request failed for url={url}: {cause}")
        self.url = url
        self.__cause__ = cause


class HttpStatusError(LogoFetcherError):
    def __init__(self, *, url: str, status_code: int):
        super().__init__(f"HTTP error: {status_code} for url={url}")
        self.url = url
        self.status_code = int(status_code)


class StorageError(LogoFetcherError):
    def __init__(self, *, path: str, cause: OSError):
        super().__init__(f"write failed for path={path}: {cause}")
        self.path = path
        self.__cause__ = cause


class PipelineStageError(LogoFetcherError):
    def __init__(self, *, stage: str, cause: Exception):
        super().__init__(f"{stage} failed: {cause}")
        self.stage = stage
        self.cause = cause
        self.__cause__ = cause
