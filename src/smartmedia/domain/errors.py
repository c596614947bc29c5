"""Error hierarchy for reference classification and stream resolution."""

from __future__ import annotations


class SmartMediaError(Exception):
    """Base class for all smartmedia errors."""


class FetchError(SmartMediaError):
    """Raised by the playback-config fetcher on network or site-side failure."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ResolutionError(SmartMediaError):
    """Base class for stream resolution failures."""


class ClassificationAmbiguousError(ResolutionError):
    """Reserved. Classification is total and never raises this."""


class ExtractionFailedError(ResolutionError):
    """Fetching or parsing the playback-configuration document failed."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"extraction failed: {cause}")
        self.cause = cause


class NoPlayableStreamError(ResolutionError):
    """The document parsed but offered no usable candidate or manifest."""

    def __init__(self, site_id: str = "") -> None:
        super().__init__(
            f"no playable stream for {site_id}" if site_id else "no playable stream"
        )
        self.site_id = site_id
