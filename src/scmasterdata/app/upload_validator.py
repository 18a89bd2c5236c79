from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4


MAX_LOGO_BYTES = 2 * 1024 * 1024
ERROR_NOT_IMAGE = "Only image files are allowed."
ERROR_TOO_LARGE = "Image must be less than 2MB."
_PREVIEW_SCHEME = "preview:"


@dataclass(frozen=True, slots=True)
class CandidateFile:
    name: str
    mime_type: str
    size: int
    data: bytes = b""
    path: Path | None = None

    @classmethod
    def from_path(cls, path: Path | str) -> CandidateFile:
        """Describes a file on disk without reading its contents."""
        source = Path(path)
        guessed, _encoding = mimetypes.guess_type(source.name)
        return cls(
            name=source.name,
            mime_type=guessed or "application/octet-stream",
            size=source.stat().st_size,
            path=source,
        )

    def read_bytes(self) -> bytes:
        if self.path is None:
            return self.data
        return self.path.read_bytes()


@dataclass(slots=True, eq=False)
class PreviewHandle:
    """Revocable reference to a selected file's bytes."""

    token: str
    data: bytes
    released: bool = False


class PreviewHandleRegistry:
    def __init__(self) -> None:
        self._live: dict[str, PreviewHandle] = {}

    @property
    def live_count(self) -> int:
        return len(self._live)

    def acquire(self, candidate: CandidateFile) -> PreviewHandle:
        handle = PreviewHandle(token=f"{_PREVIEW_SCHEME}{uuid4().hex}", data=candidate.read_bytes())
        self._live[handle.token] = handle
        return handle

    def release(self, handle: PreviewHandle | None) -> None:
        if handle is None or handle.released:
            return
        handle.released = True
        self._live.pop(handle.token, None)

    def resolve(self, token: str) -> bytes | None:
        handle = self._live.get(str(token or ""))
        if handle is None:
            return None
        return handle.data


@dataclass(slots=True)
class UploadState:
    selected_file: CandidateFile | None = None
    preview_handle: PreviewHandle | None = None
    error: str = ""


@dataclass(frozen=True, slots=True)
class UploadDecision:
    accepted: bool
    error: str = ""


def check_candidate(candidate: CandidateFile, *, max_bytes: int = MAX_LOGO_BYTES) -> str:
    """Returns the rejection message for ``candidate`` or an empty string."""
    mime_type = str(candidate.mime_type or "").strip().casefold()
    if not mime_type.startswith("image/"):
        return ERROR_NOT_IMAGE
    if int(candidate.size) > int(max_bytes):
        return ERROR_TOO_LARGE
    return ""


class UploadValidator:
    def __init__(
        self,
        *,
        registry: PreviewHandleRegistry | None = None,
        max_bytes: int = MAX_LOGO_BYTES,
        logger: logging.Logger | None = None,
    ) -> None:
        self._registry = registry if registry is not None else PreviewHandleRegistry()
        self._max_bytes = max(1, int(max_bytes))
        self._logger = logger or logging.getLogger("scmasterdata.upload")
        self._state = UploadState()

    def __enter__(self) -> UploadValidator:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    @property
    def registry(self) -> PreviewHandleRegistry:
        return self._registry

    @property
    def selected_file(self) -> CandidateFile | None:
        return self._state.selected_file

    @property
    def preview_handle(self) -> PreviewHandle | None:
        return self._state.preview_handle

    @property
    def error(self) -> str:
        return self._state.error

    def select(self, candidate: CandidateFile | None) -> UploadDecision:
        self._state.error = ""
        if candidate is None:
            return UploadDecision(accepted=False)

        message = check_candidate(candidate, max_bytes=self._max_bytes)
        if message:
            self._state.error = message
            self._logger.debug("Rejected upload %s: %s", candidate.name, message)
            return UploadDecision(accepted=False, error=message)

        handle = self._registry.acquire(candidate)
        self._registry.release(self._state.preview_handle)
        self._state.selected_file = candidate
        self._state.preview_handle = handle
        self._logger.debug("Accepted upload %s (%d bytes)", candidate.name, candidate.size)
        return UploadDecision(accepted=True)

    def clear(self) -> None:
        self._registry.release(self._state.preview_handle)
        self._state = UploadState()

    def close(self) -> None:
        self.clear()
