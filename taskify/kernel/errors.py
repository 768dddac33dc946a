from __future__ import annotations

import re
from typing import Any


_ERROR_CODE_RE = re.compile(r"^[a-z][a-z0-9_]*(\.[a-z][a-z0-9_]*)*$")


class TaskifyError(Exception):
    """Base domain error.

    Domain errors are identified by their class (the kind), never by message
    text. Each transport boundary maps the kind to its own status code:
    see `taskify.kernel.rpc.errors` and `taskify.kernel.http.errors`.

    - `code` is stable for programmatic handling.
    - `message` is safe to show to clients.
    """

    def __init__(
        self,
        *,
        code: str,
        message: str,
        meta: dict[str, Any] | None = None,
    ) -> None:
        if not _ERROR_CODE_RE.fullmatch(code):
            raise ValueError(
                "Invalid error code. Expected dot-separated lowercase tokens, "
                f"got: {code!r}"
            )
        super().__init__(message)
        self.code = code
        self.message = message
        self.meta = dict(meta or {})


class NotFoundError(TaskifyError):
    def __init__(self, *, message: str = "Not found", code: str = "resource.not_found", meta: dict[str, Any] | None = None):
        super().__init__(code=code, message=message, meta=meta)


class AlreadyExistsError(TaskifyError):
    def __init__(
        self,
        *,
        message: str = "Already exists",
        code: str = "resource.already_exists",
        meta: dict[str, Any] | None = None,
    ):
        super().__init__(code=code, message=message, meta=meta)


ConflictError = AlreadyExistsError


class ValidationFailedError(TaskifyError):
    def __init__(
        self,
        field: str,
        reason: str,
        *,
        code: str = "request.validation_failed",
    ):
        super().__init__(code=code, message=f"{field}: {reason}", meta={"field": field})
        self.field = field
        self.reason = reason


class TransientStorageError(TaskifyError):
    """Storage gave up after bounded retries; the caller may try again later."""

    def __init__(
        self,
        *,
        message: str = "Storage temporarily unavailable",
        code: str = "storage.transient",
        meta: dict[str, Any] | None = None,
    ):
        super().__init__(code=code, message=message, meta=meta)
