from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "ValidationError"
    NOT_FOUND = "NotFoundError"
    DATABASE = "DatabaseError"


class JobRoleError(Exception):
    """The only error type the service lets reach its callers.

    Callers branch on ``kind``; the message is safe to show to API clients.
    """

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    @classmethod
    def validation(cls, message: str) -> JobRoleError:
        return cls(ErrorKind.VALIDATION, message)

    @classmethod
    def not_found(cls, job_role_id: int) -> JobRoleError:
        return cls(ErrorKind.NOT_FOUND, f"Job role with ID {job_role_id} not found")

    @classmethod
    def database(cls, message: str) -> JobRoleError:
        return cls(ErrorKind.DATABASE, message)

    def __repr__(self) -> str:
        return f"JobRoleError(kind={self.kind.value!r}, message={self.message!r})"
