from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger

from job_roles_api.errors import JobRoleError
from job_roles_api.repository import JobRolesRepository
from job_roles_api.schemas import JobRole, JobRoleUpdate, NewJobRole

_UPDATABLE_FIELDS = ("title", "description")


def _is_valid_id(value: Any) -> bool:
    # bool is an int subclass; NaN and floats such as 1.5 are not ints.
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


@contextmanager
def _classify_failures(message: str) -> Iterator[None]:
    """Turn any storage failure into a DatabaseError.

    A JobRoleError raised inside the block is already classified and is
    re-raised unchanged.
    """
    try:
        yield
    except JobRoleError:
        raise
    except Exception as exc:
        logger.error(f"[job_roles] {message}: {exc!r}")
        raise JobRoleError.database(message) from exc


class JobRolesService:
    """Validates job role input and maps storage outcomes to JobRoleError.

    Input is always validated before the repository is touched.
    """

    def __init__(self, repository: JobRolesRepository) -> None:
        self._repository = repository

    def find_all(self) -> list[JobRole]:
        with _classify_failures("Failed to retrieve job roles"):
            return list(self._repository.find_all())

    def find_by_id(self, job_role_id: int | float) -> JobRole:
        self._require_valid_id(job_role_id)

        with _classify_failures("Failed to retrieve job role"):
            job_role = self._repository.find_by_id(job_role_id)
            if job_role is None:
                raise JobRoleError.not_found(job_role_id)
            return job_role

    def create(self, new_job_role: NewJobRole) -> JobRole:
        if _is_blank(new_job_role.title):
            raise JobRoleError.validation("Job role title is required")

        with _classify_failures("Failed to create job role"):
            return self._repository.create(new_job_role)

    def update(self, job_role_id: int | float, updates: JobRoleUpdate) -> JobRole:
        self._require_valid_id(job_role_id)

        fields = {
            name: value
            for name, value in updates.provided_fields().items()
            if name in _UPDATABLE_FIELDS
        }
        if "title" in fields and _is_blank(fields["title"]):
            raise JobRoleError.validation("Job role title cannot be empty")

        with _classify_failures("Failed to update job role"):
            job_role = self._repository.update(job_role_id, fields)
            if job_role is None:
                raise JobRoleError.not_found(job_role_id)
            return job_role

    def delete(self, job_role_id: int | float) -> None:
        self._require_valid_id(job_role_id)

        with _classify_failures("Failed to delete job role"):
            if not self._repository.delete(job_role_id):
                raise JobRoleError.not_found(job_role_id)

    @staticmethod
    def _require_valid_id(job_role_id: Any) -> None:
        if not _is_valid_id(job_role_id):
            raise JobRoleError.validation("Invalid job role ID")
