from datetime import datetime
import math
import re
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response, status

from job_roles_api.dependencies import get_job_roles_service
from job_roles_api.schemas import JobRole, JobRoleUpdate, NewJobRole
from job_roles_api.service import JobRolesService

router = APIRouter(prefix="/job-roles", tags=["job-roles"])

ServiceDep = Annotated[JobRolesService, Depends(get_job_roles_service)]

_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)", re.ASCII)


def _to_iso(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat()


def _job_role_body(job_role: JobRole) -> dict[str, Any]:
    return {
        "id": job_role.id,
        "title": job_role.title,
        "description": job_role.description,
        "createdAt": _to_iso(job_role.created_at),
        "updatedAt": _to_iso(job_role.updated_at),
    }


def parse_job_role_id(raw: str | None) -> int | float:
    """Parse the ``id`` path segment.

    Reads the leading base-10 integer, so "1.5" and "1abc" both give 1.
    Text without leading digits becomes NaN and is left for the service
    to reject.
    """
    if not raw:
        raise ValueError("ID parameter is required")

    match = _LEADING_INTEGER.match(raw)
    if match is None:
        return math.nan
    return int(match.group(1))


@router.get("")
def list_job_roles(service: ServiceDep) -> list[dict[str, Any]]:
    return [_job_role_body(job_role) for job_role in service.find_all()]


@router.get("/{job_role_id}")
def get_job_role(job_role_id: str, service: ServiceDep) -> dict[str, Any]:
    job_role = service.find_by_id(parse_job_role_id(job_role_id))
    return _job_role_body(job_role)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_job_role(request: NewJobRole, service: ServiceDep) -> dict[str, Any]:
    return _job_role_body(service.create(request))


@router.put("/{job_role_id}")
def update_job_role(
    job_role_id: str,
    request: JobRoleUpdate,
    service: ServiceDep,
) -> dict[str, Any]:
    job_role = service.update(parse_job_role_id(job_role_id), request)
    return _job_role_body(job_role)


@router.delete("/{job_role_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_job_role(job_role_id: str, service: ServiceDep) -> Response:
    service.delete(parse_job_role_id(job_role_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
