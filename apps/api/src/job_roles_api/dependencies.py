from typing import Annotated

from fastapi import Depends

from job_roles_api.db import get_engine
from job_roles_api.repository import JobRolesRepository, SqlJobRolesRepository
from job_roles_api.service import JobRolesService


def get_job_roles_repository() -> JobRolesRepository:
    return SqlJobRolesRepository(get_engine())


def get_job_roles_service(
    repository: Annotated[JobRolesRepository, Depends(get_job_roles_repository)],
) -> JobRolesService:
    return JobRolesService(repository)
