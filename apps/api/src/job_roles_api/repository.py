from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Protocol, Sequence

from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from job_roles_api.models import JobRoleRecord
from job_roles_api.schemas import JobRole, NewJobRole

# Largest primary key a 64-bit INTEGER column can hold.
MAX_STORABLE_ID = 2**63 - 1


class JobRolesRepository(Protocol):
    def find_all(self) -> Sequence[JobRole]: ...

    def find_by_id(self, job_role_id: int) -> JobRole | None: ...

    def create(self, new_job_role: NewJobRole) -> JobRole: ...

    def update(self, job_role_id: int, fields: Mapping[str, Any]) -> JobRole | None: ...

    def delete(self, job_role_id: int) -> bool: ...


def _to_job_role(record: JobRoleRecord) -> JobRole:
    return JobRole(
        id=record.id,
        title=record.title,
        description=record.description,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


class SqlJobRolesRepository:
    """Job role storage on an injected SQLAlchemy engine, one session per call.

    Driver and SQL errors are not translated here.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def find_all(self) -> list[JobRole]:
        with Session(self._engine) as session:
            records = session.scalars(select(JobRoleRecord).order_by(JobRoleRecord.id.asc())).all()
            return [_to_job_role(record) for record in records]

    def find_by_id(self, job_role_id: int) -> JobRole | None:
        if job_role_id > MAX_STORABLE_ID:
            return None
        with Session(self._engine) as session:
            record = session.get(JobRoleRecord, job_role_id)
            if record is None:
                return None
            return _to_job_role(record)

    def create(self, new_job_role: NewJobRole) -> JobRole:
        now = datetime.now(timezone.utc)
        with Session(self._engine) as session:
            record = JobRoleRecord(
                title=new_job_role.title,
                description=new_job_role.description,
                created_at=now,
                updated_at=now,
            )
            session.add(record)
            session.commit()
            session.refresh(record)
            logger.debug(f"[job_roles] created id={record.id}")
            return _to_job_role(record)

    def update(self, job_role_id: int, fields: Mapping[str, Any]) -> JobRole | None:
        if job_role_id > MAX_STORABLE_ID:
            return None
        with Session(self._engine) as session:
            record = session.get(JobRoleRecord, job_role_id)
            if record is None:
                return None

            for name, value in fields.items():
                setattr(record, name, value)
            record.updated_at = datetime.now(timezone.utc)

            session.commit()
            session.refresh(record)
            logger.debug(f"[job_roles] updated id={job_role_id} fields={sorted(fields)}")
            return _to_job_role(record)

    def delete(self, job_role_id: int) -> bool:
        if job_role_id > MAX_STORABLE_ID:
            return False
        with Session(self._engine) as session:
            result = session.execute(delete(JobRoleRecord).where(JobRoleRecord.id == job_role_id))
            session.commit()
            removed = result.rowcount > 0
        if removed:
            logger.debug(f"[job_roles] deleted id={job_role_id}")
        return removed
