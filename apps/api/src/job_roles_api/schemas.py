from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class JobRole:
    id: int
    title: str
    description: str | None
    created_at: datetime
    updated_at: datetime


class NewJobRole(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Presence and blankness of title are checked by JobRolesService.
    title: str | None = None
    description: str | None = None


class JobRoleUpdate(BaseModel):
    """Partial update: only fields present in the request body are applied."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    description: str | None = None

    def provided_fields(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)
