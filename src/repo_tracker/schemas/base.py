"""Base schema class for ORM conversion."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict


class SchemaBase(BaseModel):
    """Base class for tracker schemas loaded from ORM rows."""

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_orm_list(cls, objs: list[Any]) -> list[Self]:
        """Create schema instances from a list of SQLAlchemy models."""
        return [cls.model_validate(obj) for obj in objs]
