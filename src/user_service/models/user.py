"""
User-related Pydantic models
"""

from typing import Any, Generic, Mapping, Optional, TypeVar
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field

T = TypeVar("T")


class User(BaseModel):
    id: int
    user_id: UUID
    first_name: str
    last_name: str
    email: str
    created_at: datetime

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "User":
        """Build a User from a database row"""
        return cls.model_validate(dict(record))


class NewUser(BaseModel):
    first_name: str
    last_name: str
    email: str


class UpdateUser(BaseModel):
    """Fields left out (or sent as null) keep their stored value"""
    first_name: Optional[str] = Field(None, description="New first name")
    last_name: Optional[str] = Field(None, description="New last name")
    email: Optional[str] = Field(None, description="New email address")


class GenericResponse(BaseModel, Generic[T]):
    """Envelope returned by every successful call"""
    status: str = "OK"
    message: str
    data: Optional[T] = None
