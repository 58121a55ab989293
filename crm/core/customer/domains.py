from datetime import date, datetime
from typing import Any, Dict, Optional

from bson import ObjectId
from pydantic import ConfigDict, Field, field_validator

from crm.common.domain import BaseDomain


class CustomerCreate(BaseDomain):
    # Clients echo back stored keys we do not model (createdAt, __v); they are dropped, not rejected
    model_config = ConfigDict(extra='ignore')

    name: str = Field(min_length=1)
    date_of_birth: date
    member_number: int
    # Comma separated, split only for display
    interests: str = Field(min_length=1)


class CustomerRead(CustomerCreate):
    id: str = Field(alias='_id')

    @field_validator('id', mode='before')
    @classmethod
    def _stringify_object_id(cls, value: Any) -> Any:
        if isinstance(value, ObjectId):
            return str(value)
        return value

    @field_validator('date_of_birth', mode='before')
    @classmethod
    def _datetime_to_date(cls, value: Any) -> Any:
        # Stored as a BSON datetime at midnight
        if isinstance(value, datetime):
            return value.date()
        return value


class CustomerUpdate(BaseDomain):
    model_config = ConfigDict(extra='ignore')

    id: str = Field(alias='_id', min_length=1)
    name: Optional[str] = Field(default=None, min_length=1)
    date_of_birth: Optional[date] = None
    member_number: Optional[int] = None
    interests: Optional[str] = Field(default=None, min_length=1)

    def get_update_fields(self) -> Dict[str, Any]:
        """
        Provided, non null fields minus the id
        """
        return {
            key: value for key, value in self.get_provided_fields().items() if key != 'id' and value is not None
        }
