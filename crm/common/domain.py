from typing import Any, Dict

from humps import camelize  # type: ignore[attr-defined]
from pydantic import BaseModel, ConfigDict


def to_camel(string: str) -> str:
    # '_id' stays '_id'
    return camelize(string)


BaseDomainConfig = ConfigDict(
    extra='forbid',
    use_enum_values=True,
    from_attributes=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class BaseDomain(BaseModel):
    """
    Domains speak snake_case in python and camelCase on the wire and in the
    document store. Either spelling is accepted on input.
    """

    model_config = BaseDomainConfig

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

    def get_provided_fields(self) -> Dict[str, Any]:
        """
        Fields present in the input, explicit nulls included. Defaults that
        were filled in are left out, so a partial update only touches what
        the caller sent:

            CustomerUpdate(_id='...', interests=None).get_provided_fields()
            # {'id': '...', 'interests': None}
        """
        return self.model_dump(exclude_unset=True)
