"""Shared base model for schemas exchanged as camelCase JSON."""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialised with camelCase aliases.

    ``populate_by_name`` lets request bodies use either ``assigneeId``
    or ``assignee_id``; responses are rendered by alias.
    """

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }
