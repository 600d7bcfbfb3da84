"""Shared pydantic base for domain models."""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class DomainModel(BaseModel):
    """Immutable model read and written with camelCase aliases."""

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "alias_generator": to_camel,
    }
