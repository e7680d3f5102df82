"""Pydantic base models shared by the Poseidon types."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    A model whose fields are read and written under camelCase aliases.

    Parameter documents come from tooling that writes `preSparseMds`, while
    the Python side uses `pre_sparse_mds`. Both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )


class StrictBaseModel(CamelModel):
    """An immutable model that rejects unknown fields and implicit coercion."""

    model_config = CamelModel.model_config | {
        "extra": "forbid",
        "frozen": True,
        "strict": True,
    }
