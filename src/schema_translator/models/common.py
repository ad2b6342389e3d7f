from enum import Enum

from pydantic import BaseModel


class BasePydanticModel(BaseModel):
    model_config = {
        "extra": "forbid",
        "populate_by_name": True,
        "use_enum_values": True,
    }

class Visibility(str, Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"

    @property
    def rank(self) -> int:
        return _VISIBILITY_RANK[self]

_VISIBILITY_RANK = {
    Visibility.PUBLIC: 1,
    Visibility.PROTECTED: 2,
    Visibility.PRIVATE: 3,
}
