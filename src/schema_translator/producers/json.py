"""Producer rendering a Schema (or any JSON-compatible value) as JSON."""
import json
from typing import Any

from pydantic import BaseModel

from ..plugins import register_producer


@register_producer("json")
def produce(translator: Any, data: Any) -> str:
    indent = translator.options.get("indent", 2)
    if isinstance(data, BaseModel):
        return data.model_dump_json(indent=indent)
    return json.dumps(data, indent=indent, default=str)
