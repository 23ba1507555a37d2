import json
from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON in camelCase (userId, diskUsage); snake_case also accepted on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class MessageResponse(BaseModel):
    message: str


def patch_dict(payload: BaseModel, nullable: Iterable[str] = ()) -> Dict[str, Any]:
    """Fields the client actually sent; explicit nulls only survive for nullable columns."""
    nullable = set(nullable)
    data = payload.model_dump(exclude_unset=True)
    return {key: value for key, value in data.items() if value is not None or key in nullable}


def load_json_text(value: Any, default: Any) -> Any:
    """Decode a JSON text column; already-decoded values pass through."""
    if value is None or value == "":
        return default
    if isinstance(value, str):
        return json.loads(value)
    return value


def dump_json_text(value: Any) -> Optional[str]:
    return None if value is None else json.dumps(value)
