# app/utils/validation.py
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Type, TypeVar

from bson import ObjectId
from pydantic import BaseModel, ValidationError

from app.core.errors import InvalidInput

ModelT = TypeVar("ModelT", bound=BaseModel)

_REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# Largest value a BSON int64 (skip/limit in a find command) can carry
MAX_INT64 = 2**63 - 1


def is_valid_object_id(value: Any) -> bool:
    """
    Only the canonical 24-hex-char string form is accepted.
    (bson also accepts 12-byte strings, which are never valid in a URL.)
    """
    return isinstance(value, str) and len(value) == 24 and ObjectId.is_valid(value)


def parse_object_id(value: Any, field: str = "id") -> ObjectId:
    if not is_valid_object_id(value):
        raise InvalidInput("Validation failed", [{"path": field, "message": "Invalid ObjectId"}])
    return ObjectId(value)


def violations_from_errors(errors: Iterable[Mapping[str, Any]]) -> List[Dict[str, str]]:
    violations = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if len(loc) > 1 and loc[0] in _REQUEST_LOCATIONS:
            loc = loc[1:]
        violations.append({"path": ".".join(loc), "message": err.get("msg", "Invalid value")})
    return violations


def validate_payload(model: Type[ModelT], data: Any) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise InvalidInput("Validation failed", violations_from_errors(e.errors())) from e


def coerce_page_param(value: Optional[Any], default: int) -> int:
    """
    Lenient integer parse for query-string paging values:
    "3" -> 3, "2abc" -> 2, "0"/"-4" -> 1, missing or garbage -> default,
    anything past int64 -> MAX_INT64.
    """
    if value is None:
        return max(1, default)
    if isinstance(value, int) and not isinstance(value, bool):
        return min(max(1, value), MAX_INT64)
    m = _LEADING_INT.match(str(value))
    if not m:
        return max(1, default)
    return min(max(1, int(m.group(1))), MAX_INT64)
