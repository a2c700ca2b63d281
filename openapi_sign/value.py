"""
JSON value tree used for signing.

A request body arrives as an arbitrary native value (dict, list, dataclass,
object with to_dict(), ...). normalize() pushes it through the json encoder
once and parses the text back, so field renaming is resolved and every number
becomes a float64 before canonicalization sees it.
"""

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union
import base64
import json
import math

from .errors import SerializationError


@dataclass(frozen=True)
class JsonNull:
    pass


@dataclass(frozen=True)
class JsonBool:
    value: bool


@dataclass(frozen=True)
class JsonNumber:
    value: float


@dataclass(frozen=True)
class JsonString:
    value: str


@dataclass(frozen=True)
class JsonArray:
    items: Tuple["JsonValue", ...] = ()


@dataclass(frozen=True)
class JsonObject:
    members: Dict[str, "JsonValue"] = field(default_factory=dict)


JsonValue = Union[JsonNull, JsonBool, JsonNumber, JsonString, JsonArray, JsonObject]

_VARIANTS = (JsonNull, JsonBool, JsonNumber, JsonString, JsonArray, JsonObject)

# Keys stored in dataclass field metadata by json_field().
NAME_KEY = "json_name"
OMITEMPTY_KEY = "json_omitempty"
SKIP_KEY = "json_skip"


def json_field(name: Optional[str] = None, *, omitempty: bool = False, skip: bool = False, **kwargs):
    """
    Declare a dataclass field with its wire name.

    Args:
        name: Key used in the body; defaults to the attribute name
        omitempty: Drop the key when the value is None, False, 0, "" or empty
        skip: Never emit the field
        **kwargs: Passed through to dataclasses.field()
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    if name is not None:
        metadata[NAME_KEY] = name
    if omitempty:
        metadata[OMITEMPTY_KEY] = True
    if skip:
        metadata[SKIP_KEY] = True
    return field(metadata=metadata, **kwargs)


def _is_empty(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    if isinstance(value, (str, bytes, bytearray, list, tuple, Mapping)):
        return len(value) == 0
    return False


def _dataclass_to_dict(obj: Any) -> Dict[str, Any]:
    out = {}
    for f in fields(obj):
        if f.metadata.get(SKIP_KEY):
            continue
        value = getattr(obj, f.name)
        if f.metadata.get(OMITEMPTY_KEY) and _is_empty(value):
            continue
        out[f.metadata.get(NAME_KEY) or f.name] = value
    return out


def _encode_default(obj: Any) -> Any:
    """json.dumps hook for values the stdlib encoder does not know."""
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if is_dataclass(obj) and not isinstance(obj, type):
        return _dataclass_to_dict(obj)
    if isinstance(obj, Mapping):
        return dict(obj)
    if isinstance(obj, (bytes, bytearray)):
        # Same as Go's encoding of []byte.
        return base64.b64encode(bytes(obj)).decode("ascii")
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _check_text(s: str, source: Any) -> str:
    try:
        s.encode("utf-8")
    except UnicodeEncodeError as e:
        raise SerializationError(f"string is not valid UTF-8: {e}", source) from e
    return s


def _scalar_variant(node: Any, source: Any) -> JsonValue:
    if node is None:
        return JsonNull()
    if isinstance(node, bool):
        return JsonBool(node)
    if isinstance(node, float):
        if not math.isfinite(node):
            raise SerializationError("number out of float64 range", source)
        return JsonNumber(node)
    if isinstance(node, str):
        return JsonString(_check_text(node, source))
    raise SerializationError(f"unexpected JSON node {type(node).__name__}", source)


def _to_variant(root: Any, source: Any) -> JsonValue:
    """
    Convert the parsed tree bottom-up with an explicit stack, so any depth
    the json module accepts converts too.
    """
    done: List[JsonValue] = []
    # ("visit", node) or a pending ("array", count) / ("object", keys)
    todo: List[Tuple[str, Any]] = [("visit", root)]
    while todo:
        action, node = todo.pop()
        if action == "array":
            split = len(done) - node
            items = tuple(done[split:])
            del done[split:]
            done.append(JsonArray(items))
        elif action == "object":
            split = len(done) - len(node)
            members = dict(zip(node, done[split:]))
            del done[split:]
            done.append(JsonObject(members))
        elif isinstance(node, list):
            todo.append(("array", len(node)))
            todo.extend(("visit", item) for item in reversed(node))
        elif isinstance(node, dict):
            keys = [_check_text(k, source) for k in node]
            todo.append(("object", keys))
            todo.extend(("visit", node[k]) for k in reversed(keys))
        else:
            done.append(_scalar_variant(node, source))
    return done[0]


def normalize(value: Any) -> JsonValue:
    """
    Convert a native value into a JsonValue tree.

    Raises SerializationError when the value (or anything nested in it) has
    no JSON form: unsupported types, circular references, NaN or Infinity,
    or nesting deeper than the json module accepts.
    """
    if isinstance(value, _VARIANTS):
        return value

    try:
        text = json.dumps(
            value,
            default=_encode_default,
            allow_nan=False,
            ensure_ascii=False,
        )
        parsed = json.loads(text, parse_int=float, parse_float=float)
    except (TypeError, ValueError, RecursionError) as e:
        raise SerializationError(str(e), value) from e

    return _to_variant(parsed, value)
