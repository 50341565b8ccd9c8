"""Argument coercion for MCP tool parameters.

Two layers:
  get_string / get_number / get_boolean / get_array / get_object
      never raise; an absent or mistyped value degrades to "" / 0 / False / [] / {}.
  validate_arguments
      the pass the dispatcher runs before every call: coerces declared fields
      and rejects missing required fields or uncoercible values.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..api.errors import ToolArgumentError

_DEFAULTS = {
    "string": "",
    "integer": 0,
    "number": 0,
    "boolean": False,
    "array": [],
    "object": {},
}

_MISSING = object()


def _convert(value: Any, kind: str) -> Any:
    """Return value as `kind`, or _MISSING when it does not fit."""
    if kind == "any":
        return value

    if kind == "string":
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return _MISSING

    if kind in ("integer", "number"):
        if isinstance(value, bool):
            return _MISSING
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            if kind == "integer":
                return int(value) if value.is_integer() else _MISSING
            return value
        if isinstance(value, str):
            text = value.strip()
            try:
                return int(text)
            except ValueError:
                pass
            try:
                num = float(text)
            except ValueError:
                return _MISSING
            if kind == "integer":
                return int(num) if num.is_integer() else _MISSING
            return num
        return _MISSING

    if kind == "boolean":
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        return _MISSING

    if kind == "array":
        return list(value) if isinstance(value, (list, tuple)) else _MISSING

    if kind == "object":
        return dict(value) if isinstance(value, Mapping) else _MISSING

    raise ValueError(f"Unknown coercion kind: {kind}")


def coerce(value: Any, kind: str) -> Any:
    """Coerce value to kind; absent or mistyped values become the kind's default."""
    if value is None:
        return _default(kind)
    converted = _convert(value, kind)
    return _default(kind) if converted is _MISSING else converted


def _default(kind: str) -> Any:
    default = _DEFAULTS.get(kind)
    # fresh containers per call
    if isinstance(default, (list, dict)):
        return type(default)()
    return default


def get_string(args: Optional[Mapping], key: str) -> str:
    return coerce((args or {}).get(key), "string")


def get_number(args: Optional[Mapping], key: str):
    return coerce((args or {}).get(key), "number")


def get_boolean(args: Optional[Mapping], key: str) -> bool:
    return coerce((args or {}).get(key), "boolean")


def get_array(args: Optional[Mapping], key: str) -> list:
    return coerce((args or {}).get(key), "array")


def get_object(args: Optional[Mapping], key: str) -> dict:
    return coerce((args or {}).get(key), "object")


def validate_arguments(schema: Mapping[str, Any], args: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Coerce args against an MCP inputSchema.

    Declared properties are converted to their declared type; undeclared keys
    pass through untouched. Raises ToolArgumentError naming every missing
    required field and every value that cannot be converted.
    """
    if not isinstance(args, Mapping):
        raise ToolArgumentError(f"Arguments must be an object, got {type(args).__name__}")

    properties = schema.get("properties", {})
    required = schema.get("required", [])

    missing: List[str] = [name for name in required if args.get(name) is None]
    invalid: List[Tuple[str, str]] = []
    out: Dict[str, Any] = {}

    for key, value in args.items():
        if value is None:
            continue
        prop = properties.get(key)
        if prop is None:
            out[key] = value
            continue
        kind = prop.get("type", "any")
        converted = _convert(value, kind)
        if converted is _MISSING:
            invalid.append((key, kind))
        else:
            out[key] = converted

    if missing or invalid:
        problems = []
        if missing:
            problems.append(f"missing required field(s): {', '.join(missing)}")
        if invalid:
            problems.append(
                "wrong type for " + ", ".join(f"{name} (expected {kind})" for name, kind in invalid)
            )
        raise ToolArgumentError("; ".join(problems))

    return out
