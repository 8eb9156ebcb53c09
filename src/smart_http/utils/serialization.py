"""
JSON serialization utilities for request and response bodies.

Writing omits null-valued fields. Reading matches property names
case-insensitively against pydantic models and dataclasses, then validates
the payload with a pydantic TypeAdapter.
"""

import collections.abc
import dataclasses
import types
import json
from functools import lru_cache
from typing import Any, Dict, Union, get_args, get_origin

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import to_jsonable_python

from ..core.exceptions import InvalidResponseError

# Builtins whose "empty" value is returned for an empty body
_EMPTY_DEFAULTS = (list, dict, set, frozenset, tuple, str, bytes, int, float, bool)


def default_value(result_type: Any) -> Any:
    """
    Значение по умолчанию для типа результата.

    Examples:
        >>> default_value(list), default_value(Dict[str, int]), default_value(MyModel)
        ([], {}, None)
    """
    target = get_origin(result_type) or result_type
    if target in _EMPTY_DEFAULTS:
        return target()
    return None


def _drop_none(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _drop_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_drop_none(item) for item in value]
    return value


def to_jsonable(obj: Any) -> Any:
    """
    Преобразовать объект в JSON-совместимую структуру без None полей.

    Поддерживает pydantic модели, dataclasses, mapping, списки и всё,
    что умеет pydantic_core (datetime, UUID, Decimal, Enum...).
    """
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True, exclude_none=True)
    return _drop_none(to_jsonable_python(obj, by_alias=True))


def to_json_bytes(obj: Any) -> bytes:
    """
    Сериализовать тело запроса в JSON (UTF-8).

    Example:
        >>> to_json_bytes({"name": "alice", "email": None})
        b'{"name": "alice"}'
    """
    return json.dumps(to_jsonable(obj), ensure_ascii=False).encode("utf-8")


@lru_cache(maxsize=256)
def _adapter_for(result_type: Any) -> TypeAdapter:
    return TypeAdapter(result_type)


def _field_lookup(model_type: Any) -> Dict[str, tuple]:
    """lower(name) -> (key to emit, annotation) for model or dataclass fields."""
    lookup: Dict[str, tuple] = {}
    if isinstance(model_type, type) and issubclass(model_type, BaseModel):
        for name, info in model_type.model_fields.items():
            key = info.alias or name
            lookup[key.lower()] = (key, info.annotation)
            lookup.setdefault(name.lower(), (key, info.annotation))
    elif dataclasses.is_dataclass(model_type):
        for f in dataclasses.fields(model_type):
            lookup[f.name.lower()] = (f.name, f.type)
    return lookup


def _align_keys(payload: Any, result_type: Any) -> Any:
    """Rename payload keys to the declared field spelling (case-insensitive)."""
    origin = get_origin(result_type)
    args = get_args(result_type)

    if origin is Union or origin is getattr(types, "UnionType", Union):
        non_null = [a for a in args if a is not type(None)]
        if len(non_null) == 1:
            return _align_keys(payload, non_null[0])
        return payload

    if origin in (list, tuple, set, frozenset) and isinstance(payload, list) and args:
        return [_align_keys(item, args[0]) for item in payload]

    if origin in (dict, collections.abc.Mapping) and isinstance(payload, dict) and len(args) == 2:
        return {k: _align_keys(v, args[1]) for k, v in payload.items()}

    if isinstance(payload, dict):
        lookup = _field_lookup(result_type)
        if lookup:
            aligned = {}
            for key, value in payload.items():
                match = lookup.get(key.lower()) if isinstance(key, str) else None
                if match is None:
                    aligned[key] = value
                else:
                    aligned[match[0]] = _align_keys(value, match[1])
            return aligned

    return payload


def coerce(payload: Any, result_type: Any) -> Any:
    """
    Привести распарсенный JSON к запрошенному типу.

    Raises:
        InvalidResponseError: payload не соответствует типу
    """
    if payload is None:
        return default_value(result_type)
    if result_type is None or result_type is Any or result_type is object:
        return payload

    try:
        return _adapter_for(result_type).validate_python(_align_keys(payload, result_type))
    except ValidationError as e:
        raise InvalidResponseError(
            f"Response does not match {getattr(result_type, '__name__', result_type)}: {e}"
        ) from e


def from_json(data: Union[bytes, str, None], result_type: Any) -> Any:
    """
    Десериализовать JSON тело ответа.

    Пустое тело или JSON ``null`` возвращают значение по умолчанию для типа.

    Args:
        data: Тело ответа
        result_type: Запрошенный тип (pydantic модель, dataclass, List[...], dict, Any...)

    Returns:
        Экземпляр result_type

    Raises:
        InvalidResponseError: невалидный JSON или несовпадение с типом
    """
    if data is None or not data.strip():
        return default_value(result_type)

    try:
        payload = json.loads(data)
    except ValueError as e:
        raise InvalidResponseError(f"Invalid JSON in response body: {e}") from e

    return coerce(payload, result_type)
