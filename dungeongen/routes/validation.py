"""Lightweight request payload validation utilities.

Minimal schema-like checking with clear, consistent error responses.

Schema Mini-Language (Python dict):
{
  'field_name': ('type', required: bool, extras: dict)
}
Supported types: 'str', 'int', or alternatives joined with '|' ('int|str').
Extras:
  min / max (int), min_len / max_len / choices (str)

Example:
 ok, data_or_err = validate({'width': 8}, dungeon_schema(32))

If invalid: (False, {'field': 'width', 'error': 'above maximum 32', 'code': 'max'})
If valid: (True, normalized_data)
"""
from __future__ import annotations

from typing import Any, Dict, Tuple

PRIMITIVES = {
    'str': str,
    'int': int,
}


class ValidationError(Exception):
    def __init__(self, field: str, message: str, code: str):
        super().__init__(message)
        self.field = field
        self.message = message
        self.code = code

    def to_dict(self) -> Dict[str, str]:
        return {'field': self.field, 'error': self.message, 'code': self.code}


def _fail(field: str, message: str, code: str) -> Tuple[bool, Dict[str, Any]]:
    return False, {'field': field, 'error': message, 'code': code}


def _matches(value: Any, type_name: str) -> bool:
    # bool is an int subclass; never accept it where a number is expected
    if type_name == 'int' and isinstance(value, bool):
        return False
    return isinstance(value, PRIMITIVES[type_name])


def validate(payload: Any, schema: Dict[str, tuple]) -> Tuple[bool, Dict[str, Any]]:
    if not isinstance(payload, dict):
        return _fail('__root__', 'payload must be an object', 'type')
    out = {}
    for name, spec in schema.items():
        if not isinstance(spec, tuple) or len(spec) < 2:
            return _fail('__schema__', f'invalid spec for {name}', 'schema')
        type_spec, required = spec[0], spec[1]
        extras = spec[2] if len(spec) > 2 else {}
        type_names = type_spec.split('|')
        if any(t not in PRIMITIVES for t in type_names):
            return _fail('__schema__', f'unsupported type {type_spec}', 'schema')
        if name not in payload or payload[name] is None:
            if required:
                return _fail(name, 'missing required field', 'required')
            continue
        value = payload[name]
        matched = next((t for t in type_names if _matches(value, t)), None)
        if matched is None:
            return _fail(name, f'expected {type_spec}', 'type')
        if matched == 'str':
            s = value.strip()
            if len(s) == 0 and not extras.get('allow_empty'):
                return _fail(name, 'must not be empty', 'empty')
            if 'max_len' in extras and len(s) > extras['max_len']:
                return _fail(name, 'too long', 'max_len')
            if 'min_len' in extras and len(s) < extras['min_len']:
                return _fail(name, 'too short', 'min_len')
            if 'choices' in extras and s not in extras['choices']:
                return _fail(name, f'must be one of {", ".join(extras["choices"])}', 'choices')
            out[name] = s
        elif matched == 'int':
            if 'min' in extras and value < extras['min']:
                return _fail(name, f'below minimum {extras["min"]}', 'min')
            if 'max' in extras and value > extras['max']:
                return _fail(name, f'above maximum {extras["max"]}', 'max')
            out[name] = value
    return True, out


def dungeon_schema(max_dimension: int) -> Dict[str, tuple]:
    dim = ('int', False, {'min': 1, 'max': max_dimension})
    return {
        'seed': ('int|str', False, {'max_len': 128, 'allow_empty': True}),
        'width': dim,
        'length': dim,
        'floors': dim,
        'state': ('str', False, {'choices': ('unused', 'wall', 'door')}),
    }
