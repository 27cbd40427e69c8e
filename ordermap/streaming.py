"""Token-stream reading for flat JSON objects.

:func:`iter_tokens` turns a single flat object into a sequence of
START_OBJECT, FIELD_NAME, VALUE and END_OBJECT tokens. Values are decoded
whole by :meth:`json.JSONDecoder.raw_decode`, so a nested object or array
arrives as one VALUE token rather than being tokenized further.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterator, Tuple

from .deserializers import instant_or_date, tristate_from_value
from .errors import MalformedJsonError
from .models import Person
from .tree import TreeNode

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s*")
_decoder = json.JSONDecoder()


class TokenKind(str, Enum):
    START_OBJECT = "start_object"
    FIELD_NAME = "field_name"
    VALUE = "value"
    END_OBJECT = "end_object"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: Any = None


def _skip(text: str, pos: int) -> int:
    return _WHITESPACE.match(text, pos).end()


def _decode(text: str, pos: int) -> Tuple[Any, int]:
    try:
        return _decoder.raw_decode(text, pos)
    except json.JSONDecodeError as exc:
        raise MalformedJsonError(f"Invalid JSON value at offset {pos}: {exc.msg}") from exc


def _expect(text: str, pos: int, char: str) -> int:
    if text[pos:pos + 1] != char:
        found = text[pos:pos + 1] or "end of input"
        raise MalformedJsonError(f"Expected '{char}' at offset {pos}, found {found!r}")
    return _skip(text, pos + 1)


def iter_tokens(text: str) -> Iterator[Token]:
    """Yield tokens for one flat JSON object."""
    pos = _expect(text, _skip(text, 0), "{")
    yield Token(TokenKind.START_OBJECT)

    if text[pos:pos + 1] != "}":
        while True:
            if text[pos:pos + 1] != '"':
                raise MalformedJsonError(f"Expected field name at offset {pos}")
            name, pos = _decode(text, pos)
            yield Token(TokenKind.FIELD_NAME, name)

            pos = _expect(text, _skip(text, pos), ":")
            value, pos = _decode(text, pos)
            yield Token(TokenKind.VALUE, value)

            pos = _skip(text, pos)
            if text[pos:pos + 1] != ",":
                break
            pos = _skip(text, pos + 1)

    pos = _expect(text, pos, "}")
    yield Token(TokenKind.END_OBJECT)
    if pos != len(text):
        raise MalformedJsonError(f"Unexpected trailing data at offset {pos}")


def _set_birth_date(path: str) -> Callable[[Person, Any], None]:
    def setter(person: Person, value: Any) -> None:
        person.birth_date = instant_or_date(TreeNode(value, path))
    return setter


def _set_id(person: Person, value: Any) -> None:
    person.person_id = None if value is None else TreeNode(value, "$.id").as_int()


def _set_enabled(person: Person, value: Any) -> None:
    person.enabled = tristate_from_value(value)


def _set_text(attr: str, path: str) -> Callable[[Person, Any], None]:
    def setter(person: Person, value: Any) -> None:
        setattr(person, attr, None if value is None else TreeNode(value, path).as_text())
    return setter


PERSON_HANDLERS: Dict[str, Callable[[Person, Any], None]] = {
    "name": _set_text("name", "$.name"),
    "email": _set_text("email", "$.email"),
    "birthDate": _set_birth_date("$.birthDate"),
    "dateOfBirth": _set_birth_date("$.dateOfBirth"),
    "id": _set_id,
    "enabled": _set_enabled,
}


def read_person_stream(text: str) -> Person:
    """Build a Person with a single linear pass over the token stream."""
    person = Person()
    tokens = iter_tokens(text)
    for token in tokens:
        if token.kind is not TokenKind.FIELD_NAME:
            continue
        field_name = token.value
        value_token = next(tokens)
        handler = PERSON_HANDLERS.get(field_name)
        if handler is None:
            logger.debug("Skipping unknown field '%s'", field_name)
            continue
        handler(person, value_token.value)
    return person
