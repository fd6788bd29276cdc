"""
JSON parsing with source maps.

Parses a JSON document and, in the same pass, records where every object
member and array element lives in the source text. Locations are addressed
by JSON Pointer and carry byte offset, line and column for both the member
key and its value, so errors found in the decoded data can be traced back to
the exact characters that produced them.
"""

import logging
import math
import os
import time
from collections.abc import Callable
from collections.abc import Iterator
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from types import MappingProxyType
from typing import IO
from typing import Any

from jsonsourcemap._pointer import escape_pointer_segment
from jsonsourcemap._pointer import join_pointer
from jsonsourcemap._pointer import resolve_pointer
from jsonsourcemap._pointer import split_pointer
from jsonsourcemap._pointer import unescape_pointer_segment

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

# Type aliases for domain concepts - recursive definition
JsonValue = (
    str | int | float | bool | None | dict[str, "JsonValue"] | list["JsonValue"]
)
type Pointer = str

# Number hooks may return custom types
ParseFloatHook = Callable[[str], Any] | None
ParseIntHook = Callable[[str], Any] | None

DEFAULT_MAX_DEPTH = 256

# Profiling infrastructure - zero-cost when disabled
PROFILE_HOT_PATHS = __debug__ and "JSONSOURCEMAP_PROFILE" in os.environ

_WHITESPACE = " \t\n\r"
_STRUCTURAL = ",:]}"
_HEX_DIGITS = "0123456789abcdefABCDEF"
_ASCII_LIMIT = 127

_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_LITERALS: dict[str, tuple[str, bool | None]] = {
    "t": ("true", True),
    "f": ("false", False),
    "n": ("null", None),
}


@dataclass
class HotPathStats:
    """Accumulated timings for one profiled scanner site."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    chars_processed: int = 0

    def record_call(self, duration_ns: int, chars: int = 0) -> None:
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.chars_processed += chars

    @property
    def ns_per_char(self) -> float:
        """Average cost per consumed character, 0.0 before any input."""
        if not self.chars_processed:
            return 0.0
        return self.total_time_ns / self.chars_processed


if PROFILE_HOT_PATHS:
    _hot_path_stats: dict[str, HotPathStats] = {}

    class ProfileContext:
        """
        Times a block of scanner work under ``func_name``.

        ``chars`` is the number of characters the block consumed. Sites that
        only learn it while scanning assign it before the block exits.
        """

        def __init__(self, func_name: str, chars_to_process: int = 0):
            self.func_name = func_name
            self.chars = chars_to_process
            self.start_time = 0

        def __enter__(self) -> "ProfileContext":
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            stats = _hot_path_stats.get(self.func_name)
            if stats is None:
                stats = _hot_path_stats[self.func_name] = HotPathStats(
                    self.func_name
                )
            stats.record_call(duration, self.chars)

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns a snapshot of the collected statistics."""
        return _hot_path_stats.copy()

    def clear_hot_path_stats() -> None:
        _hot_path_stats.clear()

else:

    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, func_name: str, chars_to_process: int = 0) -> None:
            self.chars = chars_to_process

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass


@dataclass(frozen=True, order=True)
class Position:
    """
    A point in the source text.

    ``offset`` counts UTF-8 bytes from the start of the document, ``line`` and
    ``column`` are 1-based (columns count code points), and ``index`` is the
    code-point index into the Python string that was parsed.
    """

    offset: int
    line: int
    column: int
    index: int


@dataclass(frozen=True)
class Range:
    """Half-open span ``[start, end)`` of the source text."""

    start: Position
    end: Position

    def slice(self, text: str) -> str:
        """Returns the characters of ``text`` covered by this range."""
        return text[self.start.index : self.end.index]


@dataclass(frozen=True)
class Entry:
    """
    Source locations recorded for one pointer.

    ``key`` covers the quoted member name and is only set for object members;
    array elements and the document root have a value range only.
    """

    value: Range
    key: Range | None = None

    @property
    def start(self) -> Position:
        """First position belonging to this entry (key if present)."""
        return self.key.start if self.key is not None else self.value.start


class ParseError(ValueError):
    """
    Handles JSON parsing failures with precise position information.

    Carries the offending position so callers can point a human at the
    exact line and column of the fault.
    """

    def __init__(self, msg: str, doc: str, position: Position) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")

        self.msg = msg
        self.doc = doc
        self.position = position

        super().__init__(
            f"{msg} at line {position.line}, column {position.column}"
        )

    @property
    def pos(self) -> int:
        return self.position.index

    @property
    def offset(self) -> int:
        return self.position.offset

    @property
    def lineno(self) -> int:
        return self.position.line

    @property
    def colno(self) -> int:
        return self.position.column

    def __reduce__(self) -> tuple[Any, ...]:
        return (self.__class__, (self.msg, self.doc, self.position))


class LexicalError(ParseError):
    """Malformed token: bad character, string, escape, number or literal."""


class StructuralError(ParseError):
    """Missing delimiter or value, trailing comma, or nesting too deep."""


class TrailingContentError(ParseError):
    """Non-whitespace content after the root value."""


# Familiar name for callers coming from the json module
JSONDecodeError = ParseError


@dataclass(frozen=True)
class ParseOptions:
    """
    Configures parsing behavior with immutable settings.

    The defaults decode numbers the way the standard library does and
    leave the location recording untouched.
    """

    parse_float: ParseFloatHook = None
    parse_int: ParseIntHook = None
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if not isinstance(self.max_depth, int) or isinstance(
            self.max_depth, bool
        ):
            raise TypeError("max_depth must be an integer")
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        if self.parse_float is not None and not callable(self.parse_float):
            raise TypeError("parse_float must be callable")
        if self.parse_int is not None and not callable(self.parse_int):
            raise TypeError("parse_int must be callable")


@dataclass(frozen=True)
class SourceMap:
    """
    The result of one parse: the decoded value and its pointer table.

    ``pointers`` is read-only and ordered by where each entry starts in the
    source text.
    """

    value: Any
    pointers: Mapping[Pointer, Entry] = field(repr=False)
    text: str = field(repr=False)

    def get_location(self, pointer: Pointer) -> Entry | None:
        """Returns the recorded ranges for ``pointer``, or None if unknown."""
        return self.pointers.get(pointer)

    def get_value(self, pointer: Pointer) -> Any:
        """Returns the decoded value recorded at ``pointer``."""
        if pointer not in self.pointers:
            raise KeyError(pointer)
        return resolve_pointer(self.value, pointer)

    def value_text(self, pointer: Pointer) -> str:
        """Returns the source text of the value at ``pointer``."""
        return self.pointers[pointer].value.slice(self.text)

    def key_text(self, pointer: Pointer) -> str | None:
        """Returns the quoted key text of the member at ``pointer``."""
        key = self.pointers[pointer].key
        return key.slice(self.text) if key is not None else None

    def __contains__(self, pointer: object) -> bool:
        return pointer in self.pointers

    def __iter__(self) -> Iterator[Pointer]:
        return iter(self.pointers)

    def __len__(self) -> int:
        return len(self.pointers)


class Cursor:
    """
    Walks the input text one character at a time.

    Single source of truth for the current offset, line and column.
    """

    def __init__(self, text: str):
        self.text = text
        self.length = len(text)
        self.index = 0
        self.offset = 0
        self.line = 1
        self.column = 1

    def peek(self) -> str | None:
        """Returns current character without advancing."""
        return self.text[self.index] if self.index < self.length else None

    def advance(self) -> str | None:
        """Returns current character and advances position."""
        if self.index >= self.length:
            return None

        char = self.text[self.index]
        self.index += 1
        self.offset += _utf8_width(char)
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    def skip_whitespace(self) -> None:
        """Skips whitespace characters as defined by RFC 8259."""
        with ProfileContext("skip_whitespace") as profile:
            start = self.index
            while (
                self.index < self.length
                and self.text[self.index] in _WHITESPACE
            ):
                self.advance()
            profile.chars = self.index - start

    def at_end(self) -> bool:
        return self.index >= self.length

    def position(self) -> Position:
        """Snapshot of the current location."""
        return Position(self.offset, self.line, self.column, self.index)


def _utf8_width(char: str) -> int:
    code = ord(char)
    if code < 0x80:
        return 1
    if code < 0x800:
        return 2
    if code < 0x10000:
        return 3
    return 4


def _is_digit(char: str | None) -> bool:
    return char is not None and "0" <= char <= "9"


class Production(Enum):
    """Grammar productions a value can start."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    LITERAL = "literal"


def _production_for(char: str | None) -> Production | None:
    """Selects the production from the first significant character."""
    if char is None:
        return None
    if char == "{":
        return Production.OBJECT
    if char == "[":
        return Production.ARRAY
    if char == '"':
        return Production.STRING
    if char == "-" or _is_digit(char):
        return Production.NUMBER
    if char in _LITERALS:
        return Production.LITERAL
    return None


class SourceMapParser:
    """
    Recursive descent parser that records a location entry per value.

    Each production consumes its text through the shared cursor and the
    resulting ranges are stored under the pointer of the value.
    """

    def __init__(self, cursor: Cursor, options: ParseOptions):
        self.cursor = cursor
        self.options = options
        # Slots are reserved when a value starts, so insertion order is
        # document order. None marks a value still being parsed.
        self.pointers: dict[Pointer, Entry | None] = {}
        self.depth = 0

    def parse_document(self) -> SourceMap:
        """Parses the whole input as exactly one JSON value."""
        cursor = self.cursor
        with ProfileContext("parse_document", cursor.length):
            if cursor.peek() == "\ufeff":
                raise LexicalError(
                    "Unexpected UTF-8 BOM (decode using utf-8-sig)",
                    cursor.text,
                    cursor.position(),
                )

            cursor.skip_whitespace()
            try:
                value, _ = self.parse_value("")
            except RecursionError:
                raise StructuralError(
                    "Maximum nesting depth exceeded",
                    cursor.text,
                    cursor.position(),
                ) from None
            cursor.skip_whitespace()

            if not cursor.at_end():
                raise TrailingContentError(
                    "Extra data", cursor.text, cursor.position()
                )

            return SourceMap(value, self.pointer_table(), cursor.text)

    def pointer_table(self) -> Mapping[Pointer, Entry]:
        """Returns the recorded entries in document order."""
        return MappingProxyType(self.pointers)  # type: ignore[arg-type]

    def parse_value(
        self, pointer: Pointer, key: Range | None = None
    ) -> tuple[Any, Range]:
        """
        Parses the value at the cursor and records it under ``pointer``.

        ``key`` is the range of the member name when the value belongs to an
        object. Returns the decoded value and its range.
        """
        cursor = self.cursor
        start = cursor.position()
        production = _production_for(cursor.peek())
        self.pointers[pointer] = None

        if production is Production.OBJECT:
            value: Any = self.parse_object(pointer)
        elif production is Production.ARRAY:
            value = self.parse_array(pointer)
        elif production is Production.STRING:
            value = self.parse_string()
        elif production is Production.NUMBER:
            value = self.parse_number()
        elif production is Production.LITERAL:
            value = self.parse_literal()
        else:
            raise self._expecting_value()

        value_range = Range(start, cursor.position())
        self.pointers[pointer] = Entry(value_range, key)
        return value, value_range

    def _expecting_value(self) -> ParseError:
        char = self.cursor.peek()
        error_class = (
            StructuralError
            if char is None or char in _STRUCTURAL
            else LexicalError
        )
        return error_class(
            "Expecting value", self.cursor.text, self.cursor.position()
        )

    def _enter_container(self) -> None:
        self.depth += 1
        if self.depth > self.options.max_depth:
            raise StructuralError(
                f"Maximum nesting depth of {self.options.max_depth} exceeded",
                self.cursor.text,
                self.cursor.position(),
            )

    def _expect(self, expected: str) -> None:
        """Consumes ``expected`` or fails with a delimiter error."""
        if self.cursor.peek() != expected:
            raise StructuralError(
                f"Expecting '{expected}' delimiter",
                self.cursor.text,
                self.cursor.position(),
            )
        self.cursor.advance()

    def _continue_container(self, closer: str, kind: str) -> bool:
        """Handles the separator after a member or element.

        Returns True when another item follows, False once ``closer`` has
        been consumed.
        """
        cursor = self.cursor
        char = cursor.peek()

        if char == closer:
            cursor.advance()
            return False
        if char == ",":
            cursor.advance()
            cursor.skip_whitespace()
            if cursor.peek() == closer:
                raise StructuralError(
                    f"Illegal trailing comma before end of {kind}",
                    cursor.text,
                    cursor.position(),
                )
            return True
        raise StructuralError(
            "Expecting ',' delimiter", cursor.text, cursor.position()
        )

    def _discard(self, pointer: Pointer, replaced: Any) -> None:
        """Drops the entries recorded for a value a duplicate key replaces.

        Only the pointers beneath ``replaced`` are visited, so the cost is
        the size of that value rather than of the whole table.
        """
        stack = [(pointer, replaced)]
        while stack:
            current, value = stack.pop()
            self.pointers.pop(current, None)
            if isinstance(value, dict):
                stack.extend(
                    (join_pointer(current, name), member)
                    for name, member in value.items()
                )
            elif isinstance(value, list):
                stack.extend(
                    (f"{current}/{index}", element)
                    for index, element in enumerate(value)
                )

    def parse_object(self, pointer: Pointer) -> dict[str, Any]:
        """Parses a JSON object; later duplicate keys replace earlier ones."""
        with ProfileContext("parse_object"):
            cursor = self.cursor
            self._enter_container()
            cursor.advance()  # {
            obj: dict[str, Any] = {}

            cursor.skip_whitespace()
            if cursor.peek() == "}":
                cursor.advance()
                self.depth -= 1
                return obj

            while True:
                if cursor.peek() != '"':
                    raise StructuralError(
                        "Expecting property name enclosed in double quotes",
                        cursor.text,
                        cursor.position(),
                    )

                key_start = cursor.position()
                name = self.parse_string()
                key_range = Range(key_start, cursor.position())

                cursor.skip_whitespace()
                self._expect(":")
                cursor.skip_whitespace()

                member_pointer = join_pointer(pointer, name)
                if name in obj:
                    self._discard(member_pointer, obj[name])
                obj[name], _ = self.parse_value(member_pointer, key_range)

                cursor.skip_whitespace()
                if not self._continue_container("}", "object"):
                    break

            self.depth -= 1
            return obj

    def parse_array(self, pointer: Pointer) -> list[Any]:
        """Parses a JSON array, recording elements under their index."""
        with ProfileContext("parse_array"):
            cursor = self.cursor
            self._enter_container()
            cursor.advance()  # [
            values: list[Any] = []

            cursor.skip_whitespace()
            if cursor.peek() == "]":
                cursor.advance()
                self.depth -= 1
                return values

            while True:
                element, _ = self.parse_value(f"{pointer}/{len(values)}")
                values.append(element)

                cursor.skip_whitespace()
                if not self._continue_container("]", "array"):
                    break

            self.depth -= 1
            return values

    def parse_string(self) -> str:
        """Scans a quoted string at the cursor and returns its decoded text."""
        with ProfileContext("scan_string") as profile:
            cursor = self.cursor
            start = cursor.index
            cursor.advance()  # opening quote
            chunks: list[str] = []

            while True:
                char = cursor.peek()
                if char is None:
                    raise LexicalError(
                        "Unterminated string", cursor.text, cursor.position()
                    )
                if char == '"':
                    cursor.advance()
                    profile.chars = cursor.index - start
                    return "".join(chunks)
                if char == "\\":
                    chunks.append(self._parse_escape())
                elif char < " ":
                    raise LexicalError(
                        "Invalid control character in string",
                        cursor.text,
                        cursor.position(),
                    )
                else:
                    chunks.append(char)
                    cursor.advance()

    def _parse_escape(self) -> str:
        """Decodes one backslash escape, combining UTF-16 surrogate pairs."""
        cursor = self.cursor
        escape_start = cursor.position()
        cursor.advance()  # backslash

        char = cursor.advance()
        if char is None:
            raise LexicalError(
                "Unterminated string", cursor.text, cursor.position()
            )
        if char in _ESCAPES:
            return _ESCAPES[char]
        if char != "u":
            raise LexicalError(
                f"Invalid escape sequence: \\{char}", cursor.text, escape_start
            )

        code = _read_hex4(cursor.text, cursor.index)
        if code is None:
            raise LexicalError(
                "Invalid \\uXXXX escape", cursor.text, escape_start
            )
        for _ in range(4):
            cursor.advance()

        if 0xD800 <= code <= 0xDBFF and cursor.text.startswith(
            "\\u", cursor.index
        ):
            low = _read_hex4(cursor.text, cursor.index + 2)
            if low is not None and 0xDC00 <= low <= 0xDFFF:
                for _ in range(6):
                    cursor.advance()
                code = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)

        return chr(code)

    def parse_number(self) -> Any:
        """Scans a JSON number and converts it with the configured hooks."""
        with ProfileContext("scan_number"):
            cursor = self.cursor
            start = cursor.position()
            is_integer = True

            if cursor.peek() == "-":
                cursor.advance()

            char = cursor.peek()
            if char == "0":
                cursor.advance()
                if _is_digit(cursor.peek()):
                    raise LexicalError(
                        "Leading zeros not allowed",
                        cursor.text,
                        cursor.position(),
                    )
            elif _is_digit(char):
                self._scan_digits()
            else:
                raise LexicalError(
                    "Invalid number", cursor.text, cursor.position()
                )

            if cursor.peek() == ".":
                is_integer = False
                cursor.advance()
                if not _is_digit(cursor.peek()):
                    raise LexicalError(
                        "Invalid decimal number",
                        cursor.text,
                        cursor.position(),
                    )
                self._scan_digits()

            if cursor.peek() in ("e", "E"):
                is_integer = False
                cursor.advance()
                if cursor.peek() in ("+", "-"):
                    cursor.advance()
                if not _is_digit(cursor.peek()):
                    raise LexicalError(
                        "Invalid exponent", cursor.text, cursor.position()
                    )
                self._scan_digits()

            literal = cursor.text[start.index : cursor.index]
            return self._convert_number(literal, is_integer, start)

    def _scan_digits(self) -> None:
        while _is_digit(self.cursor.peek()):
            self.cursor.advance()

    def _convert_number(
        self, literal: str, is_integer: bool, start: Position
    ) -> Any:
        if not is_integer:
            if self.options.parse_float is not None:
                return self.options.parse_float(literal)
            return float(literal)

        if self.options.parse_int is not None:
            return self.options.parse_int(literal)
        try:
            return int(literal)
        except ValueError as e:
            # Python's int/str conversion digit limit
            raise LexicalError("Number too large", self.cursor.text, start) from e

    def parse_literal(self) -> bool | None:
        """Matches ``true``, ``false`` or ``null`` exactly."""
        cursor = self.cursor
        word, value = _LITERALS[cursor.peek() or ""]
        for expected in word:
            if cursor.peek() != expected:
                raise LexicalError(
                    f"Invalid literal, expected '{word}'",
                    cursor.text,
                    cursor.position(),
                )
            cursor.advance()
        return value


def _read_hex4(text: str, index: int) -> int | None:
    """Reads four hex digits at ``index``; None when they are not there."""
    digits = text[index : index + 4]
    if len(digits) != 4 or not all(c in _HEX_DIGITS for c in digits):
        return None
    return int(digits, 16)


def parse(
    text: str, options: ParseOptions | None = None, **kwargs: Any
) -> SourceMap:
    """
    Parses JSON text into its value and source map.

    Options are given either as a ``ParseOptions`` instance or as keyword
    arguments used to build one. Raises a ``ParseError`` subclass carrying
    the position of the first syntax violation.
    """
    if not isinstance(text, str):
        raise TypeError(
            f"the JSON object must be str, not {type(text).__name__}"
        )
    if options is None:
        options = ParseOptions(**kwargs)
    elif kwargs:
        raise TypeError("pass either options or keyword arguments, not both")

    parser = SourceMapParser(Cursor(text), options)
    try:
        source_map = parser.parse_document()
    except ParseError as err:
        logger.debug("JSON parse failed: %s", err)
        raise

    logger.debug(
        "Parsed %d characters into %d source map entries",
        len(text),
        len(source_map.pointers),
    )
    return source_map


def load(
    fp: IO[str], options: ParseOptions | None = None, **kwargs: Any
) -> SourceMap:
    """
    Parses JSON from a text file-like object.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return parse(fp.read(), options, **kwargs)


@dataclass(frozen=True)
class EncodeOptions:
    """
    Configures JSON encoding behavior with immutable settings.

    Mirrors the formatting switches of the standard library encoder.
    """

    skipkeys: bool = False
    ensure_ascii: bool = True
    sort_keys: bool = False
    indent: str | int | None = None
    separators: tuple[str, str] | None = None
    default: Callable[[Any], Any] | None = None
    check_circular: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.skipkeys, bool):
            raise TypeError("skipkeys must be a boolean")
        if not isinstance(self.ensure_ascii, bool):
            raise TypeError("ensure_ascii must be a boolean")
        if not isinstance(self.sort_keys, bool):
            raise TypeError("sort_keys must be a boolean")
        if not isinstance(self.check_circular, bool):
            raise TypeError("check_circular must be a boolean")

    @property
    def item_separator(self) -> str:
        if self.separators is not None:
            return self.separators[0]
        return "," if self.indent is not None else ", "

    @property
    def key_separator(self) -> str:
        return self.separators[1] if self.separators is not None else ": "


_ENCODE_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _encode_string(s: str, ensure_ascii: bool) -> str:
    """Encode string with proper escape sequences."""
    result = ['"']
    for char in s:
        code = ord(char)
        if char in _ENCODE_ESCAPES:
            result.append(_ENCODE_ESCAPES[char])
        elif code < 0x20:
            result.append(f"\\u{code:04x}")
        elif ensure_ascii and code > _ASCII_LIMIT:
            if code > 0xFFFF:
                code -= 0x10000
                high = 0xD800 | (code >> 10)
                low = 0xDC00 | (code & 0x3FF)
                result.append(f"\\u{high:04x}\\u{low:04x}")
            else:
                result.append(f"\\u{code:04x}")
        else:
            result.append(char)
    result.append('"')
    return "".join(result)


def _encode_number(n: int | float) -> str:
    """Encode numeric values with JSON compliance."""
    if isinstance(n, float):
        if math.isnan(n) or math.isinf(n):
            msg = "Out of range float values are not JSON compliant"
            raise ValueError(msg)
        return float.__repr__(n)
    return int.__repr__(n)


def _encode_key(key: Any, config: EncodeOptions) -> str | None:
    """Coerces a dict key to its JSON name; None means skip the member."""
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    if isinstance(key, int | float):
        return _encode_number(key)
    if config.skipkeys:
        return None
    msg = (
        "keys must be str, int, float, bool or None, "
        f"not {type(key).__name__}"
    )
    raise TypeError(msg)


def _get_indent_string(indent: str | int | None, level: int) -> str:
    """Generate indentation string for given level."""
    if indent is None:
        return ""
    elif isinstance(indent, int):
        return " " * (indent * level)
    else:
        return indent * level


def _join_items(
    brackets: str, items: list[str], config: EncodeOptions, level: int
) -> str:
    """Joins encoded members or elements, indenting them for ``level``."""
    opening, closing = brackets
    if not items:
        return opening + closing
    if config.indent is None:
        return opening + config.item_separator.join(items) + closing

    inner = "\n" + _get_indent_string(config.indent, level + 1)
    outer = "\n" + _get_indent_string(config.indent, level)
    return (
        opening
        + inner
        + (config.item_separator + inner).join(items)
        + outer
        + closing
    )


def _encode_array(
    arr: list[Any] | tuple[Any, ...],
    config: EncodeOptions,
    level: int,
    markers: set[int],
) -> str:
    """Encode array with optional formatting."""
    items = [_encode_value(item, config, level + 1, markers) for item in arr]
    return _join_items("[]", items, config, level)


def _encode_dict(
    d: dict[Any, Any], config: EncodeOptions, level: int, markers: set[int]
) -> str:
    """Encode dictionary with key filtering and formatting."""
    members = []
    for key, value in d.items():
        name = _encode_key(key, config)
        if name is not None:
            members.append((name, value))

    if config.sort_keys:
        members.sort(key=lambda member: member[0])

    items = [
        _encode_string(name, config.ensure_ascii)
        + config.key_separator
        + _encode_value(value, config, level + 1, markers)
        for name, value in members
    ]
    return _join_items("{}", items, config, level)


def _encode_value(  # noqa: PLR0911
    obj: Any, config: EncodeOptions, level: int, markers: set[int]
) -> str:
    """Encode any JSON-serializable value."""
    if obj is None:
        return "null"
    elif obj is True:
        return "true"
    elif obj is False:
        return "false"
    elif isinstance(obj, str):
        return _encode_string(obj, config.ensure_ascii)
    elif isinstance(obj, int | float):
        return _encode_number(obj)
    elif isinstance(obj, dict | list | tuple):
        marker = id(obj)
        if config.check_circular:
            if marker in markers:
                raise ValueError("Circular reference detected")
            markers.add(marker)
        if isinstance(obj, dict):
            encoded = _encode_dict(obj, config, level, markers)
        else:
            encoded = _encode_array(obj, config, level, markers)
        markers.discard(marker)
        return encoded
    elif config.default is not None:
        return _encode_value(config.default(obj), config, level, markers)
    else:
        msg = f"Object of type {type(obj).__name__} is not JSON serializable"
        raise TypeError(msg)


def stringify(
    obj: Any, options: EncodeOptions | None = None, **kwargs: Any
) -> SourceMap:
    """
    Serializes a Python value and maps the generated JSON text.

    The returned source map's ``text`` is the JSON output; its pointers
    locate every member and element inside that text.
    """
    if options is None:
        options = EncodeOptions(**kwargs)
    elif kwargs:
        raise TypeError("pass either options or keyword arguments, not both")

    text = _encode_value(obj, options, 0, set())
    return parse(text)


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "Cursor",
    "EncodeOptions",
    "Entry",
    "HotPathStats",
    "JSONDecodeError",
    "JsonValue",
    "LexicalError",
    "ParseError",
    "ParseOptions",
    "Position",
    "Production",
    "Range",
    "SourceMap",
    "SourceMapParser",
    "StructuralError",
    "TrailingContentError",
    "clear_hot_path_stats",
    "escape_pointer_segment",
    "get_hot_path_stats",
    "join_pointer",
    "load",
    "parse",
    "resolve_pointer",
    "split_pointer",
    "stringify",
    "unescape_pointer_segment",
]
