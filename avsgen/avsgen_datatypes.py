"""
Defines the core data types used by the signature compiler and call binder.

A signature such as ``Crop(ri:, ri:, ri:, ri:, b:align)`` compiles into a
Signature holding one ParameterDefinition per token. Call-site values are
converted into the small Bool/Number/Text/Unset variant at the call boundary so
the modifier chain dispatches on the variant instead of on Python types.
"""

import enum
import math
import numbers
import os
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple, Union

from avsgen.avsgen_errors import UnsupportedArgument

# =================================================================
# Modifiers
# =================================================================

MODIFIER_ALPHABET = "qprfntbdivceam"


class Modifier(enum.Flag):
    """Flag set over the fixed modifier alphabet."""
    NONE = 0
    QUOTED = enum.auto()    # q
    PATH = enum.auto()      # p
    REQUIRED = enum.auto()  # r
    FILE = enum.auto()      # f
    NOT_PATH = enum.auto()  # n
    TYPE = enum.auto()      # t
    BOOLEAN = enum.auto()   # b
    DECIMAL = enum.auto()   # d
    INTEGER = enum.auto()   # i
    VARIABLE = enum.auto()  # v
    COLOR = enum.auto()     # c
    ESCAPED = enum.auto()   # e
    AUTO = enum.auto()      # a
    MULTI = enum.auto()     # m

    @classmethod
    def parse(cls, text: str) -> "Modifier":
        """ORs the flags of every known letter; unknown letters are inert."""
        flags = cls.NONE
        for letter in text or "":
            flags |= _LETTERS.get(letter, cls.NONE)
        return flags

    def letters(self) -> str:
        return "".join(letter for letter, flag in _LETTERS.items() if flag & self)


_LETTERS = {
    "q": Modifier.QUOTED,
    "p": Modifier.PATH,
    "r": Modifier.REQUIRED,
    "f": Modifier.FILE,
    "n": Modifier.NOT_PATH,
    "t": Modifier.TYPE,
    "b": Modifier.BOOLEAN,
    "d": Modifier.DECIMAL,
    "i": Modifier.INTEGER,
    "v": Modifier.VARIABLE,
    "c": Modifier.COLOR,
    "e": Modifier.ESCAPED,
    "a": Modifier.AUTO,
    "m": Modifier.MULTI,
}


class ParameterKind(enum.Enum):
    SINGLE = "single"
    MULTI_HOMOGENEOUS = "multi"
    MULTI_AUTO = "multi-auto"

    @classmethod
    def from_flags(cls, flags: Modifier) -> "ParameterKind":
        if not flags & Modifier.MULTI:
            return cls.SINGLE
        if flags & Modifier.AUTO:
            return cls.MULTI_AUTO
        return cls.MULTI_HOMOGENEOUS


# =================================================================
# Compiled signatures
# =================================================================

@dataclass(frozen=True)
class ParameterDefinition:
    """One positional slot of a signature.

    ``named`` is only true when the token carried a colon followed by an
    identifier; a bare token keeps its text as identifier but is emitted as an
    unnamed, positional value.
    """
    modifier: str
    identifier: Optional[str]
    named: bool = False
    flags: Modifier = field(init=False, compare=False)
    kind: ParameterKind = field(init=False, compare=False)

    def __post_init__(self):
        flags = Modifier.parse(self.modifier)
        object.__setattr__(self, "flags", flags)
        object.__setattr__(self, "kind", ParameterKind.from_flags(flags))

    @property
    def required(self) -> bool:
        return bool(self.flags & (Modifier.REQUIRED | Modifier.FILE))


@dataclass(frozen=True)
class Signature:
    """Compiled description of a callable's accepted parameters."""
    name: str
    params: Tuple[ParameterDefinition, ...] = ()
    allowed_types: Tuple[str, ...] = ()

    def __str__(self) -> str:
        from avsgen.avsgen_printer import Printer
        return Printer().pformat(self)


# =================================================================
# Call arguments
# =================================================================

@dataclass(frozen=True)
class Bool:
    value: bool


@dataclass(frozen=True)
class Number:
    value: Union[int, float]

    @property
    def is_nan(self) -> bool:
        return isinstance(self.value, float) and math.isnan(self.value)


@dataclass(frozen=True)
class Text:
    value: str


class _UnsetType:
    """Marks an omitted argument. Use the ``Unset`` singleton."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "Unset"

    def __bool__(self):
        return False


Unset = _UnsetType()

Arg = Union[Bool, Number, Text, _UnsetType]


def to_arg(value: Any) -> Arg:
    """Converts a Python call-site value into the argument variant."""
    if isinstance(value, (Bool, Number, Text, _UnsetType)):
        return value
    if value is None:
        return Unset
    if isinstance(value, bool):
        return Bool(value)
    if isinstance(value, (int, float)):
        return Number(value)
    if isinstance(value, numbers.Integral):
        return Number(int(value))
    if isinstance(value, numbers.Real):
        return Number(float(value))
    if isinstance(value, str):
        return Text(value)
    if isinstance(value, os.PathLike):
        return Text(os.fspath(value))
    raise UnsupportedArgument(value)


def is_truthy(arg: Arg) -> bool:
    if isinstance(arg, (Bool, Number, Text)):
        return bool(arg.value) and not (isinstance(arg, Number) and arg.is_nan)
    return False


@dataclass
class ParameterContext:
    """Transient state for one (modifier, value) pair while the chain runs.

    ``rendered`` is set once a step has produced the final textual form
    (a quoted string, an escaped string or a color literal).
    """
    flags: Modifier
    modifier: str
    value: Arg
    allowed_types: Tuple[str, ...] = ()
    rendered: Optional[str] = None

    def has(self, flags: Modifier) -> bool:
        return bool(self.flags & flags)
