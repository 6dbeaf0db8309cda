"""
The modifier chain: checks and coerces one call-site value according to the
modifier letters of its parameter definition, and serializes it.

Steps run in a fixed order and each one is a no-op unless its letter is
present. The type, path and quoting steps are skipped for auto-typed (``a``)
parameters, whose strings are handled by the last step instead.
"""
import math
from typing import Callable, Optional, Sequence

from avsgen.avsgen_colors import parse_color as default_parse_color
from avsgen.avsgen_datatypes import (
    Bool, Modifier, Number, ParameterContext, Text, is_truthy, to_arg
)
from avsgen.avsgen_errors import (
    PathAmbiguity, TypeMismatchAllowedValue, TypeMismatchBoolean, TypeMismatchInteger,
    TypeMismatchNumber, TypeMismatchText, TypeMismatchVariable
)
from avsgen.avsgen_printer import Printer
from avsgen.avsgen_utils import is_identifier, resolve_path as default_resolve_path


class ParameterProcessor:
    """Callable applying the modifier chain to a single value.

    Args:
        allowed_types: values accepted by the ``t`` modifier, compared exactly.
        resolve_path: absolute-path collaborator used by ``f`` and ``p``.
        parse_color: color literal collaborator used by ``c``.
    """

    def __init__(self, allowed_types: Sequence[str] = (),
                 resolve_path: Callable[[str], str] = default_resolve_path,
                 parse_color: Callable[[object], str] = default_parse_color):
        self.allowed_types = tuple(allowed_types)
        self.resolve_path = resolve_path
        self.parse_color = parse_color
        self.printer = Printer()
        self._steps = (
            self._process_non_path,
            self._process_boolean,
            self._process_decimal,
            self._process_integer,
            self._process_color,
            self._process_variable,
            self._process_auto,
        )

    def __call__(self, modifier: str, value, flags: Optional[Modifier] = None) -> str:
        if flags is None:
            flags = Modifier.parse(modifier)
        ctx = ParameterContext(flags, modifier or "", to_arg(value), self.allowed_types)
        if not ctx.has(Modifier.AUTO):
            self._process_type(ctx)
            self._process_path(ctx)
            self._process_string(ctx)
        for step in self._steps:
            step(ctx)
        if ctx.rendered is not None:
            return ctx.rendered
        return self.printer.pformat(ctx.value)

    # -----------------------------------------------------------------
    # Steps
    # -----------------------------------------------------------------

    def _check_type(self, ctx: ParameterContext):
        # empty and falsy values are let through
        if not is_truthy(ctx.value):
            return
        if isinstance(ctx.value, Text) and ctx.value.value in ctx.allowed_types:
            return
        raise TypeMismatchAllowedValue(self._raw(ctx), ctx.allowed_types, ctx.modifier)

    def _process_type(self, ctx):
        if ctx.has(Modifier.TYPE):
            self._check_type(ctx)

    def _process_path(self, ctx):
        if ctx.has(Modifier.FILE | Modifier.PATH):
            if not isinstance(ctx.value, Text):
                raise TypeMismatchText(self._raw(ctx), ctx.modifier)
            ctx.value = Text(self.resolve_path(ctx.value.value))

    def _process_string(self, ctx):
        if ctx.has(Modifier.ESCAPED):
            if not isinstance(ctx.value, Text):
                raise TypeMismatchText(self._raw(ctx), ctx.modifier)
            ctx.rendered = self.printer.escape(ctx.value.value)
        elif ctx.has(Modifier.FILE | Modifier.PATH | Modifier.QUOTED | Modifier.TYPE):
            ctx.rendered = self.printer.quote(self.printer.pformat(ctx.value))

    def _process_non_path(self, ctx):
        if ctx.has(Modifier.NOT_PATH) and self._is_string(ctx):
            raise PathAmbiguity(self._raw(ctx), ctx.modifier)

    def _process_boolean(self, ctx):
        if ctx.has(Modifier.BOOLEAN):
            if self._is_string(ctx) or not isinstance(ctx.value, Bool):
                raise TypeMismatchBoolean(self._raw(ctx), ctx.modifier)

    def _process_decimal(self, ctx):
        if ctx.has(Modifier.DECIMAL):
            if self._is_string(ctx) or not self._is_finite_number(ctx.value):
                raise TypeMismatchNumber(self._raw(ctx), ctx.modifier)

    def _process_integer(self, ctx):
        if not ctx.has(Modifier.INTEGER):
            return
        value = ctx.value
        if self._is_string(ctx) or not self._is_finite_number(value):
            raise TypeMismatchInteger(self._raw(ctx), ctx.modifier)
        if isinstance(value.value, float):
            if not value.value.is_integer():
                raise TypeMismatchInteger(self._raw(ctx), ctx.modifier)
            ctx.value = Number(int(value.value))

    def _process_color(self, ctx):
        if ctx.has(Modifier.COLOR):
            ctx.rendered = self.parse_color(self._raw(ctx))

    def _process_variable(self, ctx):
        if not ctx.has(Modifier.VARIABLE):
            return
        if not isinstance(ctx.value, Text) or ctx.rendered is not None:
            raise TypeMismatchVariable(self._raw(ctx), ctx.modifier)
        if not is_identifier(ctx.value.value):
            raise TypeMismatchVariable(ctx.value.value, ctx.modifier)

    def _process_auto(self, ctx):
        if not ctx.has(Modifier.AUTO):
            return
        if ctx.rendered is not None or not isinstance(ctx.value, Text):
            return
        text = ctx.value.value
        if ctx.has(Modifier.TYPE):
            try:
                self._check_type(ctx)
            except TypeMismatchAllowedValue:
                # not a known type, so it has to be a variable
                if not is_identifier(text):
                    raise TypeMismatchVariable(text, ctx.modifier)
            else:
                ctx.rendered = self.printer.quote(text)
        elif ctx.has(Modifier.PATH):
            ctx.rendered = self.printer.quote(self.resolve_path(text))
        elif ctx.has(Modifier.QUOTED):
            ctx.rendered = self.printer.quote(text)
        elif not is_identifier(text):
            raise TypeMismatchVariable(text, ctx.modifier)

    # -----------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------

    @staticmethod
    def _raw(ctx):
        return getattr(ctx.value, "value", None)

    @staticmethod
    def _is_string(ctx) -> bool:
        return ctx.rendered is not None or isinstance(ctx.value, Text)

    @staticmethod
    def _is_finite_number(value) -> bool:
        if not isinstance(value, Number):
            return False
        return isinstance(value.value, int) or math.isfinite(value.value)
