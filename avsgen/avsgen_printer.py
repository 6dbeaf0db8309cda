"""
A printer for avsgen values, producing AviSynth source text.
"""
from decimal import Decimal

from avsgen.avsgen_datatypes import (
    Bool, Number, Text, ParameterDefinition, Signature, _UnsetType
)


class Printer:
    """Formats argument values and signatures into AviSynth-facing text."""

    def __init__(self):
        self._handlers = self._create_handlers()

    def pformat(self, obj) -> str:
        """Public entry point to format an object."""
        handler = self._get_handler(obj)
        return handler(obj)

    def _get_handler(self, obj):
        obj_type = type(obj)
        if obj_type in self._handlers:
            return self._handlers[obj_type]
        return lambda o: repr(o)

    def _create_handlers(self):
        return {
            Bool: self._pformat_bool,
            Number: self._pformat_number,
            Text: self._pformat_text,
            _UnsetType: self._pformat_unset,
            ParameterDefinition: self._pformat_definition,
            Signature: self._pformat_signature,
        }

    def _pformat_bool(self, obj):
        return 'true' if obj.value else 'false'

    def _pformat_number(self, obj):
        value = obj.value
        if isinstance(value, int):
            return str(value)
        text = repr(value)
        # AviSynth has no exponent syntax
        if 'e' in text:
            text = format(Decimal(text), 'f')
        return text

    def _pformat_text(self, obj):
        # Quoting is decided by the modifier chain, text is emitted verbatim.
        return obj.value

    def _pformat_unset(self, obj):
        raise ValueError("an omitted argument has no textual form")

    def _pformat_definition(self, obj):
        if obj.named:
            return f"{obj.modifier}:{obj.identifier}"
        if obj.modifier:
            return f"{obj.modifier}:"
        return obj.identifier or ''

    def _pformat_signature(self, obj):
        if not obj.params:
            return obj.name
        params = ", ".join(self._pformat_definition(p) for p in obj.params)
        return f"{obj.name}({params})"

    # -----------------------------------------------------------------
    # String forms used by the modifier chain
    # -----------------------------------------------------------------

    def quote(self, text: str) -> str:
        return f'"{text}"'

    def escape(self, text: str) -> str:
        escaped = text.replace('\\', '\\\\').replace('\n', '\\n')
        return f'"""{escaped}"""'
