"""
The call binder: maps call-site arguments onto a compiled signature and
produces one line of AviSynth source, ``Name(frag1, name2=frag2, ...)``.

Arguments and definitions are walked with two cursors. They advance together,
except that a multi-valued definition absorbs a run of arguments: a
homogeneous run (``m``) continues while the argument variant matches the first
value of the run, an auto-typed run (``ma``) continues until the arguments end
or an omitted argument is reached.
"""
from typing import List, Optional, Sequence

from avsgen.avsgen_datatypes import Arg, ParameterKind, Signature, Modifier, Unset, to_arg
from avsgen.avsgen_errors import (
    SignatureAmbiguousPosition, SignatureMissingFilename, SignatureMissingRequired,
    SignatureTooManyArguments
)
from avsgen.avsgen_params import ParameterProcessor


class CallBinder:
    """Callable closed over one Signature. Holds no per-call state."""

    def __init__(self, signature: Signature, processor: Optional[ParameterProcessor] = None):
        self.signature = signature
        self.processor = processor or ParameterProcessor(signature.allowed_types)

    @property
    def name(self) -> str:
        return self.signature.name

    def __call__(self, *args) -> str:
        return self.bind(args)

    def __repr__(self):
        return f"<CallBinder {self.signature}>"

    def bind(self, args: Sequence) -> str:
        values = [to_arg(value) for value in args]
        definitions = self.signature.params
        fragments: List[str] = []

        a = d = 0
        while a < len(values):
            if d >= len(definitions):
                raise SignatureTooManyArguments(self.name, len(values))
            definition = definitions[d]
            value = values[a]
            if value is Unset:
                a += 1
                d += 1
                continue

            if definition.kind is ParameterKind.SINGLE:
                fragment = self.processor(definition.modifier, value, definition.flags)
                if definition.named:
                    fragments.append(f"{definition.identifier}={fragment}")
                elif a > len(fragments):
                    # an omitted argument before an unnamed one would shift its position
                    raise SignatureAmbiguousPosition(self.name, fragment)
                else:
                    fragments.append(fragment)
                a += 1
            else:
                run = self._collect_run(definition.kind, values, a)
                for item in run:
                    fragments.append(self.processor(definition.modifier, item, definition.flags))
                a += len(run)
            d += 1

        self._check_required(values)
        return f"{self.name}({', '.join(fragments)})"

    @staticmethod
    def _collect_run(kind: ParameterKind, values: List[Arg], start: int) -> List[Arg]:
        first = values[start]
        end = start + 1
        while end < len(values):
            candidate = values[end]
            if candidate is Unset:
                break
            if kind is ParameterKind.MULTI_HOMOGENEOUS and type(candidate) is not type(first):
                break
            end += 1
        return values[start:end]

    def _check_required(self, values: List[Arg]):
        # positional: the argument at index i against the definition at index i
        for position, definition in enumerate(self.signature.params):
            if position < len(values) and values[position] is not Unset:
                continue
            if definition.flags & Modifier.FILE:
                raise SignatureMissingFilename(self.name, position)
            if definition.flags & Modifier.REQUIRED:
                raise SignatureMissingRequired(self.name, position)
