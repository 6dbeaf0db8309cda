"""
Compiler for the compact signature grammar.

    signature := name [ "(" paramList ")" ]
    paramList := "" | token ("," token)*
    token     := [modifier ":"] [identifier]

Compilation never fails: unknown modifier letters and odd tokens become
permissive parameters, and all checking happens when the signature is bound
to call arguments.
"""
import re
from collections.abc import Mapping
from typing import Iterable, Optional, Tuple, Union

from avsgen.avsgen_datatypes import ParameterDefinition, Signature
from avsgen.avsgen_logging import get_logger

logger = get_logger(__name__)

# the last colon that is not escaped with a backslash
_SEPARATOR_RE = re.compile(r'(?<!\\):(?!.*(?<!\\):)')

ListArg = Union[str, Iterable[str], None]


def split_list(items: ListArg) -> Tuple[str, ...]:
    """Split a comma list (or pass a sequence through), trimming every item."""
    if items is None:
        return ()
    if isinstance(items, str):
        if not items.strip():
            return ()
        return tuple(item.strip() for item in items.split(','))
    return tuple(item.strip() if isinstance(item, str) else item for item in items)


def parse_token(token) -> ParameterDefinition:
    """Split one token at its last unescaped colon into modifier and identifier."""
    if isinstance(token, ParameterDefinition):
        return token
    token = token.strip()
    match = _SEPARATOR_RE.search(token)
    if match is None:
        # bare token: positional, emitted unnamed
        return ParameterDefinition("", token.replace('\\:', ':') or None)
    modifier = token[:match.start()].strip()
    identifier = token[match.end():].strip().replace('\\:', ':') or None
    return ParameterDefinition(modifier, identifier, named=identifier is not None)


def split_combined(text: str) -> Tuple[str, Optional[str]]:
    """Return the name and the parameter body of ``Name(body)``, or None as body."""
    if '(' not in text:
        return text.strip(), None
    name, _, rest = text.partition('(')
    close = rest.rfind(')')
    body = rest[:close] if close != -1 else rest
    return name.strip(), body


def compile_signature(name: str, params=None, types: ListArg = None) -> Signature:
    """
    Compile a signature.

    ``name`` may be the combined form ``Name(tok, tok, ...)``, in which case a
    second positional argument is taken as the type list. Otherwise ``params``
    is a comma-separated string, a sequence of tokens, or a mapping with
    ``params`` and ``types`` keys.
    """
    name, body = split_combined(name)
    if body is not None:
        if params is not None and types is None:
            types = params
        params = body

    if isinstance(params, Mapping):
        if types is None:
            types = params.get('types')
        params = params.get('params')

    definitions = tuple(parse_token(token) for token in split_list(params))
    allowed_types = split_list(types)
    signature = Signature(name, definitions, allowed_types)
    logger.debug("signature_compiled", name=name, params=len(definitions),
                 types=len(allowed_types))
    return signature
