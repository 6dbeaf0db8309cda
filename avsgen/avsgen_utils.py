"""
Small helpers shared by the modifier chain and the reference loader.
"""
import os
import re

# AviSynth reads paths through the ANSI code page and has no escape syntax, so
# only printable ASCII (minus the characters Windows forbids) and the
# Windows-1252 letters and symbols are usable.
_ANSI_SYMBOLS = (
    "€‚ƒ„‰Š‹ŒŽ‘’“”"
    "•–—™š›œžŸ¡¢£¤"
    "¥¦§©ª«¬®°²³´µ"
    "·¹º»¼½¾¿"
)
_VALID_PATH_RE = re.compile(
    r"^[ !$&'()+,\-./0-9:=@A-Z\[\\\]^_`a-z{}~" + _ANSI_SYMBOLS + "À-ÿ]+$"
)

_IDENTIFIER_RE = re.compile(r'^[A-Za-z_][0-9A-Za-z_]*$')


def resolve_path(path: str) -> str:
    """Absolute, normalized form of path. Pure string transform, no existence check."""
    return os.path.abspath(path)


def is_valid_path(path=None) -> bool:
    """Checks that a path (or the working directory) only uses characters AviSynth supports."""
    absolute = resolve_path(path or '')
    return bool(_VALID_PATH_RE.fullmatch(absolute))


def is_identifier(text: str) -> bool:
    return bool(_IDENTIFIER_RE.fullmatch(text))
