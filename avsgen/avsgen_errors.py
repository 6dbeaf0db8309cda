"""
Error hierarchy for signature compilation, call binding and script assembly.

Every failure in this package is an AvisynthError. Binding errors are raised
at the point of detection and abort the whole call: no partial output is ever
returned. Only the command-line front end turns them into exit codes.
"""

from typing import Any, Dict, Optional, Sequence


class AvisynthError(Exception):
    """Base class for every error raised by avsgen."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


# =================================================================
# Call binding
# =================================================================

class SignatureError(AvisynthError):
    """A call does not fit the shape of its compiled signature."""

    def __init__(self, message: str, call_name: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.call_name = call_name


class SignatureTooManyArguments(SignatureError):
    def __init__(self, call_name: str, count: int):
        super().__init__(f"too many arguments for {call_name}", call_name,
                         context={"count": count})
        self.count = count


class SignatureAmbiguousPosition(SignatureError):
    def __init__(self, call_name: str, fragment: str):
        super().__init__(f"a skipped parameter makes {fragment} ambiguous!", call_name,
                         context={"fragment": fragment})
        self.fragment = fragment


class SignatureMissingRequired(SignatureError):
    def __init__(self, call_name: str, position: int):
        super().__init__("a required argument is missing!", call_name,
                         context={"position": position})
        self.position = position


class SignatureMissingFilename(SignatureError):
    def __init__(self, call_name: str, position: int):
        super().__init__("filename is a required argument!", call_name,
                         context={"position": position})
        self.position = position


# =================================================================
# Value checks (modifier chain)
# =================================================================

class TypeMismatchError(AvisynthError):
    """A value failed the check or coercion selected by its modifier."""

    def __init__(self, message: str, value: Any = None, expected: Optional[str] = None,
                 modifier: Optional[str] = None):
        super().__init__(message, context={"value": value, "expected": expected,
                                           "modifier": modifier})
        self.value = value
        self.expected = expected
        self.modifier = modifier


class TypeMismatchBoolean(TypeMismatchError):
    def __init__(self, value: Any, modifier: Optional[str] = None):
        super().__init__(f'expected boolean, got "{value}"', value, "boolean", modifier)


class TypeMismatchNumber(TypeMismatchError):
    def __init__(self, value: Any, modifier: Optional[str] = None):
        super().__init__(f'expected number, got "{value}"', value, "number", modifier)


class TypeMismatchInteger(TypeMismatchError):
    def __init__(self, value: Any, modifier: Optional[str] = None):
        super().__init__(f'expected integer, got "{value}"', value, "integer", modifier)


class TypeMismatchAllowedValue(TypeMismatchError):
    def __init__(self, value: Any, allowed: Sequence[str], modifier: Optional[str] = None):
        allowed_text = ",".join(allowed)
        super().__init__(f"bad type ({value})! allowed values: {allowed_text}", value,
                         allowed_text, modifier)
        self.allowed = tuple(allowed)


class TypeMismatchVariable(TypeMismatchError):
    def __init__(self, value: Any, modifier: Optional[str] = None):
        if isinstance(value, str):
            message = f'bad syntax for variable name "{value}"!'
        else:
            message = "variable must be a string!"
        super().__init__(message, value, "variable name", modifier)


class TypeMismatchColor(TypeMismatchError):
    def __init__(self, value: Any, modifier: Optional[str] = None):
        super().__init__(f'bad color "{value}"!', value, "color", modifier)


class TypeMismatchText(TypeMismatchError):
    def __init__(self, value: Any, modifier: Optional[str] = None):
        super().__init__(f'expected string, got "{value}"', value, "string", modifier)


class UnsupportedArgument(TypeMismatchError):
    def __init__(self, value: Any):
        super().__init__(f"unsupported argument type {type(value).__name__}", value,
                         "bool, number, string or None")


class PathAmbiguity(AvisynthError):
    def __init__(self, value: Any, modifier: Optional[str] = None):
        super().__init__("only one path supported!", context={"value": value,
                                                            "modifier": modifier})
        self.value = value


# =================================================================
# Registration, loading, configuration
# =================================================================

class RegistryError(AvisynthError):
    def __init__(self, message: str, name: str):
        super().__init__(message, context={"name": name})
        self.name = name


class RegistryDuplicateName(RegistryError):
    def __init__(self, name: str):
        super().__init__(f"plugin {name} is already registered!", name)


class RegistryReservedName(RegistryError):
    def __init__(self, name: str):
        super().__init__(f"plugin name {name} is reserved!", name)


class RegistryUnknownName(RegistryError):
    def __init__(self, name: str):
        super().__init__(f"no plugin named {name}!", name)


class LoaderError(AvisynthError):
    def __init__(self, message: str, path: str):
        super().__init__(message, context={"path": path})
        self.path = path


class InvalidPathError(LoaderError):
    def __init__(self, path: str):
        super().__init__("Path contains invalid characters!", path)


class NotAFileError(LoaderError):
    def __init__(self, path: str):
        super().__init__(f"{path} is not a file!", path)


class UnknownReferenceType(LoaderError):
    def __init__(self, path: str):
        super().__init__(f"{path} is of unknown type!", path)


class InvalidDirectoryError(LoaderError):
    def __init__(self, path: str):
        super().__init__(f'invalid directory "{path}"!', path)


class CatalogError(AvisynthError):
    pass


class ConfigError(AvisynthError):
    pass
