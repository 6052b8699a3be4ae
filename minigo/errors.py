"""Error taxonomy for minigo.

Every failure raised while reading or evaluating a program derives from
MinigoError. Errors collect context while they propagate (argument index,
block index, source line) via ``with_context``, which prepends a segment and
returns the same exception so it can be re-raised with its type intact.
"""

from __future__ import annotations


class MinigoError(Exception):
    """Base class for all minigo errors"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.context: list[str] = []
        self.line: int | None = None

    def with_context(self, prefix: str) -> MinigoError:
        self.context.insert(0, prefix)
        return self

    def __str__(self) -> str:
        return ": ".join([*self.context, self.message])


class ParseError(MinigoError):
    """Raised by the reader when source text is not valid for the subset"""


class UnsupportedConstruct(MinigoError):
    """Raised for statements, expressions, operators or shapes that are not implemented"""


class UndefinedReference(MinigoError):
    """Raised when an identifier, import alias, package or export cannot be resolved"""


class TypeMismatch(MinigoError):
    """Raised when operand or argument kinds do not match"""


class ConversionError(MinigoError):
    """Raised when a literal cannot be converted to its value kind"""


class EntryPointNotFound(MinigoError):
    """Raised when the requested entry point function is not declared"""


class Cancelled(MinigoError):
    """Raised when a run is cancelled through its cancellation token"""


class HostError(MinigoError):
    """Raised when a host function rejects its arguments at run time"""


class CallDepthExceeded(MinigoError):
    """Raised when script function calls nest deeper than the configured limit"""
