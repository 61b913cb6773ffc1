import pathlib
from dataclasses import dataclass
from typing import NotRequired

from typing_extensions import TypedDict, override

__all__ = (
    "ApplicationError",
    "Location",
    "SpecificationError",
    "SpecificationSyntaxError",
)


@dataclass(slots=True)
class ApplicationError(Exception):
    class Context(TypedDict): ...

    message: str
    ctx: Context | None = None

    def format_message(self) -> str:
        return self.message.format(ctx=self.ctx or {})

    @override
    def __str__(self) -> str:
        return self.format_message()


@dataclass(slots=True)
class SpecificationError(ApplicationError): ...


@dataclass(slots=True)
class SpecificationSyntaxError(SpecificationError):
    """
    Raised when a rule specification string cannot be parsed.

    The message is the reason (for example ``"unrecognized token"`` or
    ``"length>=number expected"``). The context records where parsing stopped so
    the caller can point at the offending clause.
    """

    class Context(TypedDict):
        """
        Attributes:
            offset: Character offset at which parsing stopped.
            consumed: The part of the specification accepted before the error.
            remainder: The unconsumed rest of the specification.
        """

        offset: int
        consumed: str
        remainder: str

    ctx: Context

    @property
    def reason(self) -> str:
        return self.message

    @override
    def format_message(self) -> str:
        return "%s: %s-->%s" % (
            self.message,
            self.ctx["consumed"],
            self.ctx["remainder"],
        )


class Location(TypedDict):
    filename: pathlib.Path
    line: NotRequired[int]
    col: NotRequired[int]
