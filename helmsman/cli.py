"""
Parsed CLI input.

Cli is the value object the resolver consumes: the set of option names present
(without their leading dashes) plus the free arguments in order. Tokenizing raw
argv belongs to the embedding application; Cli.parse() is a small reference
adapter covering the shapes a command switch can take:

- "--name" and "--name=value": long options (values are kept per option).
- "-abc": a cluster of short options a, b and c.
- "--": every following token is a free argument.
- anything else (including a lone "-"): a free argument.

Example
    >>> cli = Cli.parse(["-x", "--level=3", "file.txt"])
    >>> sorted(cli.options), cli.arguments, cli.values("level")
    (['level', 'x'], ('file.txt',), ('3',))
"""
import re
from collections.abc import Iterable
from types import MappingProxyType

from .faults import FaultCode, MalformedTokenError
from .utils import ordinal


class Cli:
    """
    immutable parsed command line.

    attributes
    - options: frozenset of option names (no dashes)
    - arguments: tuple of free arguments
    - tokens: the raw tokens when built through parse(), else ()
    """
    __slots__ = ("_options", "_values", "_arguments", "_tokens")

    def __init__(self, options=(), arguments=(), *, values=None, tokens=()):
        if isinstance(options, str) or not isinstance(options, Iterable):
            raise TypeError("cli 'options' must be an iterable of strings")
        if isinstance(arguments, str) or not isinstance(arguments, Iterable):
            raise TypeError("cli 'arguments' must be an iterable of strings")
        self._options = frozenset(option.lstrip("-") for option in options)
        self._arguments = tuple(arguments)
        self._values = MappingProxyType({name: tuple(items) for name, items in (values or {}).items()})
        self._tokens = tuple(tokens)

    @classmethod
    def parse(cls, tokens, /):
        """
        Build a Cli from raw tokens.

        Raises MalformedTokenError for switch-looking tokens without a usable name
        (e.g. "--=value" or "-=").
        """
        if isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("parse() argument must be an iterable of strings")

        options = []
        values = {}
        arguments = []
        terminated = False

        for index, token in enumerate(tokens := list(tokens), start=1):
            if not isinstance(token, str):
                raise TypeError("parse() argument must be an iterable of strings")

            if terminated or token == "-" or not token.startswith("-"):
                arguments.append(token)
            elif token == "--":
                terminated = True
            elif token.startswith("--"):
                name, equals, value = token[2:].partition("=")
                if not re.fullmatch(r"[^\W_](-?[^\W_]+)*", name):
                    raise MalformedTokenError(
                        f"from {ordinal(index)} position, {token!r} is not a valid long option",
                        code=FaultCode.MALFORMED_TOKEN,
                        title="malformed token",
                        hint="long options look like '--name' or '--name=value'",
                        token=token,
                        index=index,
                    )
                options.append(name)
                if equals:
                    values.setdefault(name, []).append(value)
            else:
                cluster = token[1:]
                if not re.fullmatch(r"[^\W_]+", cluster):
                    raise MalformedTokenError(
                        f"from {ordinal(index)} position, {token!r} is not a valid short option",
                        code=FaultCode.MALFORMED_TOKEN,
                        title="malformed token",
                        hint="short options are single letters, e.g. '-x' or '-xy'",
                        token=token,
                        index=index,
                    )
                options.extend(cluster)

        return cls(options, arguments, values=values, tokens=tokens)

    options = property(lambda self: self._options)
    arguments = property(lambda self: self._arguments)
    tokens = property(lambda self: self._tokens)

    def has_option(self, name, /):
        return name.lstrip("-") in self._options

    def values(self, name, /):
        """Inline values given to a long option ("--name=value"), in order."""
        return self._values.get(name.lstrip("-"), ())

    def __repr__(self):
        return f"cli(options={sorted(self._options)!r}, arguments={list(self._arguments)!r})"


__all__ = (
    "Cli",
)
