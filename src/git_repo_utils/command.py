"""Argument escaping and command-line building."""

import shlex
from collections.abc import Iterable, Iterator

from .errors import InvalidArgumentError


def escape_arg(value: str) -> str:
    """
    Escape a value so a shell-style parser treats it as one literal argument.

    This is the only escaping primitive in the package: every untrusted
    value that ends up in an argument string goes through it.

    Example:
        escape_arg("it's; rm -rf $HOME")  # "'it'\"'\"'s; rm -rf $HOME'"
    """
    return shlex.quote(str(value))


def join_args(args: Iterable[str]) -> str:
    """Render literal tokens as a single escaped argument string."""
    return " ".join(escape_arg(arg) for arg in args)


def split_args(argument_string: str) -> list[str]:
    """
    Split an escaped argument string back into literal tokens.

    Uses POSIX rules, so anything produced by `escape_arg` comes back as
    exactly one token with its original content.

    """
    return shlex.split(argument_string, posix=True)


class GitCommand:
    """
    Builder for the argument list of one git invocation.

    Every value passed in is kept as a literal token. There is no way to
    splice raw text into the command, so callers never quote by hand.

    Example:
        cmd = GitCommand("commit").flag("-a").option("-m", message)
        cmd.argv   # ("commit", "-a", "-m", message)
        str(cmd)   # "commit -a -m '...escaped message...'"
    """

    def __init__(self, *args: str):
        self._args: list[str] = []
        self.arg(*args)

    def arg(self, *values: str | None) -> "GitCommand":
        """Append positional values. None is skipped."""
        self._args.extend(str(value) for value in values if value is not None)
        return self

    def args(self, values: Iterable[str]) -> "GitCommand":
        """Append every value from an iterable."""
        return self.arg(*values)

    def operand(self, *values: str | None) -> "GitCommand":
        """
        Append caller-supplied positional values such as refs, remotes or tags.

        None is skipped. A value starting with "-" would be parsed by git as
        an option, so it is rejected instead of being passed on.

        Raises:
            InvalidArgumentError: A value starts with "-".

        Example:
            GitCommand("checkout").operand(branch)
        """
        for value in values:
            if value is not None and str(value).startswith("-"):
                raise InvalidArgumentError(f"{value!r} looks like an option", str(value))
        return self.arg(*values)

    def end_of_options(self) -> "GitCommand":
        """Append `--`; everything after it is positional."""
        self._args.append("--")
        return self

    def flag(self, name: str, enabled: bool = True) -> "GitCommand":
        """Append a flag such as `--force` when enabled."""
        if enabled:
            self._args.append(name)
        return self

    def option(self, name: str, value: str | int | None) -> "GitCommand":
        """
        Append an option and its value as two tokens.

        A None value drops the option entirely.

        """
        if value is not None:
            self._args.extend([name, str(value)])
        return self

    def paths(self, values: Iterable[str] | str | None) -> "GitCommand":
        """Append `--` followed by pathspecs, so they are never read as options."""
        if values is None:
            return self
        if isinstance(values, str):
            values = [values]
        values = list(values)
        if values:
            self._args.append("--")
            self._args.extend(str(v) for v in values)
        return self

    @property
    def argv(self) -> tuple[str, ...]:
        return tuple(self._args)

    def __iter__(self) -> Iterator[str]:
        return iter(self._args)

    def __len__(self) -> int:
        return len(self._args)

    def __str__(self) -> str:
        return join_args(self._args)

    def __repr__(self) -> str:
        return f"GitCommand({', '.join(repr(a) for a in self._args)})"
