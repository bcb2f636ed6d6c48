"""
Argument Tokenizer

Splits a flat argv into positional arguments and --key options:

    add Coffee 3.5 --category Food --verbose
    -> positionals ["add", "Coffee", "3.5"]
       options {"category": "Food", "verbose": True}

A bare --flag (last on the line, or followed by another --key) is True.
Which options a command accepts, and what they must look like, is decided
later by the command's options model.
"""

from typing import Sequence, Union

from pydantic import BaseModel, Field


OptionValue = Union[str, bool]


class ParsedArgs(BaseModel):
    """Raw command line, split but not yet validated."""

    positionals: list[str] = Field(default_factory=list)
    options: dict[str, OptionValue] = Field(default_factory=dict)

    @property
    def command(self) -> str:
        return self.positionals[0] if self.positionals else ""

    def positional(self, index: int) -> str:
        """Positional argument after the command name, or "" if absent."""
        position = index + 1
        if position < len(self.positionals):
            return self.positionals[position]
        return ""


def parse_argv(argv: Sequence[str]) -> ParsedArgs:
    """Tokenize argv; later occurrences of the same --key win."""
    parsed = ParsedArgs()
    i = 0
    while i < len(argv):
        token = argv[i]
        if token.startswith("--"):
            key = token[2:]
            following = argv[i + 1] if i + 1 < len(argv) else None
            if following is None or following.startswith("--"):
                parsed.options[key] = True
                i += 1
            else:
                parsed.options[key] = following
                i += 2
        else:
            parsed.positionals.append(token)
            i += 1
    return parsed
