"""Shared helpers for status blocks: file and command I/O, environment and Pango output."""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Iterable

_PANGO_SPECIAL_CHARS = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
)


class MissingDependencyError(RuntimeError):
    """Raised when a required external dependency is not available."""

    def __init__(self, missing_dependency: str) -> None:
        super().__init__(missing_dependency)
        self.missing_dependency = missing_dependency
        self.message = f"missing dependency: {missing_dependency}"

    def __str__(self) -> str:
        return self.missing_dependency


def read_whole_file(file_name: str | os.PathLike) -> list[str]:
    """Return every line of a file, without line terminators.

    A trailing newline yields a final empty entry, and an empty file yields
    a single empty line.
    """
    try:
        with open(file_name, encoding="utf-8") as handle:
            contents = handle.read()
    except OSError as exc:
        raise OSError(f"unable to open {os.fspath(file_name)} for reading") from exc
    return contents.split("\n")


def read_first_line_of_file(file_name: str | os.PathLike) -> str:
    """Return the first line of a file without its line terminator."""
    try:
        with open(file_name, encoding="utf-8") as handle:
            line = handle.readline()
    except OSError as exc:
        raise OSError(f"unable to open {os.fspath(file_name)} for reading") from exc
    return line.rstrip("\n")


def write_lines_to_file(file_name: str | os.PathLike, lines: Iterable[str]) -> None:
    """Replace a file's contents with the given lines, each newline-terminated."""
    try:
        with open(file_name, "w", encoding="utf-8") as handle:
            handle.writelines(f"{line}\n" for line in lines)
    except OSError as exc:
        raise OSError("Cannot open file for writing") from exc


def write_one_line_to_file(file_name: str | os.PathLike, line: str) -> None:
    """Replace a file's contents with a single newline-terminated line."""
    write_lines_to_file(file_name, [line])


def _run_shell(cmd: str, capture: bool) -> str:
    try:
        completed = subprocess.run(
            cmd,
            shell=True,
            stdout=subprocess.PIPE if capture else subprocess.DEVNULL,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise OSError("cannot open pipe") from exc
    return completed.stdout or ""


def exec_cmd_read_whole_out(cmd: str) -> list[str]:
    """Run a shell command and return its output lines without terminators."""
    return [line.rstrip("\n") for line in _run_shell(cmd, True).splitlines(keepends=True)]


def exec_cmd_read_first_line(cmd: str) -> str:
    """Run a shell command and return its first output line, terminator included."""
    lines = _run_shell(cmd, True).splitlines(keepends=True)
    return lines[0] if lines else ""


def exec_cmd_dont_read(cmd: str) -> None:
    """Run a shell command, discarding its output."""
    _run_shell(cmd, False)


def replace_all(text: str, to_replace: str, replace_with: str) -> str:
    """Return text with every occurrence of to_replace substituted."""
    if not to_replace:
        raise ValueError("the string to replace must not be empty")
    return text.replace(to_replace, replace_with)


def get_env(name: str, default: str = "") -> str:
    """Return an environment variable, or default when it is unset."""
    return os.environ.get(name, default)


def get_env_extra_empties(
    name: str, default: str = "", considered_as_empty: Iterable[str] = ()
) -> str:
    """Like get_env, but also fall back when the value is one of considered_as_empty."""
    value = os.environ.get(name)
    if value is None or value in considered_as_empty:
        return default
    return value


def escape_pango(text: str) -> str:
    """Escape the characters that Pango markup treats specially."""
    for special, replacement in _PANGO_SPECIAL_CHARS:
        text = text.replace(special, replacement)
    return text


def pango_markup(full_text: str, color: str) -> str:
    """Return full_text wrapped in a coloured Pango span."""
    return f"<span color='{escape_pango(color)}'>{escape_pango(full_text)}</span>"


def print_pango_markup(full_text: str, color: str) -> None:
    """Print full_text as a coloured Pango span and flush standard output."""
    print(pango_markup(full_text, color), flush=True)


def program_exists_in_path(program: str) -> bool:
    """Return whether a file named program is in any directory listed in PATH."""
    directories = get_env("PATH", "").split(":")
    if directories and directories[-1] == "":
        directories.pop()
    return any(program in os.listdir(directory) for directory in directories)


def approximately_equal(
    a: float, b: float, abs_epsilon: float = 1e-12, rel_epsilon: float = 1e-8
) -> bool:
    """Compare two floats with an absolute and then a relative tolerance."""
    diff = abs(a - b)
    if diff <= abs_epsilon:
        return True
    return diff <= max(abs(a), abs(b)) * rel_epsilon