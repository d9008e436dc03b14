"""Environment storage for the shell: exported entries and `export` listing."""

from __future__ import annotations

from collections.abc import Iterable, Mapping


def _is_name_char(char: str) -> bool:
    return char == "_" or (char.isascii() and char.isalnum())


def split_entry(entry: str) -> tuple[str, str]:
    """Split a NAME=VALUE entry into its name and value.

    An entry without '=' has an empty value.
    """
    name, _, value = entry.partition("=")
    return name, value


def export_format(entry: str) -> str:
    """Format an entry as `export` shows it: NAME="VALUE", or NAME alone."""
    if "=" not in entry:
        return entry
    name, value = split_entry(entry)
    return f'{name}="{value}"'


def is_valid_identifier(arg: str) -> bool:
    """Whether the part of arg before any '=' is a valid variable name."""
    if not arg:
        return False
    first = arg[0]
    if first != "_" and not (first.isascii() and first.isalpha()):
        return False
    name = arg.split("=", 1)[0]
    return all(_is_name_char(char) for char in name[1:])


def is_assignment(arg: str) -> bool:
    """Whether arg has the form NAME=VALUE with only name characters before '='."""
    if "=" not in arg:
        return False
    name = arg.split("=", 1)[0]
    return all(_is_name_char(char) for char in name)


def _entry_name(entry: str) -> str:
    return entry.split("=", 1)[0]


class Environment:
    """The shell's variables.

    Holds the environment proper, as NAME=VALUE entries in insertion order,
    and the sorted list shown by `export`, which also holds names exported
    without a value.
    """

    def __init__(self, environ: Mapping[str, str] | Iterable[str] | None = None):
        if environ is None:
            entries: list[str] = []
        elif isinstance(environ, Mapping):
            entries = [f"{name}={value}" for name, value in environ.items()]
        else:
            entries = list(environ)
        self._entries: list[str] = entries
        self._exported: list[str] = sorted(export_format(e) for e in entries)

    def _index(self, name: str) -> int | None:
        for index, entry in enumerate(self._entries):
            if _entry_name(entry) == name:
                return index
        return None

    def _export_index(self, name: str) -> int | None:
        for index, entry in enumerate(self._exported):
            if _entry_name(entry) == name:
                return index
        return None

    def get(self, name: str) -> str | None:
        """Return the value of name, or None when it is not set."""
        index = self._index(name)
        if index is None:
            return None
        return split_entry(self._entries[index])[1]

    def has(self, name: str) -> bool:
        """Whether name is set in the environment."""
        return self._index(name) is not None

    def overwrite(self, name: str, value: str) -> None:
        """Give an existing variable a new value."""
        index = self._index(name)
        if index is None:
            raise KeyError(name)
        entry = f"{name}={value}"
        self._entries[index] = entry
        export_index = self._export_index(name)
        if export_index is None:
            self._exported.append(export_format(entry))
            self._exported.sort()
        else:
            self._exported[export_index] = export_format(entry)

    def add(self, entry: str) -> None:
        """Append a NAME=VALUE entry to the environment and the export list."""
        self._entries.append(entry)
        self._exported.append(export_format(entry))
        self._exported.sort()

    def add_export_only(self, entry: str) -> None:
        """Add an entry to the export list alone."""
        self._exported.append(export_format(entry))
        self._exported.sort()

    def replace(self, entry: str) -> bool:
        """Overwrite the variable named by a NAME=VALUE entry if it exists.

        Returns True when a variable was replaced.
        """
        name, value = split_entry(entry)
        if self._index(name) is None:
            return False
        self.overwrite(name, value)
        return True

    def unset(self, name: str) -> None:
        """Remove name from the environment and from the export list."""
        index = self._index(name)
        if index is not None:
            del self._entries[index]
        export_index = self._export_index(name)
        if export_index is not None:
            del self._exported[export_index]

    def entries(self) -> list[str]:
        """The environment as NAME=VALUE entries, in order."""
        return list(self._entries)

    def export_lines(self) -> list[str]:
        """The lines printed by `export` with no arguments."""
        return [f"declare -x {entry}" for entry in self._exported]

    def as_dict(self) -> dict[str, str]:
        """The environment as a mapping, suitable for starting programs."""
        result: dict[str, str] = {}
        for entry in self._entries:
            name, value = split_entry(entry)
            result.setdefault(name, value)
        return result