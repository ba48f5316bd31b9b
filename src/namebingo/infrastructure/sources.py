"""Name sources — where the names on a card come from.

Every source implements ``supply()`` and returns an ordered tuple of names.
Failures of the underlying backend raise :class:`SourceUnavailable`; an empty
result is not a failure (padding decides whether a card can still be built).

Built-in kinds:

- ``file``: one name per line of a UTF-8 text file
- ``ldap``: entries below an LDAP base DN, queried through ``ldapsearch``
- ``command``: one name per stdout line of an external command
"""

from __future__ import annotations

import base64
import binascii
import logging
import shlex
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, ClassVar, Self
from urllib.parse import unquote, urlsplit

from namebingo.domain.errors import SourceUnavailable

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def split_lines(text: str) -> tuple[str, ...]:
    """One name per line; surrounding whitespace stripped, blank lines dropped."""
    return tuple(stripped for line in text.splitlines() if (stripped := line.strip()))


class NameSource(ABC):
    """A supplier of names for the layout engine."""

    kind: ClassVar[str]
    description: ClassVar[str] = ""

    @classmethod
    @abstractmethod
    def from_locator(cls, locator: str, **options: Any) -> Self:
        """Build a source from its CLI/TOML locator string.

        Unknown keyword *options* are ignored so every kind can be built
        from the same ``[source]`` section.
        """

    @abstractmethod
    def supply(self) -> tuple[str, ...]:
        """Produce the names. Raises SourceUnavailable on backend failure."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.locator!r})"

    @property
    @abstractmethod
    def locator(self) -> str:
        """The locator this source reads from."""


class FileSource(NameSource):
    """Names read from a text file, one per line."""

    kind = "file"
    description = "Text file with one name per line."

    def __init__(self, path: Path, *, encoding: str = "utf-8") -> None:
        self._path = path
        self._encoding = encoding

    @classmethod
    def from_locator(cls, locator: str, **options: Any) -> Self:
        return cls(Path(locator).expanduser())

    @property
    def locator(self) -> str:
        return str(self._path)

    def supply(self) -> tuple[str, ...]:
        try:
            text = self._path.read_text(encoding=self._encoding)
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Cannot read names from {self._path}: {exc}"
            raise SourceUnavailable(msg, path=self._path) from exc
        names = split_lines(text)
        logger.debug("Read %d names from %s", len(names), self._path)
        return names


def _run(argv: list[str], *, timeout: float, what: str) -> str:
    """Run *argv* and return its stdout, mapping every failure to SourceUnavailable."""
    try:
        completed = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            check=True,
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        raise SourceUnavailable(f"{what}: executable not found: {argv[0]}") from exc
    except subprocess.TimeoutExpired as exc:
        raise SourceUnavailable(f"{what}: timed out after {timeout:g}s") from exc
    except subprocess.CalledProcessError as exc:
        stderr = (exc.stderr or "").strip()
        msg = f"{what}: exited with status {exc.returncode}"
        if stderr:
            msg = f"{msg}: {stderr}"
        raise SourceUnavailable(msg, returncode=exc.returncode) from exc
    except OSError as exc:
        raise SourceUnavailable(f"{what}: {exc}") from exc
    return completed.stdout


class CommandSource(NameSource):
    """Names printed by an external command, one per line.

    The command string is split with :func:`shlex.split` and run without a
    shell.
    """

    kind = "command"
    description = "External command printing one name per line."

    def __init__(self, argv: list[str], *, timeout: float = DEFAULT_TIMEOUT) -> None:
        if not argv:
            raise SourceUnavailable("Empty command")
        self._argv = argv
        self._timeout = timeout

    @classmethod
    def from_locator(cls, locator: str, **options: Any) -> Self:
        try:
            argv = shlex.split(locator)
        except ValueError as exc:
            raise SourceUnavailable(f"Cannot parse command {locator!r}: {exc}") from exc
        return cls(argv, timeout=options.get("timeout", DEFAULT_TIMEOUT))

    @property
    def locator(self) -> str:
        return shlex.join(self._argv)

    def supply(self) -> tuple[str, ...]:
        stdout = _run(self._argv, timeout=self._timeout, what=f"Command {self.locator!r}")
        names = split_lines(stdout)
        logger.debug("Command %s produced %d names", self._argv[0], len(names))
        return names


class LdapSource(NameSource):
    """Names of the entries below an LDAP base DN.

    Locator format: ``ldap://host[:port]/<base-dn>`` (``ldaps://`` works too).
    The query runs through the OpenLDAP ``ldapsearch`` client with a simple
    anonymous bind and reads one attribute per entry (``cn`` by default).
    """

    kind = "ldap"
    description = "LDAP base DN, e.g. ldap://ds.example.com:389/dc=example,dc=com"

    def __init__(
        self,
        server: str,
        base_dn: str,
        *,
        attribute: str = "cn",
        search_filter: str = "(objectClass=person)",
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._server = server
        self._base_dn = base_dn
        self._attribute = attribute
        self._filter = search_filter
        self._timeout = timeout

    @classmethod
    def from_locator(cls, locator: str, **options: Any) -> Self:
        parts = urlsplit(locator)
        if parts.scheme not in {"ldap", "ldaps"} or not parts.hostname:
            msg = f"Not an LDAP URL: {locator!r} (expected ldap://host[:port]/<base-dn>)"
            raise SourceUnavailable(msg)
        base_dn = unquote(parts.path.lstrip("/"))
        if not base_dn:
            raise SourceUnavailable(f"LDAP URL {locator!r} has no base DN")
        return cls(
            f"{parts.scheme}://{parts.netloc}",
            base_dn,
            attribute=options.get("ldap_attribute", "cn"),
            search_filter=options.get("ldap_filter", "(objectClass=person)"),
            timeout=options.get("timeout", DEFAULT_TIMEOUT),
        )

    @property
    def locator(self) -> str:
        return f"{self._server}/{self._base_dn}"

    def command(self) -> list[str]:
        """The ``ldapsearch`` invocation for this source."""
        return [
            "ldapsearch",
            "-x",
            "-LLL",
            "-o",
            "ldif-wrap=no",
            "-H",
            self._server,
            "-b",
            self._base_dn,
            self._filter,
            self._attribute,
        ]

    def supply(self) -> tuple[str, ...]:
        stdout = _run(self.command(), timeout=self._timeout, what=f"LDAP query {self.locator}")
        names = parse_ldif_attribute(stdout, self._attribute)
        logger.debug("LDAP query %s returned %d names", self.locator, len(names))
        return names


def parse_ldif_attribute(ldif: str, attribute: str) -> tuple[str, ...]:
    """Collect every value of *attribute* from unwrapped LDIF text.

    Handles plain ``attr: value`` and base64 ``attr:: value`` lines; attribute
    names match case-insensitively.
    """
    wanted = attribute.lower()
    values: list[str] = []
    for line in ldif.splitlines():
        name, sep, rest = line.partition(":")
        if not sep or name.lower() != wanted:
            continue
        if rest.startswith(":"):
            try:
                value = base64.b64decode(rest[1:].strip(), validate=True).decode("utf-8")
            except (binascii.Error, UnicodeDecodeError) as exc:
                raise SourceUnavailable(f"Malformed base64 value for {attribute}") from exc
        else:
            value = rest.strip()
        if value:
            values.append(value)
    return tuple(values)


BUILTIN_SOURCES: dict[str, type[NameSource]] = {
    source.kind: source for source in (FileSource, LdapSource, CommandSource)
}
