"""Version literals, platform thresholds and platform/version extraction."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from declint.domain.constants import PLATFORM_ALIASES
from declint.domain.errors import ConfigurationError
from declint.domain.structure import ByteRange, StructureModel, TokenKind

logger = logging.getLogger(__name__)


class Ordering(Enum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


@dataclass(frozen=True, order=True)
class Version:
    """Dotted numeric version; ordering is lexicographic over (major, minor, patch)."""

    major: int
    minor: int = 0
    patch: int = 0

    _PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"([0-9]+)(?:\.([0-9]+))?(?:\.([0-9]+))?")

    @classmethod
    def parse(cls, text: str) -> Version | None:
        """Parse 'N', 'N.N' or 'N.N.N'; any other shape returns None."""
        match = cls._PATTERN.fullmatch(text)
        if match is None:
            return None
        major, minor, patch = (int(part) if part is not None else 0 for part in match.groups())
        return cls(major, minor, patch)

    @classmethod
    def from_config(cls, value: object, option: str = "version") -> Version:
        """Parse a configuration value, raising ConfigurationError when malformed."""
        if isinstance(value, bool):
            raise ConfigurationError(f"{option}: expected a version, got {value!r}")
        if isinstance(value, int):
            text = str(value)
        elif isinstance(value, float):
            text = repr(value)
            logger.warning(
                "%s: unquoted version %s was read as a number; quote it to keep trailing zeros",
                option,
                text,
            )
        elif isinstance(value, str):
            text = value.strip()
        else:
            raise ConfigurationError(f"{option}: expected a version, got {value!r}")
        version = cls.parse(text)
        if version is None:
            raise ConfigurationError(f"{option}: malformed version {value!r}")
        return version

    @staticmethod
    def compare(a: Version, b: Version) -> Ordering:
        if a < b:
            return Ordering.LESS
        if a > b:
            return Ordering.GREATER
        return Ordering.EQUAL

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


class PlatformThresholds:
    """Minimum version per platform, with aliases (OSX -> macOS) resolved on lookup."""

    def __init__(self, minimums: Mapping[str, Version]) -> None:
        by_name: dict[str, Version] = {}
        for platform, version in minimums.items():
            for alias in PLATFORM_ALIASES.get(platform, (platform,)):
                by_name[alias] = version
        self._by_name = by_name

    def resolve(self, name: str) -> Version | None:
        return self._by_name.get(name)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._by_name)

    def is_redundant(self, platform: str, version: Version) -> bool:
        """True when version is at or below the threshold, i.e. always satisfied."""
        threshold = self.resolve(platform)
        if threshold is None:
            return False
        return Version.compare(version, threshold) in (Ordering.LESS, Ordering.EQUAL)


@dataclass(frozen=True)
class PlatformVersionMatch:
    platform: str
    version: Version
    version_text: str
    range: ByteRange


class PlatformVersionScanner:
    """Extracts '<platform> <version>' pairs from a byte range of a file."""

    def __init__(self, thresholds: PlatformThresholds) -> None:
        self._thresholds = thresholds
        names = "|".join(re.escape(name) for name in thresholds.names)
        self._pattern = re.compile(rf"(?:{names}) [0-9.]+")

    def scan(self, file: StructureModel, byte_range: ByteRange) -> Iterator[PlatformVersionMatch]:
        """
        Yield each pair whose tokens are exactly a keyword followed by a number.

        Wildcards, unknown platforms and malformed version text are skipped.
        """
        for match in file.query.find_matches(self._pattern, byte_range):
            tokens = match.tokens
            if len(tokens) != 2 or [token.kind for token in tokens] != [TokenKind.KEYWORD, TokenKind.NUMBER]:
                continue
            platform, version_text = tokens[0].text, tokens[1].text
            if self._thresholds.resolve(platform) is None:
                continue
            version = Version.parse(version_text)
            if version is None:
                logger.debug("Skipping malformed version %r at offset %d", version_text, tokens[1].offset)
                continue
            yield PlatformVersionMatch(platform, version, version_text, match.range)
