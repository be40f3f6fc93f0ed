"""
Provides `KeywordAliases`, the user-configurable alias table for turtle keywords.

Aliases let a program use alternative spellings for the command keywords, for
example the classic Logo abbreviations `fd`, `bk`, `rt` and `lt`. The lexer
consults the table only for words that are not already keywords.

Classes:
    - KeywordAliases: Maps alias words to canonical keywords.
    - AliasError: Raised when configuration is invalid or aliases conflict.

Features:
    - Dict configuration: `{"fd": "forward"}` or `{("fd", "fw"): "forward"}`
    - JSON files whose keys are comma-separated alias groups: `{"fd,fw": "forward"}`
    - Conflict detection across successive `configure` calls
    - Plain-text report of the active table

Usage:
    >>> aliases = KeywordAliases.logo_abbreviations()
    >>> aliases.resolve("fd")
    'forward'
"""

import json
import re
from typing import Any

from turtlelang.turtle_constants import (
    ALIASABLE_KEYWORDS,
    LOGO_ABBREVIATIONS,
    token_hashmap,
)

ALIAS_WORD = re.compile(r"[a-zA-Z0-9]+")


class AliasError(Exception):
    """Raised when an alias configuration is invalid.

    Attributes:
        conflicts (list[str]): One description per conflicting alias.
    """

    def __init__(self, message: str, conflicts: list[str] | None = None):
        super().__init__(message)
        self.conflicts = conflicts or []


class KeywordAliases:
    """Alias word -> canonical keyword table.

    Attributes:
        alias_map (dict[str, str]): Active aliases.
    """

    def __init__(self) -> None:
        self.alias_map: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self.alias_map)

    def __contains__(self, alias: object) -> bool:
        return alias in self.alias_map

    def resolve(self, word: str) -> str | None:
        """Returns the keyword `word` stands for, or None if it is not an alias."""
        return self.alias_map.get(word)

    def report(self) -> str:
        return "\n".join(
            f"{alias:>12} → {keyword}" for alias, keyword in sorted(self.alias_map.items())
        )

    def summary(self) -> dict[str, str]:
        return dict(self.alias_map)

    def _extract_aliases(self, entry: Any) -> list[str]:
        if isinstance(entry, str):
            return [entry]
        if isinstance(entry, (list, tuple, set, frozenset)):
            aliases: list[str] = []
            for item in entry:
                aliases.extend(self._extract_aliases(item))
            return aliases
        raise AliasError(f"Alias must be a string or a group of strings, got {entry!r}")

    @classmethod
    def logo_abbreviations(cls) -> "KeywordAliases":
        """Constructs a table preloaded with `fd`, `bk`, `rt` and `lt`."""
        instance = cls()
        instance.configure(LOGO_ABBREVIATIONS)
        return instance

    @classmethod
    def from_json(cls, path: str) -> "KeywordAliases":
        instance = cls()
        instance.load_from_json(path)
        return instance

    def load_from_json(self, path: str) -> None:
        """
        Loads aliases from a JSON object file and applies them via `configure`.

        Keys are comma-separated alias groups, values are keywords:

            {
                "fd,fw": "forward",
                "rt": "right"
            }

        Raises:
            AliasError: If the file cannot be read or the configuration is invalid.
        """
        try:
            with open(path, encoding="utf-8") as f:
                raw_cfg = json.load(f)
        except (OSError, ValueError) as e:
            raise AliasError(f"Failed to load alias file: {e}") from e

        if not isinstance(raw_cfg, dict):
            raise AliasError("Alias file must contain a JSON object")

        parsed_cfg: dict[Any, str] = {}
        for key, value in raw_cfg.items():
            parsed_cfg[tuple(alias.strip() for alias in key.split(","))] = value
        self.configure(parsed_cfg)

    def configure(self, cfg: dict[Any, Any]) -> None:
        """
        Applies alias groups to the table. Nothing is applied if any entry fails.

        Raises:
            AliasError: If a target is not an aliasable keyword, an alias is not a
                plain word, shadows a keyword or number, or maps to two keywords.
        """
        if not isinstance(cfg, dict):
            raise AliasError("Configuration must be a dict")

        new_map: dict[str, str] = {}
        conflicts: list[str] = []

        for alias_group, keyword in cfg.items():
            if keyword not in ALIASABLE_KEYWORDS:
                raise AliasError(f"Unknown keyword: {keyword}")
            for alias in self._extract_aliases(alias_group):
                if not ALIAS_WORD.fullmatch(alias) or alias.isdigit():
                    raise AliasError(f"Invalid alias word: {alias!r}")
                if alias in token_hashmap:
                    raise AliasError(f"Alias shadows a keyword: {alias}")
                existing = new_map.get(alias, self.alias_map.get(alias))
                if existing is not None and existing != keyword:
                    conflicts.append(
                        f"'{alias}' → conflict between {existing} and {keyword}"
                    )
                else:
                    new_map[alias] = keyword

        if conflicts:
            raise AliasError("Alias collision(s) detected", conflicts)

        self.alias_map.update(new_map)


__all__ = ["AliasError", "KeywordAliases"]
