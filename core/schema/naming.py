# ============================================================================
# NAME NORMALIZER
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core - Identifier casing and depluralization
# PURPOSE: Turn snake_case table/column names into class and attribute names
# CREATED: 14 OCT 2026
# EXPORTS: NameNormalizer
# ============================================================================
"""
Name Normalizer.

Depluralization rules, applied per underscore-separated segment, first
match wins:

    override table     -> replacement     (case-insensitive)
    "-ies" => "-y"     -- ontologies
    "-hes" => "-h"     -- swatches
    "-oes" => "-o"     -- potatoes
    "-s"   => ""       -- flowers (but not "-ss")

These are fixed lexical rules. Irregular plurals (people, data, ...) go in
the override table.

Usage:
    normalizer = NameNormalizer({"people": "person"})
    normalizer.singular("order_items")   # "OrderItem"
    normalizer.plural("order_items")     # "OrderItems"
"""

import keyword
import re
from types import MappingProxyType
from typing import Dict, Mapping, Optional


SEPARATOR = "_"


def capitalize(segment: str) -> str:
    """Upper-case the first character, keep the rest verbatim."""
    return segment[:1].upper() + segment[1:]


class NameNormalizer:
    """Builds identifiers from catalog names using an explicit override map."""

    _IES = re.compile(r"ies$")
    _HES_OES = re.compile(r"([ho])es$")
    _TRAILING_S = re.compile(r"([^s])s$")

    def __init__(self, overrides: Optional[Mapping[str, str]] = None):
        """
        Args:
            overrides: plural -> singular pairs; keys and values are lower-cased
        """
        words: Dict[str, str] = {}
        for plural, single in (overrides or {}).items():
            words[plural.lower()] = single.lower()
        self._overrides = MappingProxyType(words)

    @property
    def overrides(self) -> Mapping[str, str]:
        return self._overrides

    def depluralize(self, segment: str) -> str:
        word = segment.lower()
        if word in self._overrides:
            return self._overrides[word]
        if self._IES.search(word):
            return self._IES.sub("y", word)
        if self._HES_OES.search(word):
            return self._HES_OES.sub(r"\1", word)
        if self._TRAILING_S.search(word):
            return self._TRAILING_S.sub(r"\1", word)
        return word

    def singular(self, name: str) -> str:
        """order_items -> OrderItem"""
        return "".join(capitalize(self.depluralize(s)) for s in name.split(SEPARATOR))

    def plural(self, name: str) -> str:
        """order_items -> OrderItems"""
        return "".join(capitalize(s) for s in name.split(SEPARATOR))

    @staticmethod
    def attribute(name: str) -> str:
        """Column name -> valid Python attribute name."""
        attr = re.sub(r"\W", "_", name.lower())
        if not attr or attr[0].isdigit():
            attr = "_" + attr
        if keyword.iskeyword(attr):
            attr += "_"
        return attr


__all__ = ["NameNormalizer", "capitalize"]
