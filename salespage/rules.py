"""Ordered pattern rules used by the field extractors.

A field is described by a tuple of rules. Single-value fields take the
first rule that matches anything; list fields accumulate matches across
all rules in order. Keeping the rules as data makes their precedence
explicit and lets tests inspect it.
"""

import html
import re
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional, Pattern, Union

__all__ = ["PatternRule", "first_match", "collect_matches", "clean_text"]


def clean_text(raw: str) -> str:
    """Unescape HTML entities and trim surrounding whitespace."""
    return html.unescape(raw).strip()


@dataclass(frozen=True)
class PatternRule:
    """A named regex that yields one group of each match.

    ``group=0`` returns the whole matched token, any other value returns
    that capture group. Matches that are blank after cleaning are skipped.
    """

    name: str
    pattern: Pattern[str]
    group: Union[int, str] = 1

    @classmethod
    def compile(
        cls,
        name: str,
        regex: str,
        group: Union[int, str] = 1,
        flags: int = re.IGNORECASE,
    ) -> "PatternRule":
        return cls(name=name, pattern=re.compile(regex, flags), group=group)

    def try_match(self, text: str) -> Optional[str]:
        """Return the first non-blank match in ``text`` or None."""
        for value in self.find_all(text):
            return value
        return None

    def find_all(self, text: str) -> Iterator[str]:
        """Yield every non-blank match in document order."""
        for match in self.pattern.finditer(text):
            raw = match.group(self.group)
            if not raw:
                continue
            value = clean_text(raw)
            if value:
                yield value


def first_match(rules: Iterable[PatternRule], text: str) -> Optional[str]:
    """Evaluate rules in order; the first one that matches wins."""
    for rule in rules:
        value = rule.try_match(text)
        if value is not None:
            return value
    return None


def collect_matches(
    rules: Iterable[PatternRule],
    text: str,
    limit: int,
    accept: Callable[[str], bool],
) -> List[str]:
    """Accumulate accepted matches from every rule, in order, up to ``limit``.

    Duplicates are kept as found.
    """
    found: List[str] = []
    for rule in rules:
        for value in rule.find_all(text):
            if len(found) >= limit:
                return found
            if accept(value):
                found.append(value)
    return found
