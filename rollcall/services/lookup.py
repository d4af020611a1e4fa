"""In-memory fuzzy index over student display names.

The index is a disposable projection of the roster: it is never persisted and
never patched, only rebuilt from the current set of students.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from difflib import SequenceMatcher

from rollcall.core.errors import NoStudents

SUBSTRING_BONUS = 0.25


@dataclass(frozen=True)
class StudentRef:
    id: int
    name: str
    username: str = ""


@dataclass(frozen=True)
class Match:
    student: StudentRef
    score: float


def _normalize_name(value: str) -> str:
    return "".join(ch.lower() for ch in value if ch.isalnum())


def _tokenize_name(value: str) -> list[str]:
    sanitized = value.replace("-", " ")
    return [_normalize_name(token) for token in sanitized.split() if _normalize_name(token)]


@dataclass(frozen=True)
class _Entry:
    student: StudentRef
    normalized: str
    tokens: tuple[str, ...]


class LookupIndex:
    def __init__(self, entries: list[_Entry], version: object = None) -> None:
        self._entries = sorted(entries, key=lambda entry: entry.student.id)
        self.version = version

    @classmethod
    def build(cls, students: Iterable[StudentRef], version: object = None) -> LookupIndex:
        return cls(
            [
                _Entry(student=student, normalized=_normalize_name(student.name), tokens=tuple(_tokenize_name(student.name)))
                for student in students
            ],
            version=version,
        )

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def students(self) -> list[StudentRef]:
        return [entry.student for entry in self._entries]

    @staticmethod
    def _score(query: str, entry: _Entry) -> float:
        normalized_query = _normalize_name(query)
        if not normalized_query or not entry.normalized:
            return 0.0

        ratio = SequenceMatcher(None, normalized_query, entry.normalized).ratio()

        for query_token in _tokenize_name(query):
            for token in entry.tokens:
                ratio = max(ratio, SequenceMatcher(None, query_token, token).ratio())

        if normalized_query in entry.normalized:
            ratio = min(1.0, ratio + SUBSTRING_BONUS)
        return ratio

    def search(self, query: str, limit: int | None = None) -> list[Match]:
        """Rank every student against ``query``, best first, ties by lowest id."""
        if not self._entries:
            raise NoStudents()
        ranked = sorted(
            (Match(student=entry.student, score=self._score(query, entry)) for entry in self._entries),
            key=lambda match: (-match.score, match.student.id),
        )
        return ranked if limit is None else ranked[:limit]

    def resolve(self, query: str) -> StudentRef:
        return self.search(query, limit=1)[0].student
