"""Candidate registry.

Maps a prediction method name to the `Candidate` record attached to it. Methods
are registered explicitly, usually through the `candidate(...)` decorator:

    registry = CandidateRegistry()

    class Predicter:
        @registry.candidate(first_name="Margie", last_name="Young", party=Party.GREEN)
        def predict_president(self) -> None:
            ...
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterator, TypeVar

from election_predicter.candidates.model import Candidate, Party, Sex


logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _same_function(a: Callable[..., Any] | None, b: Callable[..., Any] | None) -> bool:
    if a is None or b is None:
        return False
    return (getattr(a, "__module__", None), getattr(a, "__qualname__", None)) == (
        getattr(b, "__module__", None),
        getattr(b, "__qualname__", None),
    )


@dataclass(frozen=True, slots=True)
class RegisteredCandidate:
    name: str
    candidate: Candidate
    func: Callable[..., Any] | None = None


class CandidateRegistry:
    def __init__(self) -> None:
        self._entries: dict[str, RegisteredCandidate] = {}

    def register(self, name: str, record: Candidate, func: Callable[..., Any] | None = None) -> None:
        """Attach `record` to the method called `name`.

        A name can be registered once. Registering the same function again
        (same module and qualname, e.g. after a module reload) replaces the
        entry; a different function under a taken name, such as a subclass
        override, raises ValueError. Subclasses that redeclare prediction
        methods should use their own `CandidateRegistry`.
        """

        if not isinstance(name, str) or not name:
            raise ValueError("name must be a non-empty string")
        if not isinstance(record, Candidate):
            raise ValueError(f"record for {name!r} must be a Candidate")
        existing = self._entries.get(name)
        if existing is not None and not _same_function(existing.func, func):
            raise ValueError(f"candidate already registered for {name!r}")

        self._entries[name] = RegisteredCandidate(name=name, candidate=record, func=func)
        logger.debug("candidate_registered", extra={"method": name, "candidate": record.display_name})

    def candidate(
        self,
        *,
        party: Party | str,
        first_name: str,
        last_name: str,
        sex: Sex | str = Sex.FEMALE,
    ) -> Callable[[F], F]:
        """Decorator factory: attach a `Candidate` to the decorated function."""

        record = Candidate(party=party, first_name=first_name, last_name=last_name, sex=sex)

        def decorator(func: F) -> F:
            self.register(func.__name__, record, func)
            return func

        return decorator

    def get(self, name: str) -> Candidate | None:
        entry = self._entries.get(name)
        return entry.candidate if entry is not None else None

    def names(self) -> list[str]:
        return sorted(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[RegisteredCandidate]:
        for name in self.names():
            yield self._entries[name]
