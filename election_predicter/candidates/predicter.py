"""Election predictions driven by candidate metadata.

Each prediction method is registered with a `Candidate` and must be named
`<prefix><office>` (e.g. `predict_secretary`). When invoked, it hands its own
name to `extract_candidate()`, which derives the office from the name, looks
the candidate up in the registry, and prints one line:

    predict_secretary: The secretary is Barney Fitzgerald (Male) of the Libertarian party!

`predict_results()` runs every registered zero-argument, no-return method in
name order. A method that breaks the naming convention fails on its own; the
rest still run.
"""

from __future__ import annotations

import inspect
import logging
import sys
from dataclasses import dataclass
from typing import Callable, Protocol, TextIO

from election_predicter.candidates.model import Party, Sex
from election_predicter.candidates.registry import CandidateRegistry, RegisteredCandidate
from election_predicter.core.errors import NamingConventionError, PredicterError
from election_predicter.observability.context import bind_run, new_run_id, set_method


logger = logging.getLogger(__name__)

DEFAULT_METHOD_PREFIX = "predict_"

candidates = CandidateRegistry()


class ElectionMethod(Protocol):
    """A prediction method: takes no arguments, returns nothing."""

    __name__: str

    def __call__(self) -> None: ...


@dataclass(frozen=True, slots=True)
class PredictionResult:
    name: str
    ok: bool
    line: str
    error: str | None = None


def _returns_nothing(sig: inspect.Signature) -> bool:
    ann = sig.return_annotation
    return ann is inspect.Signature.empty or ann is None or ann == "None"


class ElectionPredicter:
    def __init__(
        self,
        *,
        registry: CandidateRegistry | None = None,
        method_prefix: str = DEFAULT_METHOD_PREFIX,
        out: TextIO | None = None,
    ) -> None:
        if not method_prefix:
            raise ValueError("method_prefix must be a non-empty string")
        self._registry = registry if registry is not None else candidates
        self._prefix = method_prefix
        self._out = out
        self._last_line: str | None = None

    @property
    def registry(self) -> CandidateRegistry:
        return self._registry

    @property
    def method_prefix(self) -> str:
        return self._prefix

    def _write(self, line: str) -> None:
        out = self._out if self._out is not None else sys.stdout
        out.write(line + "\n")

    @candidates.candidate(
        first_name="Barney", last_name="Fitzgerald", sex=Sex.MALE, party=Party.LIBERTARIAN
    )
    def predict_secretary(self) -> None:
        self.extract_candidate("predict_secretary")

    @candidates.candidate(first_name="Margie", last_name="Young", party=Party.GREEN)
    def predict_president(self) -> None:
        self.extract_candidate("predict_president")

    # Deliberately misnamed: always fails the naming check.
    @candidates.candidate(
        first_name="Bartholemew", last_name="Bad", party=Party.REPUBLICAN, sex=Sex.MALE
    )
    def elect_treasurer(self) -> None:
        self.extract_candidate("elect_treasurer")

    def office_for(self, method_name: str) -> str:
        """Return the office encoded in `method_name`.

        Raises:
            NamingConventionError: If the name does not start with the prefix.
        """

        if not method_name.startswith(self._prefix):
            raise NamingConventionError(
                f"Method name {method_name} must start with '{self._prefix}'!",
                method_name=method_name,
            )
        return method_name[len(self._prefix):].lower()

    def extract_candidate(self, method_name: str) -> str:
        """Look up the candidate for `method_name` and print the prediction line.

        Returns:
            The printed line (without the trailing newline).

        Raises:
            NamingConventionError: If the name lacks the prefix or has no
                registered candidate.
        """

        office = self.office_for(method_name)

        record = self._registry.get(method_name)
        if record is None:
            raise NamingConventionError(
                f"Method {method_name} does not have a registered candidate.",
                method_name=method_name,
            )

        line = record.describe(method_name, office)
        self._write(line)
        self._last_line = line
        return line

    def _bind(self, entry: RegisteredCandidate) -> Callable[..., object] | None:
        bound = getattr(self, entry.name, None)
        if bound is None and entry.func is not None:
            bound = entry.func
        return bound if callable(bound) else None

    def annotated_methods(self) -> list[ElectionMethod]:
        """Registered zero-argument, no-return methods, sorted by name."""

        methods: list[tuple[str, ElectionMethod]] = []
        for entry in self._registry:
            bound = self._bind(entry)
            if bound is None:
                logger.debug("method_not_found", extra={"method": entry.name})
                continue

            try:
                sig = inspect.signature(bound)
            except (TypeError, ValueError):
                continue

            if sig.parameters or not _returns_nothing(sig):
                logger.debug("method_skipped_signature", extra={"method": entry.name})
                continue

            methods.append((entry.name, bound))  # type: ignore[arg-type]

        methods.sort(key=lambda item: item[0])
        return [m for _, m in methods]

    def predict_result(self, method: ElectionMethod) -> PredictionResult:
        """Invoke one prediction method, containing any failure."""

        name = getattr(method, "__name__", repr(method))
        set_method(name)
        self._last_line = None
        try:
            method()
            line = self._last_line or ""
            logger.info("prediction_ok", extra={"line": line})
            return PredictionResult(name=name, ok=True, line=line)
        except PredicterError as e:
            line = f"{name}: {e}"
            self._write(line)
            logger.warning("prediction_failed", extra={"error": str(e), "error_type": type(e).__name__})
            return PredictionResult(name=name, ok=False, line=line, error=str(e))
        except Exception as e:  # noqa: BLE001
            line = f"{name}: {type(e).__name__}: {e}"
            self._write(line)
            logger.exception("prediction_error")
            return PredictionResult(name=name, ok=False, line=line, error=str(e))
        finally:
            set_method(None)

    def predict_results(self) -> list[PredictionResult]:
        """Run every annotated method in name order."""

        bind_run(new_run_id())
        methods = self.annotated_methods()
        logger.info("predictions_started", extra={"methods": [m.__name__ for m in methods]})

        results = [self.predict_result(m) for m in methods]

        logger.info(
            "predictions_finished",
            extra={"ok": sum(r.ok for r in results), "failed": sum(not r.ok for r in results)},
        )
        return results
