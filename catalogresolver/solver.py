"""Constraints that limit which variables may appear in a solution."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

Identifier = str


class Constraint(ABC):
    """Limits the circumstances under which a variable can appear in a solution."""

    @abstractmethod
    def describe(self, subject: Identifier) -> str:
        """A human-readable message for this constraint applied to ``subject``."""

    def order(self) -> list[Identifier]:
        """Identifiers in order of preference; empty for most constraints."""
        return []

    def anchor(self) -> bool:
        """True if the constrained variable must be part of the search root."""
        return False


@dataclass(frozen=True)
class _Mandatory(Constraint):
    def describe(self, subject: Identifier) -> str:
        return f"{subject} is mandatory"

    def anchor(self) -> bool:
        return True


@dataclass(frozen=True)
class _Prohibited(Constraint):
    def describe(self, subject: Identifier) -> str:
        return f"{subject} is prohibited"


@dataclass(frozen=True)
class _Dependency(Constraint):
    ids: tuple[Identifier, ...] = ()

    def describe(self, subject: Identifier) -> str:
        if not self.ids:
            return f"{subject} has a dependency without any candidates to satisfy it"
        return f"{subject} requires at least one of {', '.join(self.ids)}"

    def order(self) -> list[Identifier]:
        return list(self.ids)


@dataclass(frozen=True)
class _Conflict(Constraint):
    other: Identifier

    def describe(self, subject: Identifier) -> str:
        return f"{subject} conflicts with {self.other}"


@dataclass(frozen=True)
class _AtMost(Constraint):
    n: int
    ids: tuple[Identifier, ...] = ()

    def describe(self, subject: Identifier) -> str:
        return f"{subject} permits at most {self.n} of {', '.join(self.ids)}"


@dataclass(frozen=True)
class AppliedConstraint:
    """A constraint together with the variable it applies to.

    ``variable`` is any object with an ``identifier`` attribute.
    """

    variable: Any
    constraint: Constraint

    def __str__(self) -> str:
        return self.constraint.describe(self.variable.identifier)


def mandatory() -> Constraint:
    """Permit only solutions that contain the constrained variable."""
    return _Mandatory()


def prohibited() -> Constraint:
    """Reject any solution that contains the constrained variable."""
    return _Prohibited()


def dependency(*ids: Identifier) -> Constraint:
    """Require at least one of ``ids`` when the constrained variable is present.

    Earlier identifiers are preferred over later ones.
    """
    return _Dependency(tuple(ids))


def conflict(identifier: Identifier) -> Constraint:
    """Forbid the constrained variable and ``identifier`` appearing together."""
    return _Conflict(identifier)


def at_most(n: int, *ids: Identifier) -> Constraint:
    """Forbid solutions that contain more than ``n`` of ``ids``."""
    return _AtMost(n, tuple(ids))