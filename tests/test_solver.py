from dataclasses import dataclass

import pytest

from catalogresolver.solver import (
    AppliedConstraint,
    Constraint,
    at_most,
    conflict,
    dependency,
    mandatory,
    prohibited,
)


@dataclass
class _Var:
    identifier: str


def test_constraint_is_abstract():
    with pytest.raises(TypeError):
        Constraint()


def test_mandatory_description_and_anchor():
    c = mandatory()
    assert c.describe("a") == "a is mandatory"
    assert c.anchor() is True
    assert c.order() == []


def test_prohibited_description():
    c = prohibited()
    assert c.describe("a").endswith(" is prohibited")
    assert c.describe("a").startswith("a")
    assert c.anchor() is False


def test_dependency_without_candidates():
    message = dependency().describe("a")
    assert message.startswith("a has a dependency without any candidates")


def test_dependency_lists_candidates_in_order():
    c = dependency("x", "y", "z")
    assert c.order() == ["x", "y", "z"]
    assert c.describe("a").endswith("x, y, z")
    assert c.anchor() is False


def test_dependency_order_is_a_copy():
    c = dependency("x", "y")
    c.order().append("z")
    assert c.order() == ["x", "y"]


def test_conflict_description():
    message = conflict("b").describe("a")
    assert message.startswith("a conflicts with")
    assert message.endswith("b")
    assert conflict("b").order() == []


def test_at_most_description():
    message = at_most(1, "x", "y").describe("g")
    assert "permits at most 1 of" in message
    assert message.endswith("x, y")
    assert at_most(1, "x").anchor() is False


def test_constraints_compare_by_value():
    assert dependency("x", "y") == dependency("x", "y")
    assert not dependency("x", "y") == dependency("y", "x")
    assert mandatory() == mandatory()
    assert not mandatory() == prohibited()


def test_applied_constraint_string():
    applied = AppliedConstraint(_Var("a"), mandatory())
    assert str(applied) == mandatory().describe("a")
    assert str(AppliedConstraint(_Var("b"), conflict("c"))) == conflict("c").describe("b")