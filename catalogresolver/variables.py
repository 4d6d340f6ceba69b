"""Solver variables that stand for bundles, subscriptions and uniqueness rules."""

from __future__ import annotations

from dataclasses import dataclass, field

from catalogresolver import solver
from catalogresolver.cache import Entry, SourceKey
from catalogresolver.solver import Constraint, Identifier

DEPRECATED_TYPE = "olm.deprecated"


@dataclass(frozen=True)
class PrettyConstraint(Constraint):
    """A constraint that describes itself with a fixed message."""

    constraint: Constraint
    msg: str

    def describe(self, subject: Identifier) -> str:
        return self.msg

    def order(self) -> list[Identifier]:
        return self.constraint.order()

    def anchor(self) -> bool:
        return self.constraint.anchor()


def pretty_constraint(constraint: Constraint, msg: str) -> Constraint:
    """Wrap ``constraint`` so that it is described by ``msg``."""
    return PrettyConstraint(constraint, msg)


@dataclass
class BundleVariable:
    """A variable standing for one bundle in one channel of one catalog."""

    identifier: Identifier
    constraints: list[Constraint] = field(default_factory=list)
    replaces: str = ""

    def make_prohibited(self) -> None:
        """Forbid this bundle from appearing in any solution."""
        self.constraints.append(solver.prohibited())

    def add_conflict(self, identifier: Identifier) -> None:
        """Forbid this bundle from appearing together with ``identifier``."""
        self.constraints.append(solver.conflict(identifier))

    def add_constraint(self, constraint: Constraint) -> None:
        """Attach another constraint to this bundle."""
        self.constraints.append(constraint)

    def bundle_source_info(self) -> tuple[str, str, SourceKey]:
        """Return (csv name, channel, catalog key) parsed from the identifier.

        Raises ValueError if the identifier does not have four parts.
        """
        parts = str(self.identifier).split("/")
        if len(parts) != 4:
            raise ValueError(f"unable to parse identifier {self.identifier} for source info")
        catalog_name, catalog_namespace, channel, csv_name = parts
        return csv_name, channel, SourceKey(name=catalog_name, namespace=catalog_namespace)


@dataclass
class GenericVariable:
    """A variable with an identifier and a list of constraints."""

    identifier: Identifier
    constraints: list[Constraint] = field(default_factory=list)


def _bundle_id(bundle: str, channel: str, catalog: SourceKey) -> Identifier:
    return f"{catalog}/{channel}/{bundle}"


def new_bundle_variable_from_operator(entry: Entry) -> BundleVariable:
    """Build the variable for a catalog entry.

    Raises ValueError if the entry has no source information.
    """
    if entry.source_info is None:
        raise ValueError(f"unable to resolve the source of bundle {entry.name}")
    identifier = _bundle_id(entry.name, entry.channel(), entry.source_info.catalog)
    constraints: list[Constraint] = []
    if entry.source_info.catalog.virtual() and entry.source_info.subscription is None:
        # Freestanding installed CSVs must appear in any solution.
        constraints.append(
            pretty_constraint(
                solver.mandatory(),
                f"clusterserviceversion {entry.name} exists and is not referenced by a subscription",
            )
        )
    if any(prop.type == DEPRECATED_TYPE for prop in entry.properties):
        constraints.append(
            pretty_constraint(solver.prohibited(), f"bundle {identifier} is deprecated")
        )
    return BundleVariable(identifier=identifier, constraints=constraints)


def new_invalid_subscription_variable(name: str, reason: str) -> GenericVariable:
    """A subscription that must exist but cannot be satisfied."""
    return GenericVariable(
        identifier=f"subscription:{name}",
        constraints=[
            pretty_constraint(solver.mandatory(), f"subscription {name} exists"),
            pretty_constraint(solver.prohibited(), reason),
        ],
    )


def new_subscription_variable(name: str, dependencies: list[Identifier]) -> GenericVariable:
    """A subscription that requires at least one of ``dependencies``."""
    result = GenericVariable(
        identifier=f"subscription:{name}",
        constraints=[pretty_constraint(solver.mandatory(), f"subscription {name} exists")],
    )
    if not dependencies:
        result.constraints.append(
            pretty_constraint(
                solver.dependency(),
                f"no operators found matching the criteria of subscription {name}",
            )
        )
        return result

    names = [str(each) for each in dependencies]
    if len(names) == 1:
        requirement = names[0]
    else:
        requirement = f"at least one of {', '.join(names[:-1])} or {names[-1]}"
    result.constraints.append(
        pretty_constraint(
            solver.dependency(*dependencies),
            f"subscription {name} requires {requirement}",
        )
    )
    return result


def _uniqueness_variable(
    identifier: Identifier, providers: list[Identifier], mandatory_msg: str, suffix: str
) -> GenericVariable:
    result = GenericVariable(identifier=identifier)
    if len(providers) <= 1:
        # The constraints are pointless without more than one provider.
        return result
    result.constraints.append(pretty_constraint(solver.mandatory(), mandatory_msg))
    names = [str(p) for p in providers]
    msg = f"{', '.join(names[:-1])} and {names[-1]} {suffix}"
    result.constraints.append(pretty_constraint(solver.at_most(1, *providers), msg))
    return result


def new_single_api_provider_variable(
    group: str, version: str, kind: str, providers: list[Identifier]
) -> GenericVariable:
    """Allow at most one of ``providers`` to provide the given API."""
    gvk = f"{kind} ({group}/{version})"
    return _uniqueness_variable(
        gvk, providers, f"there can be only one provider of {gvk}", f"provide {gvk}"
    )


def new_single_package_instance_variable(
    pkg: str, providers: list[Identifier]
) -> GenericVariable:
    """Allow at most one of ``providers`` from package ``pkg``."""
    return _uniqueness_variable(
        pkg,
        providers,
        f"there can be only one operator from package {pkg}",
        f"originate from package {pkg}",
    )