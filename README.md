# catalogresolver

Building blocks for resolving operators out of package catalogs. The package
provides:

- catalog and package manifest types
- sets of provided and required APIs
- the JSON properties annotation
- resolver constraints
- the variables that a dependency resolver works on

It has no dependencies outside the standard library.

## Installation

```
pip install catalogresolver
```

## Modules

### `catalogresolver.registry`

- `CatalogKey(name, namespace)` is a frozen dataclass. `str(key)` gives
  `name/namespace`. `empty()` is true when both fields are blank. `virtual()`
  is true for the `@existing` catalog of a namespace.
- `new_virtual_catalog_key(namespace)` builds that virtual key.
- `ResourceKey(name, kind, namespace)` identifies a resource.
- `PackageManifest(package_name, channels, default_channel_name)` describes a
  package. Its `default_channel()` returns one of:
  - the declared default channel
  - the only channel, when there is just one
  - `""` otherwise
- `PackageChannel(name, current_csv_name)` describes a channel.
  `is_default_channel(manifest)` is true when the channel is the manifest's
  default or the manifest's only channel.

### `catalogresolver.polling`

`sync_registry_update_interval(polling_interval, latest_poll, creation_timestamp, now)`
returns a `timedelta` to wait before a polled catalog is reconciled again.

- If the interval is at most `DEFAULT_RESYNC_PERIOD` (15 minutes), the
  interval itself is returned.
- Otherwise the function returns the smaller of two durations: the time left
  until the next poll, and the default period.
- When `latest_poll` is `None`, the time left is counted from
  `creation_timestamp`.

### `catalogresolver.projection`

- `Property(type, value)` holds a property whose `value` is raw JSON text.
- `properties_annotation_from_property_list(props)` produces the compact
  annotation document, such as `{"properties":[{"type":...,"value":...}]}`.
  - An empty list gives `{}`.
  - A value that is not valid JSON raises `ValueError`.
- `property_list_from_properties_annotation(raw)` parses an annotation back
  into `Property` objects. Each value keeps its raw JSON text. Malformed input
  raises `ValueError`.
- `PROPERTIES_ANNOTATION_KEY` is `"operatorframework.io/properties"`.

### `catalogresolver.cache`

- `APIKey(group, version, kind, plural)` is a frozen dataclass.
- `APISet` is a mutable set of `APIKey` values.
  - `str()` gives the sorted, comma-joined `Kind.version.group` strings.
  - `pop_api_key()` removes and returns a key, or returns `None` when the set
    is empty.
  - `union(*sets)` returns the keys found in this set or in any of `sets`.
  - `intersection(*sets)` returns the keys of this set that appear in at
    least one of `sets`.
  - `difference(other)` returns the keys of this set that are not in `other`.
  - `is_subset(other)` tells whether every key of this set is in `other`.
  - `strip_plural()` returns a copy with the plural cleared from every key.
- `gvk_string_to_provided_api_set(gvks)` parses a comma-separated list of
  `Kind.version.group` strings.
  - Spaces are removed first.
  - Entries with fewer than two dots are skipped.
- `api_key_to_gvk_string(key)` renders a key as `Kind.version.group`.
- `api_key_to_gvk_hash(key)` returns the 64-bit FNV-1a hash of that string in
  hex.
- `OperatorSourceInfo` records where an operator comes from. `str()` gives
  `package/channel in catalog/namespace`.
- `Entry` is an operator bundle as the resolver sees it. `package()` and
  `channel()` return `""` when there is no source info.

### `catalogresolver.solver`

- Constraints are built by these functions:
  - `mandatory()`
  - `prohibited()`
  - `dependency(*ids)` — earlier ids are preferred
  - `conflict(identifier)`
  - `at_most(n, *ids)`
- Each `Constraint` has three methods:
  - `describe(subject)` gives a readable message.
  - `order()` returns the preferred identifiers. It is non-empty only for
    dependencies.
  - `anchor()` is true only for `mandatory()`.
- `AppliedConstraint(variable, constraint)` pairs a constraint with a
  variable. Its `str()` describes the constraint against
  `variable.identifier`.

### `catalogresolver.variables`

- `BundleVariable` stands for one bundle. It has these methods:
  - `make_prohibited()`
  - `add_conflict(identifier)`
  - `add_constraint(constraint)`
  - `bundle_source_info()`, which splits a `catalog/namespace/channel/csv`
    identifier into `(csv_name, channel, catalog_key)` and raises
    `ValueError` otherwise.
- `GenericVariable(identifier, constraints)` is a plain variable.
- `PrettyConstraint` and `pretty_constraint(constraint, msg)` wrap a
  constraint so that it is described by a fixed message.
- `new_bundle_variable_from_operator(entry)` builds the variable for an entry.
  - A freestanding CSV in a virtual catalog is made mandatory.
  - An `olm.deprecated` bundle is prohibited.
  - An entry without source info raises `ValueError`.
- Subscription variables:
  - `new_subscription_variable(name, dependencies)`
  - `new_invalid_subscription_variable(name, reason)`
- Uniqueness variables allow at most one of several providers:
  - `new_single_api_provider_variable(group, version, kind, providers)`
  - `new_single_package_instance_variable(pkg, providers)`

### `catalogresolver.sources`

- `SourceInvalidator(ttl)` tracks when a source's snapshot goes stale. The
  default `ttl` is five minutes.
  - `valid_event(key)` returns a `threading.Event`. The event is set when
    `invalidate(key)` is called or when the ttl runs out, whichever comes
    first.
- `ensure_package_property(entry, name, version)` adds an `olm.package`
  property unless the entry already has one.
- `Dependency(type, value)` is a legacy dependency.
- `legacy_dependencies_to_properties(dependencies)` translates legacy
  dependencies into properties:

  | Dependency type  | Property type          |
  |------------------|------------------------|
  | `olm.gvk`        | `olm.gvk.required`     |
  | `olm.package`    | `olm.package.required` |
  | `olm.label`      | `olm.label.required`   |
  | `olm.constraint` | `olm.constraint`       |

  Other types are ignored. Malformed values raise `ValueError`.

## Example

```python
from catalogresolver.cache import APIKey, APISet, gvk_string_to_provided_api_set

provided = gvk_string_to_provided_api_set(
    "Goose.v1alpha1.birds.com,Moose.v1alpha1.mammals.com"
)
required = APISet({APIKey(group="birds.com", version="v1alpha1", kind="Goose")})

print(required.is_subset(provided))  # True
print(str(provided))  # Goose.v1alpha1.birds.com,Moose.v1alpha1.mammals.com
```

```python
from catalogresolver.solver import dependency

c = dependency("x", "y")
print(c.describe("a"))  # a requires at least one of x, y
```

## What it does not do

This package models catalogs, constraints and variables. It does not:

- search for solutions to the constraints
- talk to catalog registries or fetch bundle snapshots
- turn resolved bundles into install steps
- run as a service or command

## Running the tests

```
pip install -e ".[test]"
pytest
```