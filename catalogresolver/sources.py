"""Catalog source validity tracking and legacy property conversion."""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from catalogresolver.cache import Entry, SourceKey
from catalogresolver.projection import Property

PACKAGE_TYPE = "olm.package"
DEFAULT_TTL = timedelta(minutes=5)

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _marshal(obj: Any) -> str:
    text = json.dumps(obj, separators=(",", ":"), ensure_ascii=False)
    return "".join(_HTML_ESCAPES.get(ch, ch) for ch in text)


class SourceInvalidator:
    """Hands out events that are set when a source's snapshot becomes stale.

    An event is set either by ``invalidate`` or after ``ttl`` has passed.
    """

    def __init__(self, ttl: timedelta | float = DEFAULT_TTL) -> None:
        self.ttl = ttl.total_seconds() if isinstance(ttl, timedelta) else float(ttl)
        self._lock = threading.Lock()
        self._events: dict[SourceKey, threading.Event] = {}

    def invalidate(self, key: SourceKey) -> None:
        """Mark the current snapshot of ``key`` as stale."""
        with self._lock:
            event = self._events.pop(key, None)
            if event is not None:
                event.set()

    def valid_event(self, key: SourceKey) -> threading.Event:
        """Return the event that will be set when ``key`` becomes stale."""
        with self._lock:
            event = self._events.get(key)
            if event is not None:
                return event
            event = threading.Event()
            self._events[key] = event
        timer = threading.Timer(self.ttl, self._expire, args=(key, event))
        timer.daemon = True
        timer.start()
        return event

    def _expire(self, key: SourceKey, event: threading.Event) -> None:
        with self._lock:
            # The event may already have been invalidated and replaced.
            if self._events.get(key) is event:
                del self._events[key]
                event.set()


@dataclass
class Dependency:
    """A legacy dependency declaration of a bundle."""

    type: str = ""
    value: str = ""


def ensure_package_property(entry: Entry, name: str, version: str) -> None:
    """Add an ``olm.package`` property to ``entry`` unless it has one."""
    if any(prop.type == PACKAGE_TYPE for prop in entry.properties):
        return
    value = _marshal({"packageName": name, "version": version})
    entry.properties.append(Property(type=PACKAGE_TYPE, value=value))


def _decode_fields(raw: str, fields: tuple[str, ...], what: str) -> dict[str, str]:
    prefix = f"failed to unmarshal legacy '{what}' dependency"
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise ValueError(f"{prefix}: {exc}") from exc
    result = dict.fromkeys(fields, "")
    if data is None:
        return result
    if not isinstance(data, dict):
        raise ValueError(f"{prefix}: value is not an object")
    for key, value in data.items():
        for name in fields:
            if key.casefold() != name.casefold() or value is None:
                continue
            if not isinstance(value, str):
                raise ValueError(f"{prefix}: field {key} is not a string")
            result[name] = value
    return result


def legacy_dependencies_to_properties(dependencies: list[Dependency]) -> list[Property]:
    """Translate legacy dependencies into required-property form.

    Unknown dependency types are ignored. Raises ValueError on malformed values.
    """
    result: list[Property] = []
    for dep in dependencies:
        if dep.type == "olm.gvk":
            gvk = _decode_fields(dep.value, ("group", "version", "kind"), "olm.gvk")
            result.append(Property(type="olm.gvk.required", value=_marshal(gvk)))
        elif dep.type == "olm.package":
            pkg = _decode_fields(dep.value, ("packageName", "version"), "olm.package")
            value = _marshal({"packageName": pkg["packageName"], "versionRange": pkg["version"]})
            result.append(Property(type="olm.package.required", value=value))
        elif dep.type == "olm.label":
            result.append(Property(type="olm.label.required", value=dep.value))
        elif dep.type == "olm.constraint":
            result.append(Property(type="olm.constraint", value=dep.value))
    return result