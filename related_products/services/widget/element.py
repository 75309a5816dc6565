"""In-process model of the host element the widget is attached to."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

PERFORMED_ATTRIBUTE = "data-recommendations-performed"
ERROR_ATTRIBUTE = "data-error"
CLASS_ATTRIBUTE = "class"
HIDDEN_CLASS = "hidden"
HAS_RECOMMENDATIONS_ATTRIBUTE = "data-has-recommendations"


@dataclass(frozen=True)
class AttributeMutation:
    """A single attribute change delivered to observers."""

    target: WidgetElement
    attribute_name: str
    old_value: str | None


MutationCallback = Callable[[list[AttributeMutation]], None]


class WidgetElement:
    """Attributes, classes and inner markup of one widget instance.

    Attribute writes notify the registered observers synchronously, the same
    way a mutation observer would see them after the current task.
    """

    def __init__(
        self,
        element_id: str | None = None,
        attributes: dict[str, str] | None = None,
        inner_html: str = "",
    ) -> None:
        self._attributes: dict[str, str] = dict(attributes or {})
        self._classes: list[str] = self._attributes.pop(CLASS_ATTRIBUTE, "").split()
        if element_id is not None:
            self._attributes["id"] = element_id
        self.inner_html = inner_html
        self._observers: list[MutationCallback] = []

    @property
    def id(self) -> str:
        return self._attributes.get("id", "")

    def get_attribute(self, name: str) -> str | None:
        if name == CLASS_ATTRIBUTE:
            return " ".join(self._classes) if self._classes else None
        return self._attributes.get(name)

    def set_attribute(self, name: str, value: str) -> None:
        if name == CLASS_ATTRIBUTE:
            old_value = self.get_attribute(CLASS_ATTRIBUTE)
            self._classes = value.split()
            self._notify(name, old_value)
            return
        old_value = self._attributes.get(name)
        self._attributes[name] = value
        self._notify(name, old_value)

    def remove_attribute(self, name: str) -> None:
        if name == CLASS_ATTRIBUTE:
            if self._classes:
                self.set_attribute(CLASS_ATTRIBUTE, "")
            return
        if name not in self._attributes:
            return
        old_value = self._attributes.pop(name)
        self._notify(name, old_value)

    def data(self, key: str) -> str | None:
        """Read a ``data-*`` attribute by its short name."""
        return self._attributes.get(f"data-{key}")

    @property
    def attributes(self) -> dict[str, str]:
        snapshot = dict(self._attributes)
        if self._classes:
            snapshot[CLASS_ATTRIBUTE] = " ".join(self._classes)
        return snapshot

    @property
    def classes(self) -> tuple[str, ...]:
        return tuple(self._classes)

    def has_class(self, name: str) -> bool:
        return name in self._classes

    def add_class(self, name: str) -> None:
        if name in self._classes:
            return
        self.set_attribute(CLASS_ATTRIBUTE, " ".join([*self._classes, name]))

    def remove_class(self, name: str) -> None:
        if name not in self._classes:
            return
        self.set_attribute(
            CLASS_ATTRIBUTE, " ".join(cls for cls in self._classes if cls != name)
        )

    def observe_attributes(self, callback: MutationCallback) -> Callable[[], None]:
        """Register an attribute observer and return its disconnect function."""

        self._observers.append(callback)

        def disconnect() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return disconnect

    def _notify(self, name: str, old_value: str | None) -> None:
        mutation = AttributeMutation(self, name, old_value)
        for callback in list(self._observers):
            callback([mutation])
