"""CheckerConfig: immutable names and knobs shared by every checker component.

CheckerConfig is a frozen dataclass holding the reserved attribute and class
names written into the editable, the composite-node ("fake object") markers,
and the quick-fix loading parameters.  Validation happens once, in
``__post_init__``, so components can trust the values they receive.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["CheckerConfig"]


@dataclass(frozen=True, slots=True)
class CheckerConfig:
    """Immutable configuration for tagging, resolution and quick-fix loading.

    Attributes:
        id_attribute: Short Identifier attribute name used on live nodes.
        data_prefix: Prefix producing the fully qualified attribute name.
        error_class: Class marking an element as having an accessibility issue.
        focused_class: Class marking the element of the focused issue.
        real_node_type_attribute: Attribute whose presence flags a composite
            (fake) node.
        real_element_attribute: Attribute carrying the composite node's
            URI-encoded payload.
        disable_filter_strip: When True, the Identifier attribute is kept in
            serialized output.  Debug only.  Default False.
        resource_template: Format string mapping a fix type name to the
            resource locator handed to the loader.  Must contain ``{name}``.
        load_timeout: Seconds an in-flight quick-fix load counts as live.
            ``None`` (default) means a load never expires.
    """

    id_attribute: str = "quail-id"
    data_prefix: str = "data-"
    error_class: str = "cke_a11ychecker_error"
    focused_class: str = "cke_a11y_focused"
    real_node_type_attribute: str = "data-cke-real-node-type"
    real_element_attribute: str = "data-cke-realelement"
    disable_filter_strip: bool = False
    resource_template: str = "{name}.py"
    load_timeout: float | None = None

    def __post_init__(self) -> None:
        for field_name in (
            "id_attribute",
            "error_class",
            "focused_class",
            "real_node_type_attribute",
            "real_element_attribute",
        ):
            value = getattr(self, field_name)
            if not value or any(ch.isspace() for ch in value):
                msg = f"{field_name} must be a non-empty name without whitespace, got {value!r}"
                raise ValueError(msg)
        if any(ch.isspace() for ch in self.data_prefix):
            msg = f"data_prefix must not contain whitespace, got {self.data_prefix!r}"
            raise ValueError(msg)
        if "{name}" not in self.resource_template:
            msg = f"resource_template must contain '{{name}}', got {self.resource_template!r}"
            raise ValueError(msg)
        if self.load_timeout is not None and self.load_timeout <= 0.0:
            msg = f"load_timeout must be > 0 or None, got {self.load_timeout}"
            raise ValueError(msg)

    @property
    def id_attribute_full(self) -> str:
        """Fully qualified Identifier attribute name, e.g. ``data-quail-id``."""
        return f"{self.data_prefix}{self.id_attribute}"
