"""
node.py
-------

Defines the base class shared by all scene primitives and the child-list
behaviour shared by containers (Canvas, Group).

A node owns exactly one SVG element. Attribute writes go through `set`, which
records the value and mirrors it onto the element immediately. Geometry state
lives in typed fields on each primitive; `update` converts it to attributes
via `geometry_attributes` and pushes them to the element.
"""

from __future__ import annotations

__all__ = ["GraphicNode", "NodeContainer", "UpdateCallback", "LINE_DEFAULTS", "FILL_DEFAULTS"]

import math
import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, Iterator, Mapping, Optional, Tuple
from xml.etree.ElementTree import Element

from .config import DEFAULT_CONFIG, SceneConfig
from .errors import SceneError
from .logging_utils import LOGGER_NAME
from .surface import AttributeValue, format_value, make_element

UpdateCallback = Callable[["GraphicNode", float], None]

# =============================================================================
# Style presets
# =============================================================================
LINE_DEFAULTS: Dict[str, AttributeValue] = {
    "fill": "none",
    "stroke-width": "10",
    "stroke": "black",
    "stroke-linecap": "round",
}
FILL_DEFAULTS: Dict[str, AttributeValue] = {
    "fill": "black",
    "stroke": "none",
}


class GraphicNode(ABC):
    """
    Abstract base class for all drawable scene primitives (arc, line, path, etc.).

    Attributes:
        element: The owned SVG element.
        attributes: Last value written for each attribute name.
        parent: Container the node is attached to, if any.
        config: Scene configuration (number precision, epsilons).
    """

    __slots__ = ("element", "attributes", "parent", "config", "_callback")

    def __init__(self,
                 tag: str,
                 defaults: Optional[Mapping[str, AttributeValue]] = None,
                 opts: Optional[Mapping[str, AttributeValue]] = None,
                 config: SceneConfig = DEFAULT_CONFIG) -> None:
        """
        Args:
            tag: SVG tag of the owned element.
            defaults: Style preset applied at construction.
            opts: Attribute overrides merged over the preset.
            config: Scene configuration.
        """
        self.element: Element = make_element(tag)
        self.attributes: Dict[str, AttributeValue] = {}
        self.parent: Optional[NodeContainer] = None
        self.config = config
        self._callback: Optional[UpdateCallback] = None
        self.set_defaults(defaults or {}, opts)

    # -------------------------------------------------------------------------
    # Attributes
    # -------------------------------------------------------------------------
    def set(self, attribute: str, value: AttributeValue) -> GraphicNode:
        """Write one attribute and mirror it onto the element. Names are not validated."""
        self.attributes[attribute] = value
        self.element.set(attribute, format_value(value, self.config.precision))
        return self

    def set_defaults(self, defaults: Mapping[str, AttributeValue],
                     override: Optional[Mapping[str, AttributeValue]] = None) -> GraphicNode:
        """Apply a style preset, with `override` taking precedence."""
        merged = {**defaults, **(override or {})}
        for attribute, value in merged.items():
            self.set(attribute, value)
        return self

    # -------------------------------------------------------------------------
    # Animation
    # -------------------------------------------------------------------------
    def on_update(self, callback: Optional[UpdateCallback]) -> GraphicNode:
        """Register the per-frame callback, replacing any previous one. None clears it."""
        self._callback = callback
        return self

    @property
    def has_callback(self) -> bool:
        return self._callback is not None

    def update(self, elapsed_ms: float = math.inf) -> GraphicNode:
        """
        Run the callback, then push the attributes derived from current geometry.

        The callback runs first so that state it mutates is rendered by this same
        call. The default of infinite time stands for a one-shot, non-animated render.

        Args:
            elapsed_ms: Milliseconds since the scene was initialized.
        """
        if self._callback is not None:
            self._callback(self, elapsed_ms)
        for attribute, value in self.geometry_attributes().items():
            self.set(attribute, value)
        return self

    @abstractmethod
    def geometry_attributes(self) -> Dict[str, AttributeValue]:
        """Compute the surface attributes for the current geometry state."""
        raise NotImplementedError

    # -------------------------------------------------------------------------
    # Style
    # -------------------------------------------------------------------------
    def fill(self, css_color: str) -> GraphicNode:
        return self.set("fill", css_color)

    def color(self, css_color: str) -> GraphicNode:
        """Stroke color."""
        return self.set("stroke", css_color)

    def width(self, width: float) -> GraphicNode:
        """Stroke width in logical units."""
        return self.set("stroke-width", width)

    def linecap(self, linecap: str) -> GraphicNode:
        return self.set("stroke-linecap", linecap)

    def opacity(self, opacity: float) -> GraphicNode:
        return self.set("opacity", opacity)

    # -------------------------------------------------------------------------
    # Attachment
    # -------------------------------------------------------------------------
    def detach(self) -> GraphicNode:
        """Remove this node from its container, if it has one."""
        if self.parent is not None:
            self.parent.remove(self)
        return self

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} keys={list(self.attributes.keys())}>"


class NodeContainer:
    """
    Ordered child list for Canvas and Group.

    Insertion order is paint order: the first child is painted first, below
    later ones. A node belongs to at most one container at a time.
    """

    __slots__ = ()

    _children: list
    _content: Element

    def add(self, *nodes: GraphicNode) -> NodeContainer:
        """Append nodes and attach their elements immediately.

        Raises:
            SceneError: If a node is already attached to a container, or is the container itself.
        """
        logger = logging.getLogger(LOGGER_NAME)
        for node in nodes:
            if not isinstance(node, GraphicNode):
                raise TypeError(f"Expected a GraphicNode, got {type(node).__name__}")
            if node is self:
                raise SceneError(f"{node!r} cannot be added to itself")
            if node.parent is not None:
                raise SceneError(f"{node!r} is already attached to {node.parent!r}; detach it first")
            self._children.append(node)
            self._content.append(node.element)
            node.parent = self
        logger.debug(f"{self.__class__.__name__}: added {len(nodes)} node(s), {len(self._children)} total")
        return self

    def remove(self, node: GraphicNode) -> NodeContainer:
        """Detach a child node.

        Raises:
            SceneError: If `node` is not a child of this container.
        """
        if node.parent is not self:
            raise SceneError(f"{node!r} is not a child of {self!r}")
        self._children.remove(node)
        self._content.remove(node.element)
        node.parent = None
        return self

    @property
    def children(self) -> Tuple[GraphicNode, ...]:
        return tuple(self._children)

    def __iter__(self) -> Iterator[GraphicNode]:
        return iter(tuple(self._children))

    def __len__(self) -> int:
        return len(self._children)
