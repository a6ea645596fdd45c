from __future__ import annotations

import logging
from dataclasses import dataclass

from grandalf.graphs import Vertex, Edge, Graph
from grandalf.layouts import SugiyamaLayout

from .graph import arrows, find_element, is_node, nodes
from .types import Diagram, ImportOptions, Node, Position, Size

logger = logging.getLogger(__name__)

# ============================================================================
# Layered layout
#
# Uses grandalf (Sugiyama algorithm) to place class boxes in layers, then
# routes every arrow as an orthogonal polyline clipped to the box borders.
#
# Inheritance and implementation edges are laid out target-first so parents
# end up above their children. Each connected component is laid out on its
# own and the components are placed side by side, left to right.
# ============================================================================

# Relationship kinds whose target is drawn above the source
_UPWARD_KINDS = ("inheritance", "implementation")


class _VertexView:
    """Minimal view object required by grandalf's SugiyamaLayout."""

    def __init__(self, w: float, h: float) -> None:
        self.w = w
        self.h = h
        # xy is set by the layout engine (center coordinates)
        self.xy = (0.0, 0.0)


@dataclass(slots=True)
class NodeRect:
    """Node rectangle for endpoint clipping -- uses center-based coordinates."""

    cx: float
    cy: float
    hw: float
    hh: float


def layout_diagram(diagram: Diagram, options: ImportOptions | None = None) -> Diagram:
    """Re-position the nodes of a diagram and route its arrows in place."""
    options = options or ImportOptions()
    boxes = nodes(diagram)
    if not boxes:
        return diagram

    default_size = Size(
        width=float(options.get("node_width")),
        height=float(options.get("node_height")),
    )

    # 1. Build grandalf graph
    vertices: dict[str, Vertex] = {}
    for node in boxes:
        size = node.size or default_size
        v = Vertex(node.id)
        v.view = _VertexView(size.width, size.height)
        vertices[node.id] = v

    edges_list: list[Edge] = []
    seen: set[tuple[str, str]] = set()
    for arrow in arrows(diagram):
        src_v = vertices.get(arrow.source)
        tgt_v = vertices.get(arrow.target)
        if src_v is None or tgt_v is None or src_v is tgt_v:
            continue
        if arrow.kind in _UPWARD_KINDS:
            src_v, tgt_v = tgt_v, src_v
        key = (src_v.data, tgt_v.data)
        if key in seen:
            continue
        seen.add(key)
        edges_list.append(Edge(src_v, tgt_v))

    g = Graph(list(vertices.values()), edges_list)

    # 2. Lay out each connected component, then place components side by side
    node_spacing = float(options.get("node_spacing"))
    layer_spacing = float(options.get("layer_spacing"))
    padding = float(options.get("padding"))
    offset_x = padding

    for component in g.C:
        try:
            sug = SugiyamaLayout(component)
            sug.xspace = node_spacing
            sug.yspace = layer_spacing
            sug.init_all()
            sug.draw()
        except Exception as err:
            raise RuntimeError(f"Grandalf layout failed (diagram {diagram.id}): {err}") from err

        members = list(component.sV)
        min_x = min(v.view.xy[0] - v.view.w / 2 for v in members)
        max_x = max(v.view.xy[0] + v.view.w / 2 for v in members)
        min_y = min(v.view.xy[1] - v.view.h / 2 for v in members)

        for v in members:
            node = find_element(diagram, v.data)
            if node is None or not is_node(node):
                continue
            cx = v.view.xy[0] - min_x + offset_x
            cy = v.view.xy[1] - min_y + padding
            node.position = center_to_top_left(cx, cy, v.view.w, v.view.h)

        offset_x += (max_x - min_x) + node_spacing

    # 3. Route arrows between the positioned nodes
    for arrow in arrows(diagram):
        source = find_element(diagram, arrow.source)
        target = find_element(diagram, arrow.target)
        if source is None or target is None or not is_node(source) or not is_node(target):
            continue
        src_rect = _rect(source, default_size)  # type: ignore[arg-type]
        tgt_rect = _rect(target, default_size)  # type: ignore[arg-type]
        points = route_orthogonal(
            Position(x=src_rect.cx, y=src_rect.cy),
            Position(x=tgt_rect.cx, y=tgt_rect.cy),
        )
        arrow.points = clip_endpoints_to_nodes(points, src_rect, tgt_rect)

    logger.debug(
        "Laid out %d nodes in %d components for diagram %s",
        len(boxes), len(g.C), diagram.id,
    )
    return diagram


def _rect(node: Node, default_size: Size) -> NodeRect:
    size = node.size or default_size
    return NodeRect(
        cx=node.position.x + size.width / 2,
        cy=node.position.y + size.height / 2,
        hw=size.width / 2,
        hh=size.height / 2,
    )


# ============================================================================
# Orthogonal routing and endpoint clipping
# ============================================================================


def center_to_top_left(cx: float, cy: float, width: float, height: float) -> Position:
    """Convert center-based coordinates to top-left origin."""
    return Position(x=cx - width / 2, y=cy - height / 2)


def route_orthogonal(start: Position, end: Position) -> list[Position]:
    """Connect two centers with a vertical-then-horizontal polyline.

    Centers already aligned on one axis (within a pixel) get a straight
    segment; otherwise a single corner is inserted below or above start.
    """
    if abs(end.x - start.x) < 1 or abs(end.y - start.y) < 1:
        return [start, end]
    return [start, Position(x=start.x, y=end.y), end]


def clip_endpoints_to_nodes(
    points: list[Position],
    source: NodeRect | None,
    target: NodeRect | None,
) -> list[Position]:
    """Move the first and last points onto the facing side of each box.

    Never mutates the input list.
    """
    if len(points) < 2:
        return points
    result = [Position(x=p.x, y=p.y) for p in points]

    if target is not None:
        last = len(result) - 1
        prev = result[last - 1]
        curr = result[last]
        if abs(curr.y - prev.y) >= abs(curr.x - prev.x):
            side_y = target.cy - target.hh if curr.y > prev.y else target.cy + target.hh
            result[last] = Position(x=curr.x, y=side_y)
        else:
            side_x = target.cx - target.hw if curr.x > prev.x else target.cx + target.hw
            result[last] = Position(x=side_x, y=curr.y)

    if source is not None:
        first = result[0]
        nxt = result[1] if len(result) > 2 else points[1]
        if abs(nxt.y - first.y) >= abs(nxt.x - first.x):
            side_y = source.cy + source.hh if nxt.y > first.y else source.cy - source.hh
            result[0] = Position(x=first.x, y=side_y)
        else:
            side_x = source.cx + source.hw if nxt.x > first.x else source.cx - source.hw
            result[0] = Position(x=side_x, y=first.y)

    return result
