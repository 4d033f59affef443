"""Ship-versus-terrain contact via exact segment intersection."""

from __future__ import annotations

from dataclasses import dataclass

from lunar.config import DEFAULT_CONFIG
from lunar.maths import RigidTransform2, Segment, Vector2
from lunar.ship import Ship
from lunar.terrain import Terrain


def segment_intersection(
    a: Vector2, b: Vector2, c: Vector2, d: Vector2
) -> Vector2 | None:
    """Return the crossing point of segments AB and CD, or None.

    Both segments are turned into lines ``a*x + b*y = c``. Parallel and
    collinear pairs (zero determinant) never intersect, even when they touch
    or overlap. Otherwise the line crossing must fall inside both segments'
    bounding boxes, edges included.
    """
    a1 = b.y - a.y
    b1 = a.x - b.x
    c1 = a1 * a.x + b1 * a.y
    a2 = d.y - c.y
    b2 = c.x - d.x
    c2 = a2 * c.x + b2 * c.y

    det = a1 * b2 - a2 * b1
    if det == 0:
        return None

    point = Vector2((b2 * c1 - b1 * c2) / det, (a1 * c2 - a2 * c1) / det)
    if Segment(a, b).contains_in_bounds(point) and Segment(c, d).contains_in_bounds(point):
        return point
    return None


def segments_intersect(a: Vector2, b: Vector2, c: Vector2, d: Vector2) -> bool:
    return segment_intersection(a, b, c, d) is not None


def ship_corners(ship: Ship) -> list[Vector2]:
    """World-space corners, counter-clockwise from bottom-left in ship space."""
    hw = ship.size.x / 2.0
    hh = ship.size.y / 2.0
    transform = RigidTransform2(ship.position, ship.angle)
    local = [
        Vector2(-hw, -hh),
        Vector2(hw, -hh),
        Vector2(hw, hh),
        Vector2(-hw, hh),
    ]
    return [transform.apply(p) for p in local]


def ship_edges(ship: Ship) -> list[Segment]:
    corners = ship_corners(ship)
    return [Segment(corners[i], corners[(i + 1) % 4]) for i in range(4)]


def terrain_edges(
    terrain: Terrain, far_away: float = DEFAULT_CONFIG.far_away
) -> list[Segment]:
    """Polyline segments of the height map plus the ground baseline at y = 0.

    The baseline stretches far past the generated columns so a ship that
    leaves the map still meets the ground.
    """
    points = [Vector2(x, y) for x, y in terrain.points()]
    edges = [Segment(points[i], points[i + 1]) for i in range(len(points) - 1)]
    edges.append(Segment(Vector2(-far_away, 0.0), Vector2(far_away, 0.0)))
    return edges


@dataclass(frozen=True)
class Contact:
    """First ship/terrain edge pair found crossing, with the crossing point."""

    ship_edge: Segment
    terrain_edge: Segment
    point: Vector2
    baseline: bool = False


def find_contact(
    ship: Ship, terrain: Terrain, far_away: float = DEFAULT_CONFIG.far_away
) -> Contact | None:
    ground = terrain_edges(terrain, far_away)
    baseline = ground[-1]
    for ship_edge in ship_edges(ship):
        for terrain_edge in ground:
            point = segment_intersection(
                ship_edge.a, ship_edge.b, terrain_edge.a, terrain_edge.b
            )
            if point is not None:
                return Contact(
                    ship_edge=ship_edge,
                    terrain_edge=terrain_edge,
                    point=point,
                    baseline=terrain_edge is baseline,
                )
    return None


def intersects_terrain(
    ship: Ship, terrain: Terrain, far_away: float = DEFAULT_CONFIG.far_away
) -> bool:
    return find_contact(ship, terrain, far_away) is not None
