"""Game objects: sprites, groups, text labels and the world display list."""

from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Tuple, Union
import logging

from planeflap.animation.frames import SpriteAnimations

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]


@dataclass
class Vector:
    """Mutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def set_to(self, x: float, y: Optional[float] = None) -> "Vector":
        self.x = x
        self.y = x if y is None else y
        return self


@dataclass
class Body:
    """Arcade physics body. Velocity is px/s, gravity px/s²."""

    velocity: Vector = field(default_factory=Vector)
    gravity: Vector = field(default_factory=Vector)
    enable: bool = True


@dataclass
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def intersects(self, other: "Rect") -> bool:
        """Strict overlap; rects that only share an edge don't intersect."""
        return (
            self.x < other.right
            and self.right > other.x
            and self.y < other.bottom
            and self.bottom > other.y
        )


class Sprite:
    """A positioned image (or spritesheet frame) in the world.

    (x, y) is the position of the anchor point; anchor is normalised
    against the frame size, so (0, 0) is the top-left corner and
    (0.5, 0.5) the centre.
    """

    def __init__(self, key: str, x: float, y: float, width: int, height: int) -> None:
        self.key = key
        self.x = float(x)
        self.y = float(y)
        self.width = width
        self.height = height
        self.anchor = Vector(0.0, 0.0)
        self.angle = 0.0
        self.frame = 0

        self.alive = True
        self.exists = True

        self.body: Optional[Body] = None
        self.check_world_bounds = False
        self.out_of_bounds_kill = False
        self.in_world = False

        self.animations = SpriteAnimations()
        self.group: Optional["Group"] = None

    @property
    def bounds(self) -> Rect:
        """Axis-aligned frame bounds. Rotation is cosmetic and ignored."""
        return Rect(
            self.x - self.anchor.x * self.width,
            self.y - self.anchor.y * self.height,
            self.width,
            self.height,
        )

    def kill(self) -> None:
        """Mark dead and take out of the world and its group."""
        self.alive = False
        self.exists = False
        if self.group is not None:
            self.group.remove(self)
        logger.debug(f"Sprite killed: {self.key}")

    def __repr__(self) -> str:
        return f"Sprite({self.key!r}, x={self.x:.1f}, y={self.y:.1f}, alive={self.alive})"


class Group:
    """Ordered collection of sprites."""

    def __init__(self, name: str = "group") -> None:
        self.name = name
        self._children: List[Sprite] = []

    def add(self, sprite: Sprite) -> Sprite:
        if sprite.group is not None and sprite.group is not self:
            sprite.group.remove(sprite)
        sprite.group = self
        self._children.append(sprite)
        return sprite

    def remove(self, sprite: Sprite) -> bool:
        if sprite in self._children:
            self._children.remove(sprite)
            sprite.group = None
            return True
        return False

    def for_each(self, callback: Callable[[Sprite], None]) -> None:
        for sprite in list(self._children):
            callback(sprite)

    def living(self) -> List[Sprite]:
        return [s for s in self._children if s.alive]

    def __iter__(self) -> Iterator[Sprite]:
        return iter(list(self._children))

    def __len__(self) -> int:
        return len(self._children)


@dataclass
class Text:
    """Text label drawn with the bitmap font.

    size is the glyph height in pixels.
    """

    x: float
    y: float
    text: str
    size: int = 30
    color: Color = (255, 255, 255)
    exists: bool = True


DisplayObject = Union[Sprite, Group, Text]


class World:
    """The display list and world bounds.

    Objects are drawn in the order they were added; a group draws its
    children in order at the group's position in the list.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._children: List[DisplayObject] = []

    @property
    def bounds(self) -> Rect:
        return Rect(0, 0, self.width, self.height)

    @property
    def children(self) -> List[DisplayObject]:
        return list(self._children)

    def add(self, obj: DisplayObject) -> DisplayObject:
        self._children.append(obj)
        return obj

    def remove(self, obj: DisplayObject) -> None:
        if obj in self._children:
            self._children.remove(obj)

    def sprites(self) -> List[Sprite]:
        """Every existing sprite, flattened in draw order."""
        result: List[Sprite] = []
        for obj in self._children:
            if isinstance(obj, Group):
                result.extend(s for s in obj if s.exists)
            elif isinstance(obj, Sprite) and obj.exists:
                result.append(obj)
        return result

    def clear(self) -> None:
        self._children.clear()
