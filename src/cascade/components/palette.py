from dataclasses import dataclass
from typing import Dict, List, Tuple


@dataclass(slots=True)
class PaletteRegistry:
    """Empty tag component marking the single entity that stores the Palette and Rules."""
    pass


@dataclass(slots=True)
class Palette:
    """Ordered colour definitions: name -> RGB.

    Insertion order is significant; swatch position and key binding index both
    refer to it.
    """
    colors: Dict[str, Tuple[int, int, int]]

    def __post_init__(self) -> None:
        if not self.colors:
            raise ValueError("Palette must define at least one colour")

    def names(self) -> List[str]:
        return list(self.colors.keys())

    def color_at(self, index: int) -> str:
        names = self.names()
        if not 0 <= index < len(names):
            raise ValueError(f"Palette index {index} out of range 0..{len(names) - 1}")
        return names[index]

    def rgb_for(self, name: str) -> Tuple[int, int, int]:
        return self.colors[name]

    def __contains__(self, name: object) -> bool:
        return name in self.colors

    def __len__(self) -> int:
        return len(self.colors)
