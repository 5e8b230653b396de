"""Components used by the main menu ECS subsystem."""
from dataclasses import dataclass
from enum import Enum, auto


class MenuAction(Enum):
    """Actions that a menu button can trigger."""
    NEW_GAME = auto()


@dataclass
class MenuButton:
    """Interactive button displayed in the main menu."""
    label: str
    action: MenuAction
    x: float
    y: float
    width: float = 260.0
    height: float = 64.0
    enabled: bool = True


@dataclass
class MenuTitle:
    text: str
    subtitle: str
    x: float
    y: float


@dataclass
class MenuBackground:
    """Background styling data for the menu screen."""
    color: tuple[int, int, int] = (31, 41, 55)


@dataclass
class MenuTag:
    """Marker component so menu entities can be cleaned up together."""
    pass
