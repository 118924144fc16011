"""
Structure icon styles for the raster backend.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class IconStyle:
    """
    How a category is drawn.

    Attributes:
        shape: "circle", "square" or "diamond"
        color: Fill color ("#rrggbb")
        size: Half-extent in tiles
    """

    shape: str
    color: str
    size: float


DEFAULT_ICON = IconStyle(shape="square", color="#aaaaaa", size=0.3)

ICONS: Dict[str, IconStyle] = {
    "road": IconStyle(shape="circle", color="#666666", size=0.175),
    "spawn": IconStyle(shape="circle", color="#ffe56d", size=0.45),
    "extension": IconStyle(shape="circle", color="#ffe56d", size=0.3),
    "tower": IconStyle(shape="circle", color="#e04a3a", size=0.4),
    "storage": IconStyle(shape="square", color="#ffe56d", size=0.4),
    "terminal": IconStyle(shape="diamond", color="#aaaaaa", size=0.45),
    "container": IconStyle(shape="square", color="#8b7b52", size=0.25),
    "link": IconStyle(shape="diamond", color="#8aa1c9", size=0.3),
    "lab": IconStyle(shape="circle", color="#8aa1c9", size=0.4),
    "factory": IconStyle(shape="square", color="#b76bb3", size=0.4),
    "nuker": IconStyle(shape="diamond", color="#e04a3a", size=0.45),
    "observer": IconStyle(shape="circle", color="#8fbb93", size=0.3),
    "powerSpawn": IconStyle(shape="circle", color="#e04a3a", size=0.45),
    "extractor": IconStyle(shape="circle", color="#8fbb93", size=0.45),
    "rampart": IconStyle(shape="square", color="#434c43", size=0.45),
    "constructedWall": IconStyle(shape="square", color="#111111", size=0.45),
}


def icon_for(category: str) -> IconStyle:
    return ICONS.get(category, DEFAULT_ICON)
