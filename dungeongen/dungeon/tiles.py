# Plan characters centralized for the text renderer and its tests
CORNER = "+"
BORDER_X = "|"
BORDER_Y = "-"
WALL_X = "|"
WALL_Y = "-"
DOOR = "D"
OPEN = " "
VACANT = "?"
STAIR_UP = "^"
STAIR_DOWN = "v"
STAIR_BOTH = "%"

__all__ = [
    "CORNER",
    "BORDER_X",
    "BORDER_Y",
    "WALL_X",
    "WALL_Y",
    "DOOR",
    "OPEN",
    "VACANT",
    "STAIR_UP",
    "STAIR_DOWN",
    "STAIR_BOTH",
]
