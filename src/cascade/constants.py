GRID_SIZE = 14
MAX_MOVES = 25

# Bonus ("star") cell tuning
BONUS_CHANCE = 0.2
BONUS_POINTS = 150
MULTIPLIER_TURNS = 3
MULTIPLIER_FACTOR = 2
BONUS_ORIGIN_EXCLUSION = 5
BONUS_CORNER_EXCLUSION = 3

# One obstacle per LEVELS_PER_OBSTACLE levels, capped at MAX_OBSTACLES.
LEVELS_PER_OBSTACLE = 4
MAX_OBSTACLES = 3

MOVE_BONUS_PER_MOVE = 25

OBSTACLE_COLOR = "gray"

# Ordered palette: index order is the order of swatches and key bindings.
PALETTE_COLORS = {
    "red":    (255, 107, 107),   # #FF6B6B
    "green":  (46, 204, 113),    # #2ECC71
    "blue":   (52, 152, 219),    # #3498DB
    "yellow": (254, 215, 102),   # #FED766
    "purple": (138, 79, 255),    # #8A4FFF
}
OBSTACLE_RGB = (90, 90, 100)
BONUS_RGB = (250, 204, 21)

# Keyboard letters mapped 1:1 onto palette order.
KEY_BINDINGS = ("r", "g", "b", "y", "p")

# Delay (seconds) between the resolving move and the level-complete / game-over dialog.
TRANSITION_DELAY = 2.0

# Layout
BOTTOM_MARGIN = 20
INFO_PANEL_HEIGHT = 140
BOARD_MAX_WIDTH_PCT = 0.80
BOARD_MAX_HEIGHT_PCT = 0.95
MIN_CELL_SIZE = 12
CELL_GAP = 2
SWATCH_RADIUS = 20
SWATCH_SPACING = 56
