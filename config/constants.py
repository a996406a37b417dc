"""Constants for the Favicon Pong server - playfield, ball, paddles and network defaults"""

# Network defaults
DEFAULT_HOST = '0.0.0.0'
DEFAULT_PORT = 8080

# Tick rate
FPS = 60
FRAME_TIME = 1.0 / FPS  # ~16.67ms

# Tile (one player's share of the playfield) dimensions
TILE_WIDTH = 16
TILE_HEIGHT = 16
CENTER_X = TILE_WIDTH / 2
CENTER_Y = TILE_HEIGHT / 2

# Ball settings
BALL_VELOCITY_X = 0.15
BALL_VELOCITY_Y = 0.15

# Paddle settings (PADDLE_SIZE is the half-length of a paddle)
PADDLE_SIZE = 2
PADDLE_SPEED = 2
PADDLE_COLLISION_TOLERANCE = 2

# Game loop settings
MIN_PLAYERS = 2
SCORE_FLASH_DURATION = 30  # frames

# Teams
TEAM_RED = 'red'
TEAM_BLUE = 'blue'
TEAMS = (TEAM_RED, TEAM_BLUE)

# Directions accepted in paddleMove messages
DIR_UP = 'up'
DIR_DOWN = 'down'
DIR_LEFT = 'left'
DIR_RIGHT = 'right'
VERTICAL_DIRECTIONS = (DIR_UP, DIR_DOWN)
HORIZONTAL_DIRECTIONS = (DIR_LEFT, DIR_RIGHT)
