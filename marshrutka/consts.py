from datetime import timedelta

# Walking one cell.
STANDARD_MOVE_TIME = timedelta(minutes=3)
# Stepping between the hub and a border cell.
CENTRAL_MOVE_TIME = timedelta(seconds=10)

# Caravan fares and travel time are charged per cell of grid distance.
CARAVAN_TIME = timedelta(minutes=4)
CARAVAN_MONEY = 3
CARAVAN_TO_HOME_MONEY = 1
CARAVAN_TO_CENTER_MONEY = 2

# Side of the map served by the game.
MAP_SIZE = 13
DEFAULT_HOMELAND_SIZE = (MAP_SIZE - 1) // 2

DEFAULT_SCROLL_OF_ESCAPE_COST = 1
DEFAULT_SCROLL_OF_ESCAPE_HQ_COST = 2
DEFAULT_SCROLL_OF_ESCAPE_FORUM_COST = 2
