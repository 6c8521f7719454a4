class MarshrutkaError(Exception):
    """Base class for every error raised by the route planner."""


class MapError(MarshrutkaError, ValueError):
    """The map file or the grid topology it describes is invalid."""


class CellIndexError(MarshrutkaError, ValueError):
    """A cell name could not be parsed."""


class SkillLevelError(MarshrutkaError, ValueError):
    """A skill level lies outside of its allowed range."""


class UnknownCellError(MarshrutkaError, KeyError):
    """A cell index is valid but absent from the loaded grid."""

    def __str__(self):
        # KeyError would quote the message
        return str(self.args[0]) if self.args else ""


class ConfigError(MarshrutkaError):
    """The user settings file could not be read."""
