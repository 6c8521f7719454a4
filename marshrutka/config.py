"""Player settings remembered between runs.

Settings live in a small JSON file in the user config directory
(``%APPDATA%/Marshrutka`` on Windows, ``$XDG_CONFIG_HOME/marshrutka``
elsewhere).  A missing file means defaults; a broken one is reported
rather than silently ignored.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields

from .consts import (
    DEFAULT_SCROLL_OF_ESCAPE_COST,
    DEFAULT_SCROLL_OF_ESCAPE_FORUM_COST,
    DEFAULT_SCROLL_OF_ESCAPE_HQ_COST,
)
from .cost import CostComparator
from .errors import CellIndexError, ConfigError
from .homeland import Homeland
from .index import parse_cell_index
from .pathfinder import FindPathSettings
from .skill import Fleetfoot, RouteGuru

log = logging.getLogger(__name__)

SETTINGS_FILE = "settings.json"


def user_config_dir() -> str:
    if os.name == "nt":
        base = os.getenv("APPDATA") or os.path.expanduser("~")
        return os.path.join(base, "Marshrutka")
    base = os.getenv("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    return os.path.join(base, "marshrutka")


def user_config_path() -> str:
    return os.path.join(user_config_dir(), SETTINGS_FILE)


def _is_int(value) -> bool:
    # JSON true/false load as bool, a subclass of int
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class Settings:
    homeland: str = Homeland.BLUE.abbrev
    use_caravans: bool = False
    use_soe: bool = False
    scroll_of_escape_cost: int = DEFAULT_SCROLL_OF_ESCAPE_COST
    hq_position: str | None = None
    scroll_of_escape_hq_cost: int = DEFAULT_SCROLL_OF_ESCAPE_HQ_COST
    forum_position: str | None = None
    scroll_of_escape_forum_cost: int = DEFAULT_SCROLL_OF_ESCAPE_FORUM_COST
    route_guru: int = 0
    fleetfoot: int = 0
    sort_by: list[str] = field(default_factory=lambda: ["legs", "time"])

    def validate(self):
        """Check every value can be turned into search settings.

        Raises
        ------
        ConfigError
            Naming the first offending setting.
        """
        self._check_types()
        try:
            Homeland.from_abbrev(self.homeland)
            for position in (self.hq_position, self.forum_position):
                if position is not None:
                    parse_cell_index(position)
            RouteGuru(self.route_guru).ratio()
            Fleetfoot(self.fleetfoot).ratio()
            for metric in self.sort_by:
                CostComparator(metric)
        except (CellIndexError, ValueError) as e:
            raise ConfigError(f"invalid settings: {e}") from e
        for name in (
            "scroll_of_escape_cost",
            "scroll_of_escape_hq_cost",
            "scroll_of_escape_forum_cost",
        ):
            value = getattr(self, name)
            if not _is_int(value) or value < 0:
                raise ConfigError(f"invalid settings: {name} must be a non-negative integer")

    def _check_types(self):
        expected = {
            "homeland": (str,),
            "hq_position": (str, type(None)),
            "forum_position": (str, type(None)),
            "use_caravans": (bool,),
            "use_soe": (bool,),
        }
        for name, types in expected.items():
            if not isinstance(getattr(self, name), types):
                raise ConfigError(f"invalid settings: {name} has the wrong type")
        for name in ("route_guru", "fleetfoot"):
            if not _is_int(getattr(self, name)):
                raise ConfigError(f"invalid settings: {name} must be an integer")
        if not (
            isinstance(self.sort_by, list)
            and len(self.sort_by) == 2
            and all(isinstance(metric, str) for metric in self.sort_by)
        ):
            raise ConfigError(f"invalid settings: sort_by must be a list of two metrics, got {self.sort_by!r}")

    def to_find_path_settings(self, grid) -> FindPathSettings:
        self.validate()
        return FindPathSettings(
            grid=grid,
            homeland=Homeland.from_abbrev(self.homeland),
            use_caravans=self.use_caravans,
            use_soe=self.use_soe,
            scroll_of_escape_cost=self.scroll_of_escape_cost,
            hq_position=parse_cell_index(self.hq_position) if self.hq_position else None,
            scroll_of_escape_hq_cost=self.scroll_of_escape_hq_cost,
            forum_position=parse_cell_index(self.forum_position) if self.forum_position else None,
            scroll_of_escape_forum_cost=self.scroll_of_escape_forum_cost,
            route_guru=RouteGuru(self.route_guru),
            fleetfoot=Fleetfoot(self.fleetfoot),
            sort_by=(CostComparator(self.sort_by[0]), CostComparator(self.sort_by[1])),
        )


def load_settings(path=None) -> Settings:
    """Read settings, falling back to defaults if the file does not exist."""
    path = path or user_config_path()
    if not os.path.exists(path):
        log.debug("No settings file at %s, using defaults", path)
        return Settings()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"cannot read settings {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"settings {path} must contain a JSON object")
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        log.warning("Ignoring unknown settings in %s: %s", path, ", ".join(unknown))
    settings = Settings(**{k: v for k, v in data.items() if k in known})
    settings.validate()
    return settings


def save_settings(settings: Settings, path=None) -> str:
    settings.validate()
    path = path or user_config_path()
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(asdict(settings), f, ensure_ascii=False, indent=2)
    log.info("Saved settings to %s", path)
    return path
