"""
Loading named calendars from YAML files and in-memory definitions.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import yaml
from pydantic import ValidationError

from business_calendar.core.calendar import BusinessCalendar
from business_calendar.core.exceptions import CalendarError, ParseError, UnknownCalendar
from business_calendar.data.schemas import CALENDAR_KEYS, CalendarDefinition

logger = logging.getLogger(__name__)

LoadPath = Union[str, Path, Mapping[str, Any]]

CALENDAR_SUFFIXES = (".yml", ".yaml")

BUILTIN_CALENDAR_DIRECTORY = Path(__file__).parent.parent / "calendars"


class CalendarLoader:
    """
    Finds calendar definitions on a list of load paths.

    Each load path is either a directory containing <name>.yml files or a
    mapping of calendar name to definition. Paths are searched in order and
    the first match wins.
    """

    def __init__(self, load_paths: Optional[Sequence[LoadPath]] = None):
        """
        Initialize the loader.

        Args:
            load_paths: Directories or mappings to search. Defaults to the
                calendars shipped with the package.
        """
        if load_paths is None:
            load_paths = [BUILTIN_CALENDAR_DIRECTORY]
        self.load_paths: List[LoadPath] = list(load_paths)
        self._cache: Dict[str, BusinessCalendar] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config) -> "CalendarLoader":
        """Loader searching the configured directories, then the built-in calendars."""
        return cls([*config.calendar_directories, BUILTIN_CALENDAR_DIRECTORY])

    def resolve(
        self,
        name: Optional[str] = None,
        working_days: Optional[Sequence[str]] = None,
        holidays: Optional[Sequence[Any]] = None,
        extra_working_dates: Optional[Sequence[Any]] = None,
        default: Optional[str] = None,
    ) -> BusinessCalendar:
        """
        Pick the calendar a request asks for.

        A request names a calendar or defines one inline. With neither, the
        default calendar is loaded if one is configured, otherwise a
        Monday-Friday calendar without holidays is returned.

        Raises:
            CalendarError: If both a name and an inline definition are given,
                or the named calendar cannot be loaded.
        """
        inline = any((working_days, holidays, extra_working_dates))
        if name and inline:
            raise CalendarError("Select either a calendar name or an inline definition, not both")
        if name:
            return self.load_cached(name)
        if inline:
            return BusinessCalendar(
                working_days=working_days,
                holidays=holidays,
                extra_working_dates=extra_working_dates,
            )
        if default:
            return self.load_cached(default)
        return BusinessCalendar()

    def load(self, name: str) -> BusinessCalendar:
        """
        Load a calendar by name.

        Args:
            name: Calendar name, e.g. "weekdays".

        Returns:
            The named BusinessCalendar.

        Raises:
            UnknownCalendar: If no calendar has that name.
            ParseError: If a holiday or extra working date is malformed.
            InvalidInput: If a working day is not a recognised weekday.
            CalendarError: If the definition is invalid otherwise.
        """
        data = self._find_calendar_data(name)
        if data is None:
            raise UnknownCalendar(f"No such calendar '{name}'")
        if not isinstance(data, Mapping):
            raise CalendarError(f"Calendar '{name}' must be a mapping of {', '.join(CALENDAR_KEYS)}")

        unknown = set(data) - set(CALENDAR_KEYS)
        if unknown:
            raise CalendarError(f"Only valid keys are: {', '.join(CALENDAR_KEYS)}")

        try:
            definition = CalendarDefinition(**data)
        except ValidationError as e:
            # Surface ParseError/InvalidInput raised by the field validators
            for error in e.errors():
                cause = error.get("ctx", {}).get("error")
                if isinstance(cause, CalendarError):
                    raise cause from e
            raise CalendarError(f"Invalid calendar '{name}': {e}")

        logger.debug(
            "Loaded calendar %s (%d holidays, %d extra working dates)",
            name,
            len(definition.holidays),
            len(definition.extra_working_dates),
        )
        return BusinessCalendar.from_config(definition, name=name)

    def load_cached(self, name: str) -> BusinessCalendar:
        """Load a calendar once per loader and reuse it afterwards."""
        with self._lock:
            if name not in self._cache:
                self._cache[name] = self.load(name)
            return self._cache[name]

    def available(self) -> List[str]:
        """Names of all calendars found across the load paths."""
        names: List[str] = []
        for path in self.load_paths:
            if isinstance(path, Mapping):
                candidates = list(path.keys())
            else:
                directory = Path(path)
                if not directory.is_dir():
                    continue
                candidates = sorted(
                    f.stem for f in directory.iterdir() if f.suffix in CALENDAR_SUFFIXES
                )
            for name in candidates:
                if name not in names:
                    names.append(name)
        return names

    def _find_calendar_data(self, name: str) -> Optional[Any]:
        for path in self.load_paths:
            if isinstance(path, Mapping):
                if path.get(name) is not None:
                    return path[name]
                continue

            for suffix in CALENDAR_SUFFIXES:
                calendar_path = Path(path) / f"{name}{suffix}"
                if calendar_path.exists():
                    return self._read_yaml(calendar_path)
        return None

    def _read_yaml(self, calendar_path: Path) -> Any:
        try:
            with open(calendar_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise CalendarError(f"Error parsing calendar file {calendar_path}: {e}")
        except ValueError as e:
            # YAML timestamps naming impossible dates, e.g. 2023-02-30
            raise ParseError(f"Invalid date in calendar file {calendar_path}: {e}")
        # An empty file is a calendar with every setting at its default
        return {} if data is None else data
