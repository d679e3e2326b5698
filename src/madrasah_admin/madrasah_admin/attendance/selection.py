from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional

from .reconciler import AttendanceSession

logger = logging.getLogger(__name__)

SessionLoader = Callable[[str, date], AttendanceSession]


class RosterSelection:
    """Tracks which (class, date) roster is on screen.

    The roster is rebuilt only when the class changes or a different day is
    committed. While the date picker is open, month/year navigation is ignored.
    """

    def __init__(self, loader: SessionLoader, *, class_id: Optional[str] = None, on_date: Optional[date] = None):
        self._loader = loader
        self._class_id = class_id
        self._date = on_date
        self._picker_open = False
        self._visible_month: Optional[tuple[int, int]] = None
        self._session: Optional[AttendanceSession] = None
        if class_id is not None and on_date is not None:
            self._rebuild()

    @property
    def session(self) -> Optional[AttendanceSession]:
        return self._session

    @property
    def class_id(self) -> Optional[str]:
        return self._class_id

    @property
    def date(self) -> Optional[date]:
        return self._date

    @property
    def picker_open(self) -> bool:
        return self._picker_open

    @property
    def visible_month(self) -> Optional[tuple[int, int]]:
        return self._visible_month

    def open_picker(self) -> None:
        self._picker_open = True
        if self._date is not None:
            self._visible_month = (self._date.year, self._date.month)

    def navigate_picker(self, year: int, month: int) -> None:
        if not self._picker_open:
            return
        self._visible_month = (int(year), int(month))

    def close_picker(self) -> None:
        self._picker_open = False

    def commit_date(self, on_date: date) -> bool:
        """Select a day. Returns True when the roster was rebuilt."""
        self._picker_open = False
        if on_date == self._date:
            return False
        self._date = on_date
        return self._rebuild()

    def select_class(self, class_id: str) -> bool:
        if class_id == self._class_id:
            return False
        self._class_id = class_id
        return self._rebuild()

    def refresh(self) -> bool:
        return self._rebuild()

    def close(self) -> None:
        if self._session is not None and len(self._session):
            logger.debug("Discarding unsaved roster for %s", self._session.key)
        self._session = None
        self._class_id = None
        self._date = None
        self._picker_open = False

    def _rebuild(self) -> bool:
        self._session = None
        if self._class_id is None or self._date is None:
            return False
        self._session = self._loader(self._class_id, self._date)
        return True
