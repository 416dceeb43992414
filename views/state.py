from .modes import DisplayMode


class Observable:
    def __init__(self):
        self._subscribers = []

    def subscribe(self, callback):
        """Register ``callback(name, value)``; returns a function that removes it."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, name, value):
        for callback in list(self._subscribers):
            callback(name, value)


class CalendarState(Observable):
    """Calendars, reminders and display mode shared with the embedding app.

    The embedder owns the lists. Replacing one goes through a setter, an
    in-place mutation should be announced with ``touch``.
    """

    def __init__(self, calendars=None, reminders=None, mode=DisplayMode.MONTHLY):
        super().__init__()
        self._calendars = list(calendars or [])
        self._reminders = list(reminders or [])
        self._mode = DisplayMode.parse(mode)

    @property
    def calendars(self):
        return self._calendars

    @calendars.setter
    def calendars(self, value):
        self._calendars = list(value or [])
        self._notify("calendars", self._calendars)

    @property
    def reminders(self):
        return self._reminders

    @reminders.setter
    def reminders(self, value):
        self._reminders = list(value or [])
        self._notify("reminders", self._reminders)

    @property
    def mode(self):
        return self._mode

    @mode.setter
    def mode(self, value):
        mode = DisplayMode.parse(value)
        if mode == self._mode:
            return
        self._mode = mode
        self._notify("mode", mode)

    def set_mode(self, value):
        self.mode = value
        return self._mode

    def touch(self, name):
        if name not in ("calendars", "reminders", "mode"):
            raise ValueError(f"Unknown state field: {name}")
        self._notify(name, getattr(self, name))
