from typing import Callable

from procurement.client.storage import TabStorage

THEME_STORAGE_KEY = "theme"
THEMES = ("light", "dark")


class ThemePreference:
    """Light/dark preference persisted under ``THEME_STORAGE_KEY``.

    When nothing is stored yet the system preference decides, and the
    result is written back so later loads are stable.
    """

    def __init__(self, storage: TabStorage, prefers_dark: Callable[[], bool] = lambda: False):
        self.storage = storage
        self.prefers_dark = prefers_dark

    def initialize(self) -> str:
        stored = self.storage.get_item(THEME_STORAGE_KEY)
        if stored in THEMES:
            return stored
        theme = "dark" if self.prefers_dark() else "light"
        self.storage.set_item(THEME_STORAGE_KEY, theme)
        return theme

    @property
    def theme(self) -> str:
        stored = self.storage.get_item(THEME_STORAGE_KEY)
        if stored in THEMES:
            return stored
        return "dark" if self.prefers_dark() else "light"

    @property
    def is_dark(self) -> bool:
        return self.theme == "dark"

    def set_theme(self, theme: str) -> None:
        if theme not in THEMES:
            raise ValueError(f"Theme must be one of: {', '.join(THEMES)}")
        self.storage.set_item(THEME_STORAGE_KEY, theme)

    def toggle(self) -> str:
        theme = "light" if self.is_dark else "dark"
        self.set_theme(theme)
        return theme
