"""Absolute links to print views, opened in a new browser tab."""

import logging
import webbrowser
from typing import Callable

from procurement.core.urls import build_absolute_url

logger = logging.getLogger(__name__)

PRINT_ROUTES = {
    "purchase-order-print": "/purchase-orders/{uuid}/print",
    "change-order-print": "/change-orders/{uuid}/print",
    "estimate-print": "/estimates/{uuid}/print",
    "bill-entry-print": "/bill-entries/{uuid}/print",
}


class PrintLinks:
    def __init__(
        self,
        app_base_url: str | None,
        routes: dict[str, str] | None = None,
        opener: Callable[[str], object] = webbrowser.open_new_tab,
    ):
        self.app_base_url = app_base_url
        self.routes = dict(PRINT_ROUTES if routes is None else routes)
        self.opener = opener

    def resolve(self, target: str, query: dict[str, str] | None = None, **params: str) -> str:
        """Turn a route name or path into an absolute URL.

        An unknown route name, or a named route missing one of its
        parameters, falls back to ``target`` as given. Without a base URL the
        relative path is returned.
        """
        template = self.routes.get(target)
        if template is None and not target.startswith("/"):
            logger.warning("Unknown print route %r", target)
            return target
        try:
            path = template.format(**params) if template is not None else target
        except KeyError as exc:
            logger.warning("Print route %r is missing parameter %s", target, exc)
            return target
        try:
            return build_absolute_url(self.app_base_url or "", path, query)
        except ValueError as exc:
            logger.warning("Could not resolve print link %r: %s", target, exc)
            return path

    def open(self, target: str, query: dict[str, str] | None = None, **params: str) -> str:
        url = self.resolve(target, query, **params)
        self.opener(url)
        return url
