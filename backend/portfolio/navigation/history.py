from __future__ import annotations

import logging
from typing import List, Optional

from .routes import View, build_path, legacy_redirect, parse_route, resolve_url


logger = logging.getLogger(__name__)


class Navigator:
    """In-process model of browser history for the public site.

    Holds the current view and a stack of pushed URLs. Every navigation that
    lands on a view counts as a scroll reset, so templates and tests can rely
    on the page starting at the top.

    The server renders plain links, so nothing in the request path drives this
    class. It pins down the contract the template link helpers follow:
    ``build_path`` gives the URL a link pushes and ``resolve_url`` gives the
    view a pushed or popped URL lands on.
    """

    def __init__(self, url: str = "/") -> None:
        self.entries: List[str] = []
        self.index = -1
        self.scroll_resets = 0
        self.view: View = resolve_url("/")
        self.load(url)

    @property
    def current_url(self) -> Optional[str]:
        if self.index < 0:
            return None
        return self.entries[self.index]

    def _show(self, view: View) -> View:
        self.view = view
        self.scroll_resets += 1
        return view

    def _push(self, url: str) -> None:
        del self.entries[self.index + 1:]
        self.entries.append(url)
        self.index = len(self.entries) - 1

    def replace(self, url: str) -> None:
        if self.index < 0:
            self._push(url)
        else:
            self.entries[self.index] = url

    def load(self, url: str) -> View:
        path, _, query = url.partition("?")
        target = legacy_redirect(path, query)
        if target is not None:
            logger.debug("legacy redirect %s -> %s", url, target)
            url = target
        self.replace(url)
        return self._show(resolve_url(url))

    def navigate(self, page: str, arg: Optional[str] = None) -> View:
        target = build_path(page, arg)
        if target != self.current_url:
            self._push(target)
        return self._show(parse_route(page.lstrip("/"), arg))

    def back(self) -> View:
        if self.index > 0:
            self.index -= 1
        return self._show(resolve_url(self.entries[self.index]))

    def forward(self) -> View:
        if self.index < len(self.entries) - 1:
            self.index += 1
        return self._show(resolve_url(self.entries[self.index]))
