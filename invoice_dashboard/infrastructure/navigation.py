"""Navigation — ends a request by redirecting the client to another route.

Invariants:
    - redirect() never returns; it raises NavigationRedirect
    - The API layer turns NavigationRedirect into 303 See Other + Location

Design Decisions:
    - Exception over returning a RedirectResponse: the action decides to navigate
      deep inside the pipeline, and nothing after redirect() may run
    - 303 so the browser follows a form POST with a GET
"""

from typing import NoReturn


class NavigationRedirect(Exception):
    """Control-flow signal: send the client to `path`."""

    def __init__(self, path: str, status_code: int = 303):
        super().__init__(f"Redirect to {path}")
        self.path = path
        self.status_code = status_code


class RedirectNavigator:
    """Navigator implementation used by the HTTP routes."""

    def redirect(self, path: str) -> NoReturn:
        raise NavigationRedirect(path)
