"""Current-user query outcomes and the page states they drive."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, TypeVar, assert_never

from rich.text import Text

from danclean.api import ApiClient, ApiError
from danclean.models import User

LOADING_TEXT = "Cargando..."
EMPTY_TEXT = "Sin datos"

T = TypeVar("T")


@dataclass(frozen=True)
class Loading:
    """The current-user request is in flight."""


@dataclass(frozen=True)
class Failed:
    message: str


@dataclass(frozen=True)
class Empty:
    """The request succeeded but no user record came back."""


@dataclass(frozen=True)
class Ready:
    user: User


PageState = Loading | Failed | Empty | Ready


def render_page_state(state: PageState, on_ready: Callable[[User], T]) -> str | T:
    """Return what a page shows for ``state``; only ``Ready`` reaches ``on_ready``."""
    match state:
        case Loading():
            return LOADING_TEXT
        case Failed(message=message):
            return f"Error: {message}"
        case Empty():
            return EMPTY_TEXT
        case Ready(user=user):
            return on_ready(user)
        case _:
            assert_never(state)


def render_page_state_text(state: PageState, on_ready: Callable[[User], Text | str]) -> Text:
    """Rich rendition of ``render_page_state`` with state-specific styling."""
    rendered = render_page_state(state, on_ready)
    if isinstance(rendered, Text):
        return rendered
    if isinstance(state, Loading):
        return Text(rendered, style="dim")
    if isinstance(state, Failed):
        return Text(rendered, style="bold #ffb3b3")
    return Text(rendered)


def query_current_user(client: ApiClient) -> PageState:
    """Run the current-user request and fold its outcome into a terminal page state."""
    try:
        user = client.fetch_me()
    except ApiError as exc:
        return Failed(exc.message)
    if user is None:
        return Empty()
    return Ready(user)
