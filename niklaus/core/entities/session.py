"""
Session state entities.

One SessionState value describes everything a signed-in user sees: profile,
entity selection, cart, support chat and the current view.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from niklaus.core.entities.cart import Cart
from niklaus.core.entities.catalog import Entity
from niklaus.core.entities.chat import SupportChat
from niklaus.core.entities.profile import Profile


class View(str, Enum):
    """Top-level page of the client."""

    CATALOG = "catalog"
    HISTORY = "history"
    NEWS = "news"
    SUPPORT = "support"
    BACKOFFICE = "backoffice"


class EntitySelection(BaseModel):
    """
    Selected entity plus the chooser flag.

    "Nothing selected yet" and "chooser forced open" are distinct states;
    both route the session to entity selection.
    """

    model_config = ConfigDict(frozen=True)

    selected: Entity | None = None
    chooser_open: bool = False

    @property
    def needs_selection(self) -> bool:
        return self.selected is None or self.chooser_open

    @property
    def selected_id(self) -> str | None:
        return self.selected.id if self.selected is not None else None


class SessionState(BaseModel):
    """Complete per-user session state."""

    model_config = ConfigDict(frozen=True)

    profile: Profile | None = None
    selection: EntitySelection = EntitySelection()
    cart: Cart = Cart()
    chat: SupportChat = SupportChat()
    view: View = View.CATALOG
    submitting: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.profile is not None
