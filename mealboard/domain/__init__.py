"""Pure domain types for the menu lifecycle and the vote ledger."""

from mealboard.domain.menu_state import DraftMenu, MenuState, PublishedMenu
from mealboard.domain.vote_transition import VoteTransition, resolve_vote

__all__ = ["DraftMenu", "PublishedMenu", "MenuState", "VoteTransition", "resolve_vote"]
