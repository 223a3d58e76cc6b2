__all__ = [
    "Reaction",
    "ReactionKind",
    "Reactionable",
    "ReactionableModel",
    "add_user_own_reaction",
    "has_user_own_reaction",
    "latest_reactions_for",
    "reaction_count",
    "remove_user_own_reaction",
    "user_own_reaction",
    "user_own_reactions_count",
]

from feedstream_core.models import Reaction, ReactionKind
from feedstream_core.reactionable import (
    Reactionable,
    ReactionableModel,
    add_user_own_reaction,
    has_user_own_reaction,
    latest_reactions_for,
    reaction_count,
    remove_user_own_reaction,
    user_own_reaction,
    user_own_reactions_count,
)
