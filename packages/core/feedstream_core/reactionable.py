"""Reaction bookkeeping for activity-like records.

A reactionable record carries three denormalized views of its reactions:

- ``user_own_reactions``: reactions of the current user, per kind, newest first;
- ``latest_reactions``: newest reactions of any user, per kind, newest first;
- ``reaction_counts``: total number of reactions per kind.

Every read and write goes through ``original()``. A repost answers with the
activity it wraps, so reacting to a repost updates the reposted activity.

Mutations are optimistic local updates applied in place. They never raise: a
missing entry degrades to a no-op and counts stop at zero. The next fetch from
the service replaces the views wholesale.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, Self

from pydantic import BaseModel, ConfigDict, Field

from feedstream_core.models import Reaction, ReactionKind

ReactionsByKind = dict[ReactionKind, list[Reaction]]
CountsByKind = dict[ReactionKind, int]


class Reactionable(Protocol):
    user_own_reactions: ReactionsByKind | None
    latest_reactions: ReactionsByKind | None
    reaction_counts: CountsByKind | None

    def original(self) -> Reactionable: ...


def _reactions_for(
    views: ReactionsByKind | None, kind: ReactionKind
) -> Sequence[Reaction]:
    if not views:
        return ()
    return views.get(kind) or ()


def _index_of(reactions: Sequence[Reaction], reaction_id: str) -> int | None:
    for idx, item in enumerate(reactions):
        if item.id == reaction_id:
            return idx
    return None


def _without(reactions: Sequence[Reaction], idx: int) -> list[Reaction]:
    return [*reactions[:idx], *reactions[idx + 1 :]]


# Access


def user_own_reactions_count(record: Reactionable, kind: ReactionKind) -> int:
    return len(_reactions_for(record.original().user_own_reactions, kind))


def has_user_own_reaction(record: Reactionable, kind: ReactionKind) -> bool:
    return user_own_reactions_count(record, kind) > 0


def user_own_reaction(record: Reactionable, kind: ReactionKind) -> Reaction | None:
    """Most recent reaction of the current user with the given kind."""
    reactions = _reactions_for(record.original().user_own_reactions, kind)
    return reactions[0] if reactions else None


def latest_reactions_for(
    record: Reactionable, kind: ReactionKind
) -> Sequence[Reaction]:
    return _reactions_for(record.original().latest_reactions, kind)


def reaction_count(record: Reactionable, kind: ReactionKind) -> int:
    counts = record.original().reaction_counts or {}
    return int(counts.get(kind, 0))


# Managing


def add_user_own_reaction(record: Reactionable, reaction: Reaction) -> None:
    """Record a new reaction of the current user.

    The reaction goes to the front of both reaction lists for its kind and the
    kind's count grows by one. There is no deduplication: adding the same
    reaction twice stores it twice.
    """
    target = record.original()
    kind = reaction.kind

    own = target.user_own_reactions if target.user_own_reactions is not None else {}
    latest = target.latest_reactions if target.latest_reactions is not None else {}
    counts = target.reaction_counts if target.reaction_counts is not None else {}

    own[kind] = [reaction, *own.get(kind, [])]
    latest[kind] = [reaction, *latest.get(kind, [])]
    counts[kind] = int(counts.get(kind, 0)) + 1

    target.user_own_reactions = own
    target.latest_reactions = latest
    target.reaction_counts = counts


def remove_user_own_reaction(record: Reactionable, reaction: Reaction) -> bool:
    """Remove a reaction previously recorded as the current user's own.

    Matching is by ``id`` within ``reaction.kind``. Nothing changes unless the
    reaction is found among the user's own reactions; only then is it also
    dropped from the latest reactions and the kind's count decremented (never
    below zero). Returns whether the reaction was found.
    """
    target = record.original()
    kind = reaction.kind

    own = _reactions_for(target.user_own_reactions, kind)
    own_idx = _index_of(own, reaction.id)
    if own_idx is None:
        return False
    target.user_own_reactions[kind] = _without(own, own_idx)  # type: ignore[index]

    latest = _reactions_for(target.latest_reactions, kind)
    latest_idx = _index_of(latest, reaction.id)
    if latest_idx is not None:
        target.latest_reactions[kind] = _without(latest, latest_idx)  # type: ignore[index]

    counts = target.reaction_counts
    if counts is not None:
        count = counts.get(kind)
        if count is not None and count > 0:
            counts[kind] = count - 1
    return True


class ReactionableModel(BaseModel):
    """Base model for records that take part in reaction bookkeeping.

    Subclasses whose reactions live on another record override ``original()``.
    Implementations must not let ``original()`` form a cycle.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    user_own_reactions: ReactionsByKind | None = Field(
        default=None, alias="own_reactions"
    )
    latest_reactions: ReactionsByKind | None = None
    reaction_counts: CountsByKind | None = None

    def original(self) -> Self:
        return self

    def has_user_own_reaction(self, kind: ReactionKind) -> bool:
        return has_user_own_reaction(self, kind)

    def user_own_reactions_count(self, kind: ReactionKind) -> int:
        return user_own_reactions_count(self, kind)

    def user_own_reaction(self, kind: ReactionKind) -> Reaction | None:
        return user_own_reaction(self, kind)

    def latest_reactions_for(self, kind: ReactionKind) -> Sequence[Reaction]:
        return latest_reactions_for(self, kind)

    def reaction_count(self, kind: ReactionKind) -> int:
        return reaction_count(self, kind)

    def add_user_own_reaction(self, reaction: Reaction) -> None:
        add_user_own_reaction(self, reaction)

    def remove_user_own_reaction(self, reaction: Reaction) -> bool:
        return remove_user_own_reaction(self, reaction)
