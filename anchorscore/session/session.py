"""Ranking session: the boundary between user actions and the core.

Each user gesture maps to one method. Mutations go through the ItemStore;
generate() runs one interpolation pass over a snapshot and commits it with
a single replace_all, so a rejected pass leaves the list as it was.
"""

import uuid
from collections.abc import Sequence

import structlog

from anchorscore.fetch.client import AniListClient
from anchorscore.interpolation.constants import SCORE_MAX, SCORE_MIN
from anchorscore.interpolation.engine import ScoreInterpolator
from anchorscore.interpolation.models import InterpolationResult
from anchorscore.session.errors import FetchInProgressError, ScoreOutOfRangeError
from anchorscore.session.state_machine import SessionState, SessionStateMachine
from anchorscore.store.models import Item
from anchorscore.store.store import ItemStore


logger = structlog.get_logger()


def sort_by_score(items: Sequence[Item]) -> list[Item]:
    """Order items by descending score, unscored items last.

    The sort is stable, so ties keep the order they arrived in.
    """
    return sorted(
        items,
        key=lambda item: (item.score is not None, item.score or 0.0),
        reverse=True,
    )


class RankingSession:
    """One user's in-memory ranking session."""

    def __init__(
        self,
        client: AniListClient | None = None,
        store: ItemStore | None = None,
        session_id: str | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            client: Client used by fetch(); required only for fetching.
            store: Item store; a new empty one by default.
            session_id: Session identifier for logging.
        """
        self._session_id = session_id or str(uuid.uuid4())
        self._client = client
        self._store = (
            store if store is not None else ItemStore(session_id=self._session_id)
        )
        self._state_machine = SessionStateMachine(
            self._session_id,
            initial_state=SessionState.READY if len(self._store) else SessionState.EMPTY,
        )
        self._interpolator = ScoreInterpolator(session_id=self._session_id)
        self._log = logger.bind(
            component="session",
            session_id=self._session_id,
        )

    @property
    def session_id(self) -> str:
        """Get the session identifier."""
        return self._session_id

    @property
    def state(self) -> SessionState:
        """Get the current session state."""
        return self._state_machine.state

    @property
    def store(self) -> ItemStore:
        """Get the item store."""
        return self._store

    def items(self) -> tuple[Item, ...]:
        """Current ordered list."""
        return self._store.snapshot()

    def fetch(self, user_name: str) -> tuple[Item, ...]:
        """Fetch a user's list, sort it and install it.

        Args:
            user_name: AniList user name.

        Returns:
            The installed list.

        Raises:
            FetchInProgressError: If another fetch has not finished.
            FetchFailedError: If retrieval failed; the list is unchanged.
        """
        if self._client is None:
            msg = "RankingSession.fetch needs an AniListClient"
            raise ValueError(msg)
        if self.state == SessionState.FETCHING:
            raise FetchInProgressError(self._session_id)

        previous_state = self.state
        self._state_machine.to_fetching()
        try:
            fetched = self._client.fetch_list(user_name)
        except Exception:
            self._state_machine.transition_to(previous_state)
            raise

        # The list is installed before listeners run, so a listener error
        # still leaves the session READY.
        try:
            self._store.replace_all(sort_by_score(fetched))
        finally:
            self._state_machine.to_ready()
        self._log.info("session_list_fetched", user_name=user_name, items=len(fetched))
        return self._store.snapshot()

    def load(self, items: Sequence[Item]) -> None:
        """Install an already ordered list (e.g. read from a file)."""
        self._store.replace_all(items)
        self._state_machine.to_ready()

    def toggle_pin(self, item_id: int) -> Item:
        """Flip an item's pin flag.

        Raises:
            ItemNotFoundError: If no item has this id.
        """
        return self._store.toggle_pin(item_id)

    def set_pinned(self, item_id: int, pinned: bool) -> Item:
        """Set an item's pin flag explicitly."""
        return self._store.update_at(item_id, lambda item: item.with_pinned(pinned))

    def set_score(self, item_id: int, score: float) -> Item:
        """Edit an item's score by hand, keeping its position.

        Raises:
            ScoreOutOfRangeError: If score is outside the 0-10 scale.
            ItemNotFoundError: If no item has this id.
        """
        if not SCORE_MIN <= score <= SCORE_MAX:
            raise ScoreOutOfRangeError(score, SCORE_MIN, SCORE_MAX)
        return self._store.set_score(item_id, score)

    def reorder(self, from_position: int, to_position: int) -> None:
        """Move an item (drag and drop).

        Raises:
            PositionOutOfRangeError: If either position is outside the list.
        """
        self._store.move_item(from_position, to_position)

    def generate(self) -> InterpolationResult:
        """Interpolate scores over the current list and commit the result.

        Returns:
            The result of the pass.

        Raises:
            InterpolationPreconditionError: If there is nothing to generate;
                the list is unchanged.
        """
        result = self._interpolator.run(self._store.snapshot())
        self._store.replace_all(result.items)
        return result
