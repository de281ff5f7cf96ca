# ABOUTME: FavoritesStore: per-user favorite books over one shared persisted collection.
# ABOUTME: At most one favorite per (user, book), enforced by scanning before insert.

import uuid
from dataclasses import dataclass

from shelves.clock import Clock, iso_timestamp, utc_now
from shelves.library.mapping import favorite_from_dict, favorite_to_dict
from shelves.library.types import UserFavorite
from shelves.storage.collection import JsonCollection
from shelves.storage.keys import FAVORITES_KEY
from shelves.storage.port import KeyValueStore


@dataclass
class ToggleResult:
    """Outcome of toggling a favorite. favorite is set only when one was added."""

    is_favorite: bool
    favorite: UserFavorite | None = None


class FavoritesStore:
    """Favorites for all users, stored under a single key."""

    def __init__(self, store: KeyValueStore, *, clock: Clock = utc_now) -> None:
        self._collection = JsonCollection(
            store, FAVORITES_KEY, favorite_from_dict, favorite_to_dict
        )
        self._clock = clock

    def all_favorites(self) -> list[UserFavorite]:
        return self._collection.load_or_empty()

    def user_favorites(self, user_id: str) -> list[UserFavorite]:
        return [fav for fav in self.all_favorites() if fav.user_id == user_id]

    def favorite_book_ids(self, user_id: str) -> list[str]:
        return [fav.book_id for fav in self.user_favorites(user_id)]

    def is_favorite(self, user_id: str, book_id: str) -> bool:
        return any(fav.book_id == book_id for fav in self.user_favorites(user_id))

    def count_for(self, user_id: str) -> int:
        return len(self.user_favorites(user_id))

    def add(self, user_id: str, book_id: str) -> UserFavorite:
        """Favorite a book. Returns the existing entry if it is already a favorite."""
        favorites = self.all_favorites()
        existing = next(
            (fav for fav in favorites if fav.user_id == user_id and fav.book_id == book_id),
            None,
        )
        if existing is not None:
            return existing

        favorite = UserFavorite(
            id=f"fav-{uuid.uuid4().hex[:12]}",
            user_id=user_id,
            book_id=book_id,
            date_added=iso_timestamp(self._clock()),
        )
        favorites.append(favorite)
        self._collection.save(favorites)
        return favorite

    def remove(self, user_id: str, book_id: str) -> bool:
        """Unfavorite a book. Returns False if it was not a favorite."""
        favorites = self.all_favorites()
        remaining = [
            fav for fav in favorites if not (fav.user_id == user_id and fav.book_id == book_id)
        ]
        if len(remaining) == len(favorites):
            return False
        self._collection.save(remaining)
        return True

    def toggle(self, user_id: str, book_id: str) -> ToggleResult:
        """Add the favorite if absent, remove it if present."""
        if self.is_favorite(user_id, book_id):
            self.remove(user_id, book_id)
            return ToggleResult(is_favorite=False)
        return ToggleResult(is_favorite=True, favorite=self.add(user_id, book_id))

    def clear_user(self, user_id: str) -> None:
        """Drop every favorite belonging to user_id."""
        remaining = [fav for fav in self.all_favorites() if fav.user_id != user_id]
        self._collection.save(remaining)
