"""Favorites API."""

from .models import Episode, parse_as
from .transport import ApiMixin


class FavoritesMixin(ApiMixin):
    """Favorite episodes of the account."""

    username: str

    def get_favorite_episodes(self) -> list[Episode]:
        """Get the episodes the user marked as favorite."""
        data = self._get(f"api/2/favorites/{self.username}.json")
        return parse_as(list[Episode], data)
