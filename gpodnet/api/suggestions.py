"""
Suggestions API.

Podcast recommendations computed from the account's subscriptions.
"""

from .models import Podcast, parse_as
from .transport import ApiMixin


class Suggestion(Podcast):
    """Suggested podcast. Identity is ``url`` alone."""


class SuggestionsMixin(ApiMixin):
    """Podcast suggestions for the authenticated account."""

    def retrieve_suggested_podcasts(self, max_results: int) -> list[Suggestion]:
        """
        Get suggested podcasts.

        Args:
            max_results: Maximum number of suggestions to return
        """
        data = self._get(f"suggestions/{max_results}.json")
        return parse_as(list[Suggestion], data)
