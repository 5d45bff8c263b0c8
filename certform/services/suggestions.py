"""
Course Suggestion Service - autocomplete for the course code field.

A lookup is issued for every change of the field. Lookups are never
cancelled, so responses can arrive out of order; each lookup takes a
generation number and a response is applied only if no newer lookup has
started since. Failures clear the list and are logged, never shown.
"""

from certform.errors import CertFormError
from certform.logging_config import get_logger, log_with_context

logger = get_logger("suggest")


class CourseSuggestions:
    """Holds the current suggestion list for one form."""

    def __init__(self, api):
        self.api = api
        self.items = []
        self._generation = 0

    async def lookup(self, query: str) -> bool:
        """
        Fetch suggestions for the raw field value.

        Returns:
            True if this lookup's result (or failure) was applied,
            False if it was superseded by a newer lookup.
        """
        self._generation += 1
        generation = self._generation

        try:
            items = await self.api.search_courses(query)
        except CertFormError as e:
            if generation != self._generation:
                return False
            log_with_context(logger, "ERROR", "Error fetching course suggestions: {}".format(e),
                             context={"query": query}, exc_info=e)
            self.items = []
            return True

        if generation != self._generation:
            log_with_context(logger, "DEBUG", "Discarding stale suggestions",
                             context={"query": query},
                             extra_data={"generation": generation, "latest": self._generation})
            return False

        self.items = list(items)
        log_with_context(logger, "DEBUG", "Loaded {} course suggestions".format(len(self.items)),
                         context={"query": query})
        return True

    def dismiss(self):
        """Clear the list (interaction outside the suggestion list)."""
        self._generation += 1
        self.items = []

    def __len__(self):
        return len(self.items)
