# API Utilities - DRY Helpers
from idlogic.api.utils.db_helpers import get_by_slug, validate_unique
from idlogic.api.utils.pagination import paginate_query, paginate_response, apply_search_filter
from idlogic.api.utils.updates import update_entity

__all__ = [
    # db_helpers
    "get_by_slug",
    "validate_unique",
    # pagination
    "paginate_query",
    "paginate_response",
    "apply_search_filter",
    # updates
    "update_entity",
]
