"""City Suggestions — autocomplete source for the allow-list editor."""

from fastapi import APIRouter, Query

from hidecod.core.city_catalog import suggest_cities
from hidecod.schemas.payment_customization import CitySuggestionResponse

router = APIRouter(prefix="/api/v1/cities", tags=["cities"])


@router.get("", response_model=list[CitySuggestionResponse])
async def list_city_suggestions(
    q: str = Query("", max_length=100),
    selected: list[str] | None = Query(None),
):
    """Catalog cities matching q, plus an 'Add' suggestion for new input."""
    return [
        CitySuggestionResponse(label=s.label, value=s.value, is_new=s.is_new)
        for s in suggest_cities(q, selected)
    ]
