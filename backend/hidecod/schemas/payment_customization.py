"""Payment Customization Schemas — request/response models for the admin API.

Invariants:
    - ConfigurationUpdate.allowed_cities accepts a JSON array or comma-separated text
    - Stored lists are trimmed and de-blanked before reaching the service
    - Field aliases match the camelCase keys of the stored metafield document

Design Decisions:
    - field_validator reuses parse_list_field: one parsing rule for form input,
      stored config, and the function host
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hidecod.core.normalize import parse_list_field


class CustomizationSummary(BaseModel):
    id: str
    numeric_id: str
    title: str
    enabled: bool


class CustomizationList(BaseModel):
    customizations: list[CustomizationSummary]


class CustomizationCreated(BaseModel):
    id: str
    numeric_id: str
    function_id: str


class ConfigurationUpdate(BaseModel):
    """Allow-list edit. An empty list is valid: the rule becomes a no-op."""
    model_config = ConfigDict(populate_by_name=True)

    allowed_cities: list[str] = Field(default_factory=list, alias="allowedCities")
    cod_keywords: list[str] | None = Field(None, alias="codKeywords")

    @field_validator("allowed_cities", "cod_keywords", mode="before")
    @classmethod
    def parse_list(cls, v: object) -> list[str] | None:
        if v is None:
            return None
        if isinstance(v, (list, str)):
            return parse_list_field(v)
        raise ValueError("must be a list of strings or comma-separated text")

    @field_validator("allowed_cities", "cod_keywords")
    @classmethod
    def limit_entry_length(cls, v: list[str] | None) -> list[str] | None:
        if v and any(len(x) > 100 for x in v):
            raise ValueError("entries must be at most 100 characters")
        return v


class ConfigurationResponse(BaseModel):
    id: str
    numeric_id: str
    title: str | None = None
    enabled: bool | None = None
    allowed_cities: list[str]
    cod_keywords: list[str]


class CitySuggestionResponse(BaseModel):
    label: str
    value: str
    is_new: bool = False
