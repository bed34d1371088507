"""Base configuration class with strict validation."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """Base model that rejects unknown fields.

    Example:
        class SearchKnobs(StrictBaseModel):
            max_iterations: int

        SearchKnobs(max_iterations=100)  # OK
        SearchKnobs(max_iteratons=100)  # ValidationError: extra field
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
    )
