"""Shared base for records parsed from upstream JSON."""

from pydantic import BaseModel, ConfigDict


class Record(BaseModel):
    """Read-only record built fresh from one upstream response.

    The provider is loose about JSON types (serial numbers and flight
    ids arrive as numbers or strings), so numbers are accepted for
    string fields.  Unknown keys are ignored.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)
