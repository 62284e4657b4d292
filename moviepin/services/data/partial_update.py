"""
Partial Update - PATCH semantics for movie records

A PATCH body is first parsed into typed field changes, one variant per
mutable field, then applied to a copy of the stored movie which is
validated again as a whole before anything is persisted.
"""

from typing import Annotated, Any, List, Literal, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr, TypeAdapter, ValidationError

from moviepin.models import MovieSchema, RFC3339Datetime

MUTABLE_FIELDS = ("title", "release_date", "genre", "director", "description")


class PartialUpdateError(ValueError):
    """Raised when a PATCH body cannot be applied, naming the offending field"""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"invalid value for field {field}: {reason}")


class _FieldChange(BaseModel):
    model_config = ConfigDict(frozen=True)


class TitleChange(_FieldChange):
    field: Literal["title"] = "title"
    value: StrictStr


class ReleaseDateChange(_FieldChange):
    field: Literal["release_date"] = "release_date"
    value: RFC3339Datetime


class GenreChange(_FieldChange):
    field: Literal["genre"] = "genre"
    value: StrictStr


class DirectorChange(_FieldChange):
    field: Literal["director"] = "director"
    value: StrictStr


class DescriptionChange(_FieldChange):
    field: Literal["description"] = "description"
    value: StrictStr


FieldChange = Annotated[
    Union[TitleChange, ReleaseDateChange, GenreChange, DirectorChange, DescriptionChange],
    Field(discriminator="field"),
]

_field_change = TypeAdapter(FieldChange)


def _first_error(exc: ValidationError) -> str:
    return exc.errors()[0]["msg"]


def parse_changes(payload: Mapping[str, Any]) -> List[FieldChange]:
    """
    Turn a decoded PATCH body into field changes, in body order.

    Unknown keys are ignored. The first value of the wrong type raises
    PartialUpdateError for that field.
    """
    changes = []
    for key, value in payload.items():
        if key not in MUTABLE_FIELDS:
            continue
        try:
            changes.append(_field_change.validate_python({"field": key, "value": value}))
        except ValidationError as e:
            raise PartialUpdateError(key, _first_error(e)) from e
    return changes


def apply_changes(movie: MovieSchema, changes: List[FieldChange]) -> MovieSchema:
    """Apply changes to a copy of ``movie`` and validate the result"""
    merged = movie.model_dump()
    for change in changes:
        merged[change.field] = change.value

    try:
        return MovieSchema.model_validate(merged)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "movie"
        raise PartialUpdateError(field, error["msg"]) from e


def merge_partial_movie(movie: MovieSchema, payload: Mapping[str, Any]) -> MovieSchema:
    return apply_changes(movie, parse_changes(payload))
