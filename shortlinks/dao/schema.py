"""Record schemas known to the record store DAOs.

A schema names the field whose value is unique across every record of a type
(the store rejects duplicates on insert) and the fields that may be used for
point lookups through `find_one()`.
"""

from dataclasses import dataclass, field

from shortlinks.constants import RecordType


@dataclass(frozen=True)
class RecordSchema:
    record_type: str
    unique_field: str
    indexed_fields: tuple[str, ...] = field(default_factory=tuple)

    def lookup_fields(self) -> tuple[str, ...]:
        return (self.unique_field, *self.indexed_fields)


SCHEMAS: dict[str, RecordSchema] = {
    RecordType.SHORT_LINKS: RecordSchema(
        record_type=RecordType.SHORT_LINKS,
        unique_field='code',
        indexed_fields=('target_url',),
    ),
}


def get_schema(record_type: str) -> RecordSchema:
    """Return the schema registered for `record_type`.

    Raises:
        ValueError: if no schema is registered for the record type.
    """
    try:
        return SCHEMAS[record_type]
    except KeyError:
        raise ValueError(f"Unknown record type '{record_type}'.") from None
