import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def _as_utc(value: datetime.datetime) -> datetime.datetime:
    # BSON dates carry no zone; anything stored by this service is UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.UTC)
    return value.astimezone(datetime.UTC)

UtcDatetime = Annotated[datetime.datetime, AfterValidator(_as_utc)]


class CamelModel(BaseModel):
    # snake_case in Python and MongoDB, camelCase on the wire. Enums are kept as plain strings for BSON.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, use_enum_values=True)
