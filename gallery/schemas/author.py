from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import ClassVar

import uuid

# Wire names are camelCase (birthDate, imageUrl); snake_case is accepted too
_CAMEL: ConfigDict = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Author writable fields. None of them is checked here: the store enforces
# NOT NULL on name/biography and a failed insert surfaces as a server error.
class AuthorFields(BaseModel):
    name: str | None = None
    birth_date: str | None = None
    death_date: str | None = None
    biography: str | None = None
    image_url: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(**_CAMEL, extra="ignore")

    def submitted(self) -> dict[str, object]:
        """Only the fields present in the request body, by column name."""
        return self.model_dump(exclude_unset=True, exclude={"id"})


# Author create schema; an incoming `id` is never accepted
class AuthorCreate(AuthorFields):
    pass


# Author update schema; `id` selects the row, the rest is set as given
class AuthorUpdate(AuthorFields):
    id: uuid.UUID


# Author delete schema
class AuthorDelete(BaseModel):
    id: uuid.UUID


# Author read schema
class AuthorRead(BaseModel):
    id: uuid.UUID
    name: str
    birth_date: str | None = None
    death_date: str | None = None
    biography: str
    image_url: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(**_CAMEL, from_attributes=True)
