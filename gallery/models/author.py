from sqlalchemy import CheckConstraint, Constraint, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column
import uuid
from gallery.models.base import Base

#Author
class Author(Base):
    __tablename__: str = "authors"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    birth_date: Mapped[str | None] = mapped_column(Text, nullable=True)
    death_date: Mapped[str | None] = mapped_column(Text, nullable=True)
    biography: Mapped[str] = mapped_column(Text, nullable=False)
    # plain URL or an inlined data: URI
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__: tuple[Constraint, ...] = (
        CheckConstraint("length(name) > 0", name="authors_name_nonempty"),
    )
