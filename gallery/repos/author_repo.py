import uuid
from typing import cast
from sqlalchemy import delete, select, update
from sqlalchemy.engine import CursorResult
from sqlalchemy.orm import Session

from gallery.models.author import Author


class AuthorRepository:

    @staticmethod
    # List all authors, in the order the store returns them
    def list(db: Session) -> list[Author]:
        return list(db.scalars(select(Author)).all())

    @staticmethod
    # Create a new author; the id is assigned on insert
    def create(db: Session, values: dict[str, object]) -> Author:
        author = Author(**values)
        db.add(author)
        db.commit()
        db.refresh(author)
        return author

    @staticmethod
    # Set exactly the given columns on the matching row
    def update(db: Session, author_id: uuid.UUID, values: dict[str, object]) -> Author | None:
        stmt = (
            update(Author)
            .where(Author.id == author_id)
            .values(**values)
            .returning(Author)
            .execution_options(synchronize_session=False)
        )
        author = db.scalars(stmt).first()
        db.commit()
        if author is not None:
            db.refresh(author)
        return author

    @staticmethod
    # Delete an author by ID; returns the number of rows removed
    def delete(db: Session, author_id: uuid.UUID) -> int:
        result = cast(CursorResult[object], db.execute(delete(Author).where(Author.id == author_id)))
        db.commit()
        return result.rowcount
