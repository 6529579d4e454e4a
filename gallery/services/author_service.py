from sqlalchemy.orm import Session
from gallery.core.logging import get_logger
from gallery.models.author import Author
from gallery.repos.author_repo import AuthorRepository
from gallery.schemas.author import AuthorCreate, AuthorDelete, AuthorUpdate

logger = get_logger(__name__)


class AuthorService:
    @staticmethod
    # List authors
    def list_authors(db: Session) -> list[Author]:
        return AuthorRepository.list(db)

    @staticmethod
    # Create author; the store assigns the id
    def create_author(db: Session, data: AuthorCreate) -> Author:
        values = data.submitted()
        values.pop("id", None)
        author = AuthorRepository.create(db, values)
        logger.info("Created author %s", author.id)
        return author

    @staticmethod
    # Update author; an unknown id updates nothing and returns None
    def update_author(db: Session, data: AuthorUpdate) -> Author | None:
        values = data.submitted()
        if not values:
            raise ValueError("No values to set")

        author = AuthorRepository.update(db, data.id, values)
        if author is None:
            logger.info("Update matched no author %s", data.id)
        else:
            logger.info("Updated author %s (%s)", data.id, ", ".join(sorted(values)))
        return author

    @staticmethod
    # Delete author; deleting an unknown id is a no-op
    def delete_author(db: Session, data: AuthorDelete) -> None:
        removed = AuthorRepository.delete(db, data.id)
        logger.info("Deleted author %s (rows=%d)", data.id, removed)
