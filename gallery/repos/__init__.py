from .author_repo import AuthorRepository

__all__ = ["AuthorRepository"]
