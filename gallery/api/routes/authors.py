from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session
from gallery.core.auth import verify_session
from gallery.db.session import get_db
from gallery.services.author_service import AuthorService
from gallery.schemas.author import AuthorCreate, AuthorDelete, AuthorRead, AuthorUpdate
from gallery.core.logging import get_logger
from typing import Annotated
from starlette.status import (
    HTTP_200_OK,
    HTTP_201_CREATED,
)
router = APIRouter(tags=["authors"])

AdminSession = Annotated[dict[str, object] | None, Depends(verify_session)]


@router.get("", response_model=list[AuthorRead])
def list_authors(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
):
    logger = get_logger(__name__, request)
    logger.info("Listing authors")
    return AuthorService.list_authors(db)


@router.post("", response_model=AuthorRead, status_code=HTTP_201_CREATED)
def create_author(
    data: AuthorCreate,
    db: Annotated[Session, Depends(get_db)],
    _: AdminSession,
):
    return AuthorService.create_author(db, data)


@router.put("", response_model=AuthorRead)
def update_author(
    data: AuthorUpdate,
    db: Annotated[Session, Depends(get_db)],
    _: AdminSession,
):
    author = AuthorService.update_author(db, data)
    if author is None:
        # no row matched: success with an empty body
        return Response(status_code=HTTP_200_OK)
    return author


@router.delete("", response_class=PlainTextResponse)
def delete_author(
    data: AuthorDelete,
    db: Annotated[Session, Depends(get_db)],
    _: AdminSession,
):
    AuthorService.delete_author(db, data)
    return "Deleted"
