from .api import ApiError, AuthorsClient
from .controller import GalleryController
from .identity import IdentityWidget, User
from .state import GalleryState, reduce

__all__ = [
    "ApiError",
    "AuthorsClient",
    "GalleryController",
    "GalleryState",
    "IdentityWidget",
    "User",
    "reduce",
]
