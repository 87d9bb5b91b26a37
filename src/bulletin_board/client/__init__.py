"""Async client used by views to read and change board data."""

from bulletin_board.client.api import BulletinBoardClient
from bulletin_board.client.cache import QueryCache
from bulletin_board.client.errors import BoardClientError, BoardValidationError
from bulletin_board.client.layout import LayoutPreferenceCache
from bulletin_board.client.session import ClientSession

__all__ = [
    "BoardClientError",
    "BoardValidationError",
    "BulletinBoardClient",
    "ClientSession",
    "LayoutPreferenceCache",
    "QueryCache",
]
