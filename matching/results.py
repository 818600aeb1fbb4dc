"""
Tagged results returned by the retrievers and server actions.

Expected business conditions (not found, not allowed, bad input, storage down)
come back as Err; only programming errors raise.

Usage:
    result = retrieve_projects(store, query, page=1, page_size=12)
    if result:
        page = result.data
    else:
        print(result.kind, result.message)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    VALIDATION_ERROR = "validation_error"
    STORAGE_UNAVAILABLE = "storage_unavailable"
    CONFLICT = "conflict"


@dataclass
class Ok(Generic[T]):
    data: T
    success: bool = True

    def __bool__(self) -> bool:
        return True


@dataclass
class Err:
    kind: ErrorKind
    message: str = ""
    success: bool = False

    def __bool__(self) -> bool:
        return False


Result = Union[Ok[Any], Err]


def unauthorized(message: str = "Unauthorized") -> Err:
    return Err(ErrorKind.UNAUTHORIZED, message)


def forbidden(message: str) -> Err:
    return Err(ErrorKind.FORBIDDEN, message)


def not_found(message: str) -> Err:
    return Err(ErrorKind.NOT_FOUND, message)


def invalid(message: str) -> Err:
    return Err(ErrorKind.VALIDATION_ERROR, message)


def storage_unavailable(message: str) -> Err:
    return Err(ErrorKind.STORAGE_UNAVAILABLE, message)
