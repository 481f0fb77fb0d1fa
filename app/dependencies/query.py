from typing import Callable, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel

from app.schemas.common import parse_model

M = TypeVar("M", bound=BaseModel)


def query_model(model: Type[M]) -> Callable[[Request], M]:
    """Dependency validating the request's query string against ``model``.

    Empty parameters (``?type=``) are treated as not supplied.
    """

    def dependency(request: Request) -> M:
        params = {key: value for key, value in request.query_params.items() if value != ""}
        return parse_model(model, params)

    return dependency
