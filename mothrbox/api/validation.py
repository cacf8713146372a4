"""Request body validation for Flask endpoints.

@validate_request inspects the view function's signature. Parameters that
Flask supplies from the URL (view_args) are passed through unchanged. The
first remaining parameter must be annotated with a Pydantic model; the JSON
body (or form data, for HTML forms) is validated against it and the parsed
model is passed in its place.
"""

import inspect
import logging
from functools import wraps

from flask import request
from pydantic import BaseModel, ValidationError as PydanticValidationError

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)


def _format_errors(exc: PydanticValidationError) -> list[dict]:
    """Flatten Pydantic errors into field/message/expected_type dicts."""
    errors = []
    for err in exc.errors():
        errors.append({
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "expected_type": err["type"],
        })
    return errors


def _request_payload() -> dict:
    payload = request.get_json(silent=True)
    if payload is None:
        payload = request.form.to_dict()
    return payload


def validate_request(f):
    """
    Decorator that validates the request body against a Pydantic model.

    Raises:
        TypeError: At decoration time if the function has no parameters or
            its first parameter lacks a type annotation; at request time if
            the body parameter is not annotated with a BaseModel subclass
        ValidationError: If the body does not match the model

    Example:
    ```python
    @auth_bp.post("/auth/login")
    @validate_request
    def login(data: LoginRequest):
        ...
    ```
    """
    signature = inspect.signature(f)
    params = list(signature.parameters.values())
    if not params:
        raise TypeError(f"{f.__name__} has no parameters to validate")
    if params[0].annotation is inspect.Parameter.empty:
        raise TypeError(f"First parameter of {f.__name__} lacks a type annotation")

    @wraps(f)
    def wrapper(*args, **kwargs):
        view_args = request.view_args or {}
        for param in params:
            if param.name in view_args or param.name in kwargs:
                continue

            model = param.annotation
            if not (inspect.isclass(model) and issubclass(model, BaseModel)):
                raise TypeError(
                    f"Body parameter '{param.name}' of {f.__name__} must be "
                    f"annotated with a Pydantic BaseModel subclass"
                )

            payload = _request_payload()
            if not isinstance(payload, dict):
                raise ValidationError(
                    "Request body must be a JSON object",
                    {"model": model.__name__, "received": payload, "errors": []}
                )

            try:
                kwargs[param.name] = model.model_validate(payload)
            except PydanticValidationError as e:
                logger.info(f"Validation failed for {model.__name__}")
                received = {k: v for k, v in payload.items() if k != "password"}
                raise ValidationError(
                    "Invalid request body",
                    {"model": model.__name__, "received": received, "errors": _format_errors(e)}
                )
            break

        return f(*args, **kwargs)

    return wrapper
