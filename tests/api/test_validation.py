"""Tests for the @validate_request decorator."""

import pytest
from flask import jsonify, request
from pydantic import BaseModel, Field

from mothrbox.api.validation import validate_request


class MockCreateRequest(BaseModel):
    """Test schema for request body validation."""
    name: str = Field(..., description="Name field")
    amount: float = Field(..., description="Amount field")
    category: str | None = Field(default=None, description="Optional category")


@pytest.fixture
def validation_client(app):
    """Test client with validation test routes registered."""

    @app.post("/test/valid")
    @validate_request
    def route_valid(data: MockCreateRequest):
        return jsonify({"name": data.name, "amount": data.amount, "category": data.category}), 200

    @app.put("/test/combined/<item_id>")
    @validate_request
    def route_combined(item_id: str, data: MockCreateRequest):
        return jsonify({"item_id": item_id, "name": data.name}), 200

    with app.test_client() as client:
        yield client


def test_validates_valid_request_body(validation_client):
    response = validation_client.post(
        "/test/valid",
        json={"name": "Test", "amount": 100.5, "category": "Food"},
    )

    assert response.status_code == 200
    assert response.get_json() == {"name": "Test", "amount": 100.5, "category": "Food"}


def test_optional_field_omitted(validation_client):
    response = validation_client.post("/test/valid", json={"name": "Test", "amount": 50.0})

    assert response.status_code == 200
    assert response.get_json()["category"] is None


def test_missing_required_field(validation_client):
    response = validation_client.post("/test/valid", json={"name": "Test"})

    assert response.status_code == 400
    data = response.get_json()
    assert data["error"] == "Invalid request body"
    amount_errors = [e for e in data["details"]["errors"] if e["field"] == "amount"]
    assert len(amount_errors) == 1


def test_error_details_include_field_message_and_type(validation_client):
    response = validation_client.post("/test/valid", json={"amount": "not_a_number"})

    assert response.status_code == 400
    for error in response.get_json()["details"]["errors"]:
        assert "field" in error
        assert "message" in error
        assert "expected_type" in error


def test_empty_json_body(validation_client):
    response = validation_client.post("/test/valid", json={})

    assert response.status_code == 400
    details = response.get_json()["details"]
    assert details["model"] == "MockCreateRequest"
    assert details["received"] == {}
    assert {e["field"] for e in details["errors"]} == {"name", "amount"}


def test_path_parameter_passed_through(validation_client):
    response = validation_client.put(
        "/test/combined/abc123",
        json={"name": "Updated", "amount": 1.0},
    )

    assert response.status_code == 200
    assert response.get_json() == {"item_id": "abc123", "name": "Updated"}


def test_raises_typeerror_when_function_has_no_parameters():
    def no_params():
        return "ok"

    with pytest.raises(TypeError) as exc_info:
        validate_request(no_params)

    assert "has no parameters to validate" in str(exc_info.value)


def test_raises_typeerror_when_first_param_lacks_annotation():
    def no_annotation(data):
        return "ok"

    with pytest.raises(TypeError) as exc_info:
        validate_request(no_annotation)

    assert "lacks a type annotation" in str(exc_info.value)


def test_raises_typeerror_for_body_param_without_basemodel(app):
    def wrong_annotation(data: str):
        return "ok"

    decorated = validate_request(wrong_annotation)

    with app.test_request_context("/test", method="POST", json={"data": "test"}):
        request.view_args = {}
        with pytest.raises(TypeError) as exc_info:
            decorated()

    assert "Pydantic BaseModel subclass" in str(exc_info.value)
