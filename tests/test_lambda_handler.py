"""Tests for the Lambda entry point."""
from mangum import Mangum

from backend.app.main import app
from backend import lambda_handler


def test_handler_wraps_app():
    assert isinstance(lambda_handler.handler, Mangum)
    assert lambda_handler.handler.app is app


def test_routes_registered():
    paths = {route.path for route in app.routes}

    assert "/api/answers" in paths
    assert "/api/upload" in paths
    assert "/api/answers/{answer_id}" in paths
    assert "/api/uploads/{file_name}" in paths
    assert "/health" in paths
