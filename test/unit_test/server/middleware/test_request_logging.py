"""
Unit tests for the request logging middleware.

This test suite covers:
- Request/response processing
- Header injection
- Slow request detection
- Error handling
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import Request
from starlette.responses import Response

from cityprefs.server.middleware import RequestLoggingMiddleware


@pytest.fixture
def mock_request():
    request = AsyncMock(spec=Request)
    request.method = "GET"
    request.url = MagicMock()
    request.url.path = "/api/v1/users"
    return request


class TestRequestLoggingMiddleware:
    async def test_successful_request_is_logged(self, mock_request):
        async def call_next(request):
            return Response(content="ok", status_code=200)

        middleware = RequestLoggingMiddleware(app=AsyncMock())

        with patch("cityprefs.server.middleware.request_logging.log_api_request") as mock_log:
            response = await middleware.dispatch(mock_request, call_next)

        assert response.status_code == 200
        mock_log.assert_called_once()
        kwargs = mock_log.call_args[1]
        assert kwargs["method"] == "GET"
        assert kwargs["path"] == "/api/v1/users"
        assert kwargs["status_code"] == 200
        assert kwargs["duration_ms"] >= 0
        assert "X-Process-Time" in response.headers

    async def test_slow_request_warns(self, mock_request):
        async def call_next(request):
            return Response(status_code=204)

        middleware = RequestLoggingMiddleware(app=AsyncMock())

        with (
            patch("cityprefs.server.middleware.request_logging.SLOW_REQUEST_MS", -1.0),
            patch("cityprefs.server.middleware.request_logging.log_api_request"),
            patch("cityprefs.server.middleware.request_logging.logger") as mock_logger,
        ):
            await middleware.dispatch(mock_request, call_next)

        mock_logger.warning.assert_called_once()
        assert "Slow API request" in mock_logger.warning.call_args[0][0]

    async def test_failure_is_logged_and_reraised(self, mock_request):
        async def call_next(request):
            raise RuntimeError("boom")

        middleware = RequestLoggingMiddleware(app=AsyncMock())

        with (
            patch("cityprefs.server.middleware.request_logging.log_api_request") as mock_log,
            patch("cityprefs.server.middleware.request_logging.logger") as mock_logger,
        ):
            with pytest.raises(RuntimeError):
                await middleware.dispatch(mock_request, call_next)

        assert mock_log.call_args[1]["status_code"] == 500
        mock_logger.error.assert_called_once()
