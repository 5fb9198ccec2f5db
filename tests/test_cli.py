"""Tests for the relay command line interface."""

from unittest.mock import MagicMock, patch

import httpx
import pytest
from typer.testing import CliRunner

from cli import typer_app

runner = CliRunner()


@pytest.fixture
def stats_response():
    """
    Provides a successful /api/stats response.

    Returns:
        MagicMock: Response with JSON body
    """
    response = MagicMock()
    response.raise_for_status = MagicMock()
    response.json.return_value = {
        "connections": {
            "seekerCount": 3,
            "providerCount": 2,
            "totalCount": 5,
        },
        "openConnections": 6,
        "uptime": 120.4,
    }
    return response


class TestEventsCommand:
    """Tests for `relay-cli events`."""

    def test_lists_every_event(self):
        """Test inbound and outbound event names are printed."""
        result = runner.invoke(typer_app, ["events"])

        assert result.exit_code == 0
        for name in (
            "login",
            "chat-message",
            "profile-disclosure",
            "message-received",
            "profile-received",
        ):
            assert name in result.output

    def test_shows_wire_field_names(self):
        """Test data fields are shown with their camelCase names."""
        result = runner.invoke(typer_app, ["events"])

        assert "identityId" in result.output
        assert "recipientIdentity" in result.output


class TestStatsCommand:
    """Tests for `relay-cli stats`."""

    def test_prints_stats(self, stats_response):
        """Test stats of a running relay are printed."""
        with patch("cli.httpx.get", return_value=stats_response) as mock_get:
            result = runner.invoke(
                typer_app, ["stats", "--url", "http://relay:5000/"]
            )

        assert result.exit_code == 0
        mock_get.assert_called_once_with(
            "http://relay:5000/api/stats", timeout=5.0
        )
        assert "Bound seekers" in result.output
        assert "6" in result.output

    def test_unreachable_relay(self):
        """Test a connection error exits with code 1."""
        with patch(
            "cli.httpx.get", side_effect=httpx.ConnectError("refused")
        ):
            result = runner.invoke(typer_app, ["stats"])

        assert result.exit_code == 1
        assert "Could not reach relay" in result.output

    def test_disabled_stats_endpoint(self):
        """Test a 404 from the relay exits with code 1."""
        request = httpx.Request("GET", "http://localhost:5000/api/stats")
        response = httpx.Response(404, request=request)

        with patch("cli.httpx.get", return_value=response):
            result = runner.invoke(typer_app, ["stats"])

        assert result.exit_code == 1
        assert "404" in result.output


class TestServeCommand:
    """Tests for `relay-cli serve`."""

    def test_runs_application_factory(self):
        """Test uvicorn is started with the application factory."""
        with patch("cli.uvicorn.run") as mock_run:
            result = runner.invoke(typer_app, ["serve", "--port", "8001"])

        assert result.exit_code == 0
        mock_run.assert_called_once_with(
            "care_relay:application",
            factory=True,
            host="0.0.0.0",
            port=8001,
            reload=False,
        )
