"""Tests for the custom middleware example."""

from clir.testing import invoke


class TestCustomMiddleware:
    def test_timing_reports_on_stderr(self, example_router) -> None:
        result = invoke(example_router, "status")
        assert result.ok
        assert result.out == "All good.\n"
        assert result.err.startswith("took ")

    def test_confirmed_command_runs(self, example_router) -> None:
        result = invoke(example_router, "wipe", stdin="y\n")
        assert result.ok
        assert result.out == "Really? [y/N]\nWiped.\n"

    def test_unconfirmed_command_stops_without_error(self, example_router) -> None:
        result = invoke(example_router, "wipe", stdin="n\n")
        assert result.ok
        assert result.out == "Really? [y/N]\nAborted.\n"
        assert result.err.startswith("took ")

    def test_status_is_not_confirmed(self, example_router) -> None:
        result = invoke(example_router, "status", stdin="n\n")
        assert "Really?" not in result.out
