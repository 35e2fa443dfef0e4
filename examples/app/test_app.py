"""Tests for the example command tree."""

import httpx
import pytest

from clir.errors import RouteNotFound
from clir.testing import invoke


@pytest.fixture
def requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def client(requests: list[httpx.Request]) -> httpx.Client:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200)

    return httpx.Client(transport=httpx.MockTransport(handler))


@pytest.fixture
def router(example_module, client: httpx.Client):
    return example_module.build_router(client)


class TestExampleApp:
    """Every command in the example, with HTTP faked by a mock transport."""

    def test_root_prints_hello(self, router) -> None:
        result = invoke(router)
        assert result.ok
        assert result.out == "Hello!\n"

    def test_get(self, router, requests: list[httpx.Request]) -> None:
        result = invoke(router, "get")
        assert result.ok
        assert result.out == "Got it! Response: 200\n"
        assert [r.method for r in requests] == ["GET"]

    def test_greet_defaults(self, router) -> None:
        result = invoke(router, "greet")
        assert result.out == "Hello, World!\n"

    def test_greet_with_positional_args(self, router) -> None:
        result = invoke(router, "greet", "alice", "2")
        assert result.ok
        assert result.out == "Hello, alice!\nHello, alice!\n"

    def test_post_stdin_pings_first(self, router, requests: list[httpx.Request]) -> None:
        result = invoke(router, "post", "-v", "stdin", stdin="payload")
        assert result.ok
        assert result.out == "Pinging!\nPosted stdin! Response: 200\n"
        assert [r.method for r in requests] == ["GET", "POST"]
        assert requests[1].content == b"payload"

    def test_post_random(self, router) -> None:
        result = invoke(router, "post", "random")
        assert result.ok
        assert result.out.startswith("Random number is ")
        assert "Pinging!" not in result.out

    def test_unknown_command(self, router) -> None:
        result = invoke(router, "dance")
        assert isinstance(result.exception, RouteNotFound)

    def test_failed_ping_skips_handler(self, example_module) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        router = example_module.build_router(httpx.Client(transport=httpx.MockTransport(refuse)))
        result = invoke(router, "post", "stdin")
        assert isinstance(result.exception, httpx.ConnectError)
        assert result.out == ""

    def test_module_router_lists_commands(self, example_router) -> None:
        commands = [str(route) for route in example_router.routes]
        assert commands == ["<root>", "get", "greet", "post stdin", "post random"]
