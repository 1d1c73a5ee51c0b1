"""Tests for the deployment smoke test script."""

import httpx

from food_api.smoke import main


def _client(statuses: dict[str, int]) -> httpx.Client:
    def handler(request: httpx.Request) -> httpx.Response:
        status = statuses[request.url.path]
        return httpx.Response(status, json={"path": request.url.path})

    return httpx.Client(transport=httpx.MockTransport(handler))


def test_smoke_passes_against_healthy_deployment(capsys) -> None:
    client = _client({"/health": 200, "/foods": 200, "/nonexistent": 404})

    exit_code = main(["https://food.test/"], client=client)

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "Testing API deployment at: https://food.test" in captured.out
    assert "3/3 tests passed" in captured.out


def test_smoke_fails_when_search_breaks(capsys) -> None:
    client = _client({"/health": 200, "/foods": 503, "/nonexistent": 404})

    exit_code = main(["https://food.test"], client=client)

    assert exit_code == 1
    assert "2/3 tests passed" in capsys.readouterr().out


def test_smoke_reports_connection_errors(capsys) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = httpx.Client(transport=httpx.MockTransport(handler))

    assert main([], client=client) == 1
    out = capsys.readouterr().out
    assert "http://localhost:3000" in out
    assert "Error: refused" in out
