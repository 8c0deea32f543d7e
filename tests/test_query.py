"""Tests for Query and Strategy contracts."""

import json
from unittest.mock import patch

import pytest
import requests
from pydantic import BaseModel

from korero.config import KoreroConfig
from korero.http import (
    Method,
    Query,
    QueryParams,
    QueryStrategy,
    RequestBuilder,
    StatusError,
    Strategy,
)


class Repo(BaseModel):
    name: str
    stars: int


class RepoQuery(Query):
    """Query with every optional part filled in."""

    def __init__(self, owner: str, token: str | None = None):
        self.owner = owner
        self._token = token

    def endpoint(self) -> str:
        return f"https://api.example.com/users/{self.owner}/repos"

    def params(self) -> QueryParams:
        return QueryParams().add("sort", "updated").add("per_page", 50)

    def body(self) -> str | None:
        return json.dumps({"visibility": "public"})

    def token(self) -> str | None:
        return self._token


class ListRepos(QueryStrategy[list[Repo]]):
    response_model = list[Repo]

    def method(self) -> Method:
        return Method.GET

    def endpoint(self) -> str:
        return "https://api.example.com/repos"


class RawStatus(QueryStrategy[dict]):
    def method(self) -> Method:
        return Method.GET

    def endpoint(self) -> str:
        return "https://api.example.com/status"


def json_response(status_code: int, payload) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = json.dumps(payload).encode("utf-8")
    return response


class TestQuery:
    """Tests for the Query contract."""

    def test_defaults(self):
        """Test optional parts default to nothing."""

        class Bare(Query):
            def endpoint(self) -> str:
                return "https://api.example.com/ping"

        query = Bare()

        assert query.params() == QueryParams()
        assert query.body() is None
        assert query.token() is None

    def test_endpoint_is_required(self):
        """Test a Query without an endpoint cannot be created."""
        with pytest.raises(TypeError):
            Query()  # type: ignore[abstract]

    def test_from_query(self):
        """Test a builder picks up every part of a query."""
        with RequestBuilder.from_query(Method.POST, RepoQuery("ada", token="t0k")) as req:
            prepared = req.prepare()

        assert prepared.method == "POST"
        assert prepared.url == "https://api.example.com/users/ada/repos?sort=updated&per_page=50"
        assert prepared.headers["Authorization"] == "Bearer t0k"
        assert prepared.headers["Content-Type"] == "application/json"
        assert json.loads(prepared.body) == {"visibility": "public"}

    def test_from_query_without_token(self):
        """Test no Authorization header is added without a token."""
        with RequestBuilder.from_query(Method.GET, RepoQuery("ada")) as req:
            assert "Authorization" not in req.prepare().headers


class TestStrategy:
    """Tests for Strategy and QueryStrategy."""

    def test_strategy_is_abstract(self):
        """Test both method and execute must be provided."""

        class OnlyMethod(Strategy[int]):
            def method(self) -> Method:
                return Method.GET

        with pytest.raises(TypeError):
            OnlyMethod()  # type: ignore[abstract]

    def test_custom_strategy(self):
        """Test a hand-written strategy."""

        class Constant(Strategy[int]):
            def method(self) -> Method:
                return Method.HEAD

            def execute(self) -> int:
                return 42

        strategy = Constant()

        assert strategy.method() == Method.HEAD
        assert strategy.execute() == 42

    def test_execute_validates_response(self):
        """Test execute sends the query and validates into the response model."""
        payload = [{"name": "korero", "stars": 3}]
        with patch("requests.Session.send", return_value=json_response(200, payload)) as send:
            repos = ListRepos().execute()

        assert repos == [Repo(name="korero", stars=3)]
        prepared = send.call_args.args[0]
        assert prepared.method == "GET"
        assert prepared.url == "https://api.example.com/repos"

    def test_execute_without_model(self):
        """Test execute returns decoded JSON when no model is set."""
        with patch("requests.Session.send", return_value=json_response(200, {"ok": True})):
            assert RawStatus().execute() == {"ok": True}

    def test_execute_uses_config(self):
        """Test the strategy's config reaches the builder."""
        with patch("requests.Session.send", return_value=json_response(200, {})) as send:
            RawStatus(config=KoreroConfig(timeout=2.5)).execute()

        assert send.call_args.kwargs["timeout"] == 2.5

    def test_execute_non_success(self):
        """Test non-2xx responses surface as StatusError."""
        with patch("requests.Session.send", return_value=json_response(403, {"error": "forbidden"})):
            with pytest.raises(StatusError) as exc_info:
                ListRepos().execute()

        assert exc_info.value.status_code == 403
