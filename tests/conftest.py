import json

import pytest

from fallback_data import get_companies


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=""):
        self.status_code = status_code
        self._body = body
        self.text = text or json.dumps(body or {}, ensure_ascii=False)

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._body is None:
            raise ValueError("no body")
        return self._body


class FakeSession:
    """Stands in for the requests module; records every post."""

    def __init__(self, response):
        self.response = response
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


class FakeResult:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.ops = []

    def __getattr__(self, name):
        def op(*args, **kwargs):
            self.ops.append((name, args, kwargs))
            return self
        return op

    def execute(self):
        self.db.executed.append((self.table, self.ops))
        kind = self.ops[0][0]
        error = self.db.errors.get(kind)
        if error:
            raise error
        if kind == "insert":
            self.db.inserted.extend(self.ops[0][1][0])
            return FakeResult(self.ops[0][1][0])
        if kind == "select":
            return FakeResult(self.db.rows)
        return FakeResult([])


class FakeSupabase:
    def __init__(self, rows=None, errors=None):
        self.rows = rows or []
        self.errors = errors or {}
        self.executed = []
        self.inserted = []

    def table(self, name):
        return FakeQuery(self, name)

    def ops_named(self, kind):
        return [ops for _, ops in self.executed if ops[0][0] == kind]


def tool_response(name, arguments, usage=None):
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments, ensure_ascii=False)
    return {
        "choices": [{
            "message": {
                "role": "assistant",
                "content": "",
                "tool_calls": [{"type": "function", "function": {"name": name, "arguments": arguments}}],
            }
        }],
        "usage": usage or {"total_tokens": 42},
    }


@pytest.fixture
def companies():
    return get_companies()


@pytest.fixture
def company(companies):
    return next(c for c in companies if c["id"] == "c002")


@pytest.fixture
def empty_profile():
    return {
        "region_preference": [],
        "industry_preference": [],
        "stage_preference": [],
        "time_window": "",
        "extra_preferences": [],
        "scenario": "",
    }
