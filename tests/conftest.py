import json
from unittest.mock import MagicMock

import pytest

from todoist_cli.todoist_api import ClientConfig, TodoistClient
from todoist_cli.todoist_api.transport import Transport


def make_response(status=200, body=b"", headers=None):
    if not isinstance(body, (bytes, bytearray)):
        body = json.dumps(body).encode("utf-8")
    resp = MagicMock()
    resp.status_code = status
    resp.content = body
    resp.headers = headers or {}
    return resp


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def config():
    return ClientConfig(token="secret-token")


@pytest.fixture
def transport(config, session):
    t = Transport(config, session=session)
    t.waits = []
    t._wait = lambda seconds, cancel: t.waits.append(seconds)
    return t


@pytest.fixture
def client(config, session):
    c = TodoistClient(config, session=session)
    c.transport._wait = lambda seconds, cancel: None
    return c


def task_json(id="1", content="Task", **extra):
    data = {
        "id": id,
        "content": content,
        "description": "",
        "project_id": "p1",
        "section_id": None,
        "parent_id": None,
        "child_order": 0,
        "priority": 1,
        "due": None,
        "url": f"https://app.todoist.com/app/task/{id}",
        "labels": [],
        "created_at": "2024-01-01T00:00:00Z",
        "creator_id": "u1",
        "is_completed": False,
    }
    data.update(extra)
    return data
