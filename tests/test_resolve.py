import pytest

from todoist_cli.todoist_api import NotFoundError
from todoist_cli.todoist_api.data_models import Project
from todoist_cli.todoist_api.resolve import find_by_name, match_name

PROJECTS = [
    Project(id="1", name="Work"),
    Project(id="2", name="Personal"),
    Project(id="3", name="Work Projects"),
]


class TestNameResolution:
    def test_first_match_wins(self):
        assert find_by_name(PROJECTS, "Work", "project").id == "1"

    def test_substring_and_case_insensitive(self):
        assert find_by_name(PROJECTS, "proj", "project").id == "3"
        assert find_by_name(PROJECTS, "PERSONAL", "project").id == "2"

    def test_listing_order_decides(self):
        reordered = [PROJECTS[2], PROJECTS[0]]
        assert find_by_name(reordered, "work", "project").id == "3"

    def test_not_found(self):
        with pytest.raises(NotFoundError) as exc:
            find_by_name(PROJECTS, "Garden", "project")
        assert str(exc.value) == "project not found: Garden"

    def test_match_name_returns_none(self):
        assert match_name([], "anything") is None
