"""
Test suite for the main CLI interface.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from conftest import task_json
from todoist_cli import __version__
from todoist_cli.tdcli import app
from todoist_cli.todoist_api import APIError, NotFoundError
from todoist_cli.todoist_api.data_models import Label, Project, Task
from todoist_cli.todoist_api.errors import NotConfiguredError

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_env_files():
    with patch("todoist_cli.tdcli.load_env_vars"):
        yield


@pytest.fixture
def api():
    client = MagicMock()
    client.find_project.return_value = Project(id="p1", name="Work")
    client.get_task.return_value = Task.model_validate(task_json("7", "Write report"))
    with patch("todoist_cli.tdcli.make_client", return_value=client) as factory:
        client.factory = factory
        yield client


class TestCLI:
    """Test cases for the main CLI application."""

    def test_cli_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for name in ("tasks", "add", "move", "completed", "projects"):
            assert name in result.stdout

    def test_cli_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_env_loading(self):
        with patch("todoist_cli.tdcli.load_env_vars") as mock_load_env, \
                patch("todoist_cli.tdcli.make_client", return_value=MagicMock()):
            runner.invoke(app, ["labels"])
            mock_load_env.assert_called_once()

    def test_debug_flag_reaches_client(self, api):
        api.get_labels.return_value = []
        result = runner.invoke(app, ["--debug", "labels"])
        assert result.exit_code == 0
        api.factory.assert_called_once_with(True)


class TestTasksCommand:
    def test_json_envelope(self, api):
        api.get_tasks.return_value = [Task.model_validate(task_json("1", "Buy milk"))]

        result = runner.invoke(app, ["--json", "tasks"])

        assert result.exit_code == 0
        env = json.loads(result.stdout)
        assert env["success"] is True
        assert env["data"][0]["content"] == "Buy milk"
        api.get_tasks.assert_called_once_with("", "today | overdue")
        api.close.assert_called_once()

    @pytest.mark.parametrize("alias", ["list", "ls"])
    def test_task_aliases(self, api, alias):
        api.get_tasks.return_value = []
        result = runner.invoke(app, [alias, "--project", "work"])
        assert result.exit_code == 0
        assert "No tasks found." in result.stdout
        api.get_tasks.assert_called_once_with("p1", "")

    def test_error_exit_code(self, api):
        api.find_project.side_effect = NotFoundError("project not found: Garden")

        result = runner.invoke(app, ["tasks", "-p", "Garden"])

        assert result.exit_code == 1
        assert "Error: project not found: Garden" in result.output
        api.close.assert_called_once()

    def test_json_error(self, api):
        api.find_project.side_effect = NotFoundError("project not found: Garden")

        result = runner.invoke(app, ["--json", "tasks", "-p", "Garden"])

        assert result.exit_code == 1
        assert json.loads(result.stdout) == {"success": False, "error": "project not found: Garden"}

    def test_not_configured(self):
        with patch("todoist_cli.tdcli.get_token", side_effect=NotConfiguredError("not configured. Run 'todoist auth' or set TODOIST_API_TOKEN")):
            result = runner.invoke(app, ["tasks"])
        assert result.exit_code == 1
        assert "not configured" in result.output


class TestTaskCommands:
    def test_add(self, api):
        api.add_task.return_value = Task.model_validate(task_json("9", "Write docs", priority=4))

        result = runner.invoke(app, ["add", "Write", "docs", "-P", "1", "-p", "Work", "-l", "a", "-l", "b"])

        assert result.exit_code == 0
        params = api.add_task.call_args.args[0]
        assert params.content == "Write docs"
        assert params.priority == 4
        assert params.labels == ["a", "b"]
        assert "[p1] Write docs" in result.stdout

    def test_priority_out_of_range(self, api):
        result = runner.invoke(app, ["add", "x", "-P", "5"])
        assert result.exit_code == 2
        api.add_task.assert_not_called()

    def test_update_splits_labels(self, api):
        api.update_task.return_value = Task.model_validate(task_json("7", "x"))

        result = runner.invoke(app, ["edit", "7", "--labels", "a, b"])

        assert result.exit_code == 0
        assert api.update_task.call_args.args[1].labels == ["a", "b"]

    def test_complete(self, api):
        result = runner.invoke(app, ["done", "7"])
        assert result.exit_code == 0
        api.complete_task.assert_called_once_with("7")
        assert "Completed: Write report" in result.stdout

    def test_delete_asks_first(self, api):
        result = runner.invoke(app, ["rm", "7"], input="n\n")
        assert result.exit_code == 0
        api.delete_task.assert_not_called()

    def test_delete_json_skips_confirmation(self, api):
        result = runner.invoke(app, ["--json", "delete", "7"])
        assert result.exit_code == 0
        api.delete_task.assert_called_once_with("7")

    def test_move_without_target(self, api):
        result = runner.invoke(app, ["move", "7"])
        assert result.exit_code == 1
        assert "must specify either --section or --project" in result.output

    def test_reorder(self, api):
        result = runner.invoke(app, ["reorder", "7", "2"])
        assert result.exit_code == 0
        api.reorder_task.assert_called_once_with("7", 2)

    def test_comment_add(self, api):
        result = runner.invoke(app, ["comment", "7", "looks", "good"])
        assert result.exit_code == 0
        api.add_comment.assert_called_once_with("looks good", task_id="7")


class TestResourceCommands:
    def test_projects_list(self, api):
        api.get_projects.return_value = [Project(id="1", name="Inbox", is_inbox_project=True)]
        result = runner.invoke(app, ["projects"])
        assert result.exit_code == 0
        assert "Inbox [inbox]" in result.stdout

    def test_projects_add(self, api):
        api.add_project.return_value = Project(id="2", name="Garden", is_favorite=True)
        result = runner.invoke(app, ["projects", "add", "Garden", "--favorite"])
        assert result.exit_code == 0
        assert api.add_project.call_args.args[0].to_payload() == {"name": "Garden", "is_favorite": True}

    def test_labels_add(self, api):
        api.add_label.return_value = Label(id="l1", name="errand")
        result = runner.invoke(app, ["labels", "add", "errand"])
        assert result.exit_code == 0
        assert "Created label: @errand" in result.stdout

    def test_sections_add_requires_project(self, api):
        result = runner.invoke(app, ["sections", "add", "Later"])
        assert result.exit_code == 2

    def test_completed_bad_date(self, api):
        result = runner.invoke(app, ["history", "--since", "someday soon"])
        assert result.exit_code == 1
        assert "invalid --since date" in result.output
        api.get_completed_tasks.assert_not_called()


class TestAuthCommands:
    def test_status(self):
        with patch("todoist_cli.utils.config.token_source", return_value="environment"):
            result = runner.invoke(app, ["auth", "status"])
        assert result.exit_code == 0
        assert "Authenticated (token from environment)" in result.stdout

    def test_logout(self):
        with patch("todoist_cli.utils.config.remove_config", return_value=False):
            result = runner.invoke(app, ["auth", "logout"])
        assert result.exit_code == 0
        assert "No credentials stored." in result.stdout

    def test_login_with_token(self):
        with patch("todoist_cli.tdcli.TodoistClient") as factory, \
                patch("todoist_cli.utils.config.save_token", return_value="/home/u/.todoist-cli/config.json") as save:
            result = runner.invoke(app, ["auth", "login", "abc"])
        assert result.exit_code == 0
        save.assert_called_once_with("abc")
        factory.return_value.get_projects.assert_called_once()


class TestAliases:
    @pytest.mark.parametrize("alias", ["view", "show", "get"])
    def test_view(self, api, alias):
        api.get_comments.return_value = []
        result = runner.invoke(app, [alias, "7"])
        assert result.exit_code == 0
        assert "Content:  Write report" in result.stdout

    @pytest.mark.parametrize("alias", ["update", "edit", "modify"])
    def test_update(self, api, alias):
        api.update_task.return_value = Task.model_validate(task_json("7", "x"))
        result = runner.invoke(app, [alias, "7", "--content", "x"])
        assert result.exit_code == 0
        api.update_task.assert_called_once()

    @pytest.mark.parametrize("alias", ["delete", "rm", "remove"])
    def test_delete(self, api, alias):
        result = runner.invoke(app, [alias, "7", "--force"])
        assert result.exit_code == 0
        api.delete_task.assert_called_once_with("7")

    @pytest.mark.parametrize("alias", ["comment", "note"])
    def test_comment(self, api, alias):
        api.get_comments.return_value = []
        result = runner.invoke(app, [alias, "7"])
        assert result.exit_code == 0
        assert "No comments found." in result.stdout

    @pytest.mark.parametrize("alias", ["projects", "project", "proj"])
    def test_projects(self, api, alias):
        api.get_projects.return_value = [Project(id="1", name="Work")]
        result = runner.invoke(app, [alias])
        assert result.exit_code == 0
        assert "Work" in result.stdout

    @pytest.mark.parametrize("alias", ["sections", "section"])
    def test_sections(self, api, alias):
        api.get_sections.return_value = []
        result = runner.invoke(app, [alias])
        assert result.exit_code == 0
        assert "No sections found." in result.stdout

    @pytest.mark.parametrize("alias", ["labels", "label", "tags"])
    def test_labels(self, api, alias):
        api.get_labels.return_value = [Label(id="l1", name="errand")]
        result = runner.invoke(app, [alias])
        assert result.exit_code == 0
        assert "@errand" in result.stdout

    def test_aliases_hidden_from_help(self):
        result = runner.invoke(app, ["--help"])
        assert "modify" not in result.stdout
        assert "tags" not in result.stdout


class TestViewCommand:
    def test_json_skips_comments(self, api):
        result = runner.invoke(app, ["--json", "view", "7"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["id"] == "7"
        api.get_comments.assert_not_called()

    def test_comment_failure_still_shows_task(self, api):
        api.get_comments.side_effect = APIError.from_response(500, "boom")
        result = runner.invoke(app, ["view", "7"])
        assert result.exit_code == 0
        assert "Content:  Write report" in result.stdout
        assert "Comments" not in result.stdout
