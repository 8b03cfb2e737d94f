import io
import logging
import sys

import pytest

from gitai.hooks import interceptor
from gitai.hooks.interceptor import ask, intercept, run


@pytest.fixture
def message_file(tmp_path, isolated_env, monkeypatch):
    monkeypatch.delenv("GIT_EDITOR", raising=False)
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "COMMIT_EDITMSG"
    path.write_text("Add login form\n\nDetails\n")
    return path


def test_yes_marks_message(message_file):
    assert intercept(message_file, answer=True) is True
    assert message_file.read_text() == "[AI] Add login form\n\nDetails\n"


def test_no_leaves_message_untouched(message_file):
    assert intercept(message_file, answer=False) is False
    assert message_file.read_text() == "Add login form\n\nDetails\n"


def test_amend_does_not_double_marker(message_file):
    intercept(message_file, answer=True)
    assert intercept(message_file, answer=True) is False
    assert message_file.read_text().startswith("[AI] Add login form")


def test_environment_answer_skips_prompt(message_file, monkeypatch):
    monkeypatch.setenv("GIT_AI", "yes")
    monkeypatch.setattr(interceptor, "ask", lambda: pytest.fail("should not prompt"))
    assert intercept(message_file) is True


def test_prompt_answer_is_used(message_file, monkeypatch):
    monkeypatch.setattr(interceptor, "ask", lambda: True)
    assert intercept(message_file) is True


def test_invalid_environment_answer_falls_back_to_prompt(message_file, monkeypatch):
    monkeypatch.setenv("GIT_AI", "maybe")
    monkeypatch.setattr(interceptor, "ask", lambda: False)
    assert intercept(message_file) is False
    assert message_file.read_text() == "Add login form\n\nDetails\n"


def test_no_terminal_defaults_to_non_ai(tmp_path):
    assert ask(str(tmp_path / "no-such-tty")) is False


def test_non_interactive_stream_defaults_to_non_ai():
    assert interceptor._confirm(io.StringIO("y\n")) is False


def test_errors_never_escape(tmp_path):
    assert intercept(tmp_path / "missing", answer=True) is False


def test_failing_prompt_leaves_message(message_file, monkeypatch):
    def broken():
        raise RuntimeError("terminal exploded")

    monkeypatch.setattr(interceptor, "ask", broken)
    assert intercept(message_file) is False
    assert message_file.read_text() == "Add login form\n\nDetails\n"


def test_entry_point_always_exits_zero(message_file, monkeypatch):
    monkeypatch.setenv("GIT_AI", "1")
    monkeypatch.setattr(sys, "argv", ["git-ai-hook", str(message_file)])

    with pytest.raises(SystemExit) as excinfo:
        run()

    assert excinfo.value.code == 0
    assert message_file.read_text().startswith("[AI] ")


def test_entry_point_exits_zero_on_bad_usage(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["git-ai-hook"])
    with pytest.raises(SystemExit) as excinfo:
        run()
    assert excinfo.value.code == 0


def test_hash_subject_is_marked_without_editor(message_file, monkeypatch):
    monkeypatch.setenv("GIT_EDITOR", ":")
    message_file.write_text("#12 fix login\n")

    assert intercept(message_file, answer=True) is True
    assert message_file.read_text() == "[AI] #12 fix login\n"


def test_editor_template_comments_are_skipped(message_file):
    message_file.write_text("\n# Please enter the commit message for your changes.\n")
    assert intercept(message_file, answer=True) is False

    message_file.write_text("Refactor scanner\n# On branch main\n")
    assert intercept(message_file, answer=True) is True
    assert message_file.read_text() == "[AI] Refactor scanner\n# On branch main\n"


class ConfigOnly:
    def __init__(self, **config):
        self.config = config

    def config_get(self, key):
        return self.config.get(key)


@pytest.mark.parametrize(
    "environ,config,expected",
    [
        ({"GIT_EDITOR": ":"}, {}, None),
        ({}, {}, "#"),
        ({}, {"core.commentChar": ";"}, ";"),
        ({}, {"core.commentChar": "auto"}, "#"),
        ({}, {"core.commentString": "//", "core.commentChar": ";"}, "//"),
        ({}, {"commit.cleanup": "verbatim"}, None),
        ({}, {"commit.cleanup": "strip", "core.commentChar": "%"}, "%"),
    ],
)
def test_comment_char_follows_git_settings(environ, config, expected):
    assert interceptor.comment_char(ConfigOnly(**config), environ=environ) == expected


def test_comment_char_outside_repository():
    assert interceptor.comment_char(None, environ={}) == "#"


def test_invalid_setting_is_named_in_warning(message_file, monkeypatch, caplog):
    monkeypatch.setenv("GIT_AI_LIMIT", "-3")
    monkeypatch.setattr(interceptor, "ask", lambda: False)

    with caplog.at_level(logging.WARNING, logger="gitai.hooks.interceptor"):
        assert intercept(message_file) is False

    assert "GIT_AI_LIMIT" in caplog.text
    assert "GIT_AI " not in caplog.text
