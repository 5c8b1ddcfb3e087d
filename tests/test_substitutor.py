import pytest

from cmdregistry.substitutor import DEFAULT_PLACEHOLDER, substitute


def test_replaces_every_occurrence():
    assert substitute("<ARG> and <ARG>", "x", "<ARG>") == "x and x"


def test_empty_argument_replaces_with_empty_string():
    assert substitute("Review target: <ARG>", "", "<ARG>") == "Review target: "


def test_body_without_placeholder_is_unchanged():
    body = "No placeholder\n```python\nprint('hi')\n```"
    assert substitute(body, "anything", "<ARG>") == body


def test_argument_is_inserted_verbatim_without_recursive_expansion():
    result = substitute("Do: <ARG>", "<ARG> $1 \\n {x}", "<ARG>")
    assert result == "Do: <ARG> $1 \\n {x}"


def test_substitution_is_idempotent_once_placeholder_is_gone():
    once = substitute("Fix: <ARG>", "login bug", "<ARG>")
    assert substitute(once, "login bug", "<ARG>") == once


def test_default_placeholder_is_arguments_token():
    assert DEFAULT_PLACEHOLDER == "$ARGUMENTS"
    assert substitute("Run $ARGUMENTS now", "tests") == "Run tests now"


def test_empty_placeholder_rejected():
    with pytest.raises(ValueError):
        substitute("body", "arg", "")
