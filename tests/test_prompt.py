import pytest

from app.prompt import build_prompt


@pytest.mark.parametrize(
    "question, expected",
    [
        ("france", "France"),
        ("FRANCE", "France"),
        ("a", "A"),
        ("Hello World", "Hello world"),
        ("what is the capital of ITALY?", "What is the capital of italy?"),
    ],
)
def test_build_prompt(question, expected):
    assert build_prompt(question) == expected


def test_build_prompt_keeps_leading_whitespace():
    # промпт строится из исходной строки, без strip()
    assert build_prompt(" FRANCE") == " france"


def test_build_prompt_empty_string_does_not_fault():
    assert build_prompt("") == ""
