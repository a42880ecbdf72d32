import pytest

from classification.completion_intent import is_completion_intent


@pytest.mark.parametrize(
    "text",
    [
        "Mark task #5 as complete",
        "the task is done",
        "I've taken care of the equipment request",
        "We fixed the issue with the pump",
        "mark equipment request as complete",
        "please mark the inventory check as done",
    ],
)
def test_detects_completion_requests(text):
    assert is_completion_intent(text) is True


@pytest.mark.parametrize(
    "text",
    [
        "who is at risk of burnout?",
        "remind me to check in with Sarah in 2 weeks",
        "",
    ],
)
def test_ignores_other_prompts(text):
    assert is_completion_intent(text) is False


def test_matching_is_case_insensitive():
    assert is_completion_intent("TASK IS DONE")


def test_none_is_not_a_request():
    assert is_completion_intent(None) is False
