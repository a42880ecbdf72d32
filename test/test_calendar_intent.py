from classification.calendar_intent import calendar_signals, is_calendar_intent


def test_prompt_request_alone_is_enough():
    assert calendar_signals("Remind me to call the pharmacy", "<p>OK.</p>") == (True, False)
    assert is_calendar_intent("Remind me to call the pharmacy", "<p>OK.</p>")


def test_response_confirmation_alone_is_enough():
    prompt = "the budget meeting moved to thursday"
    response = "<p>Got it, I've added this to your calendar.</p>"
    assert calendar_signals(prompt, response) == (False, True)
    assert is_calendar_intent(prompt, response)


def test_confirmation_is_case_insensitive():
    assert is_calendar_intent("hi", "REMINDER IS SET for Friday")


def test_neither_signal():
    assert not is_calendar_intent("who is at risk of burnout?", "<p>Sarah Chen.</p>")
