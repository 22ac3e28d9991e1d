from prompts import SYSTEM_PROMPT, build_messages, build_user_prompt


def test_user_prompt_embeds_pretty_printed_context():
    prompt = build_user_prompt("Which truck is most profitable?", {"topTrucks": [{"truckId": "23"}]})
    assert prompt == (
        "Question: Which truck is most profitable?\n\n"
        "Context JSON:\n"
        '{\n  "topTrucks": [\n    {\n      "truckId": "23"\n    }\n  ]\n}'
    )


def test_missing_context_becomes_empty_object():
    assert build_user_prompt("Q", None).endswith("Context JSON:\n{}")


def test_system_prompt_rules():
    assert SYSTEM_PROMPT.startswith("You are a fleet analytics assistant.")
    assert "say so explicitly" in SYSTEM_PROMPT
    assert "Truck ID + Month" in SYSTEM_PROMPT


def test_messages_shape():
    system, user = build_messages("Q", {})
    assert system["content"][0] == {"type": "input_text", "text": SYSTEM_PROMPT}
    assert user["role"] == "user"
