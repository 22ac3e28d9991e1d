"""
Prompt design for the fleet question-answering service.

The model sees only the ask context JSON, never raw rows. It must answer from
that context and say plainly when a field it needs was not uploaded.
"""

import json
from typing import Any

SYSTEM_PROMPT = " ".join([
    "You are a fleet analytics assistant.",
    "Answer using only the provided JSON context.",
    "If a required field is missing, say so explicitly and suggest what to upload.",
    "When driver names are available, include them alongside Drive IDs.",
    "Revenue-by-driver is derived by joining Freight to Cost on Truck ID + Month; call this out if relevant.",
    "Be concise and include the key metric values.",
])


def build_user_prompt(question: str, context: dict[str, Any] | None) -> str:
    context_json = json.dumps(context or {}, indent=2, ensure_ascii=False, default=str)
    return f"Question: {question}\n\nContext JSON:\n{context_json}"


def build_messages(question: str, context: dict[str, Any] | None) -> list[dict[str, Any]]:
    """Responses API input: system instructions plus one user turn."""
    return [
        {"role": "system", "content": [{"type": "input_text", "text": SYSTEM_PROMPT}]},
        {"role": "user", "content": [{"type": "input_text", "text": build_user_prompt(question, context)}]},
    ]
