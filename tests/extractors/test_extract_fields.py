from __future__ import annotations

from datetime import datetime, timezone
from typing import List

from inbox_tasks.extractors.tasks import build_prompt, extract_fields
from inbox_tasks.llm.client import GenerationError
from inbox_tasks.models import ExtractedFields, Level

REFERENCE = datetime(2026, 3, 2, 8, 0, tzinfo=timezone.utc)


class RecordingGenerator:
    def __init__(self, answer: str) -> None:
        self.answer = answer
        self.prompts: List[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.answer


class FailingGenerator:
    def __init__(self, exc: Exception) -> None:
        self.exc = exc
        self.calls = 0

    def generate(self, prompt: str) -> str:
        self.calls += 1
        raise self.exc


def test_prompt_embeds_reference_date_and_email() -> None:
    prompt = build_prompt("Please register by Friday.", "Workshop", REFERENCE)

    assert "02/03/2026" in prompt
    assert "14/06/2025" not in prompt
    assert "Please register by Friday." in prompt
    assert "Workshop" in prompt
    for label in ["Event Type:", "Deadline:", "Registration Link:", "Summary:"]:
        assert label in prompt


def test_extract_makes_exactly_one_call() -> None:
    generator = RecordingGenerator("Event Type: Workshop\nUrgency: high")

    fields = extract_fields("body", "Workshop", generator, REFERENCE)

    assert len(generator.prompts) == 1
    assert fields.event_type == "Workshop"
    assert fields.urgency is Level.HIGH
    assert fields.subject == "Workshop"


def test_generation_error_returns_fallback_record() -> None:
    generator = FailingGenerator(GenerationError("timeout"))

    fields = extract_fields("body", "Quarterly report", generator, REFERENCE)

    assert generator.calls == 1
    assert fields == ExtractedFields(
        event_type="Email",
        subject="Quarterly report",
        deadline_text="none",
        urgency=Level.LOW,
        importance=Level.LOW,
        score="none",
        registration_link="none",
        summary="Could not extract information.",
    )


def test_unexpected_exception_is_absorbed() -> None:
    fields = extract_fields("body", "Hello", FailingGenerator(ValueError("boom")), REFERENCE)

    assert fields == ExtractedFields.fallback("Hello")


def test_non_string_answer_is_absorbed() -> None:
    generator = RecordingGenerator(None)  # type: ignore[arg-type]

    assert extract_fields("body", "Hello", generator, REFERENCE) == ExtractedFields.fallback("Hello")
