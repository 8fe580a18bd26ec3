import pytest

from app.schema.schema import AssessmentAnswer
from app.service.prompts import (
    PROMPTS,
    build_system_prompt,
    first_message_template,
    resolve_language,
)


@pytest.mark.parametrize("language", ["English", "SPANISH", "french", " Hindi "])
def test_system_prompt_lists_answers_in_order(language, answers):
    prompt = build_system_prompt(language, answers)
    template = PROMPTS[resolve_language(language)]

    expected = "\n".join(f"- {a.question}: {a.answer}" for a in answers)
    assert f"{template.assessment_header}\n{expected}\n\n" in prompt
    positions = [prompt.index(f"- {a.question}: {a.answer}") for a in answers]
    assert positions == sorted(positions)


def test_system_prompt_section_order(answers):
    prompt = build_system_prompt("english", answers)
    t = PROMPTS["english"]
    assert prompt.startswith(t.role_intro)
    assert prompt.index(t.style) < prompt.index(t.assessment_header) < prompt.index(t.constraints)
    assert prompt.endswith(t.constraints)


def test_every_language_forbids_tts_hostile_characters():
    for template in PROMPTS.values():
        assert "'*', '#', '-'" in template.role_intro


def test_unknown_language_falls_back_to_english(answers):
    assert build_system_prompt("Klingon", answers) == build_system_prompt("english", answers)
    assert first_message_template("Klingon", "sad") == first_message_template("English", "sad")
    assert resolve_language(None) == "english"
    assert resolve_language("") == "english"


def test_english_greeting_exact():
    assert first_message_template("English", "anxious") == (
        "Hi, I am Jennifer your AI Therapist. I see you're feeling anxious. "
        "Can you tell me more about that?"
    )


@pytest.mark.parametrize("feeling", [None, "", "   "])
def test_greeting_defaults_feeling_to_neutral(feeling):
    assert "feeling neutral." in first_message_template("english", feeling)


def test_greetings_are_localized():
    assert first_message_template("spanish", "triste").startswith("Hola, soy Jennifer")
    assert "triste" in first_message_template("spanish", "triste")
    assert first_message_template("FRENCH", "calme").startswith("Bonjour, je suis Jennifer")
    assert "उदास" in first_message_template("hindi", "उदास")


def test_empty_assessment_keeps_header():
    prompt = build_system_prompt("english", [])
    assert PROMPTS["english"].assessment_header in prompt


def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        PROMPTS["german"] = PROMPTS["english"]


def test_answer_text_is_not_template_expanded():
    answer = AssessmentAnswer(questionId=9, question="Anything else?", answer="{feeling} braces")
    assert "- Anything else?: {feeling} braces" in build_system_prompt("english", [answer])


def test_constraint_wording_is_kept():
    english = PROMPTS["english"].constraints
    assert "    Document exercise progress in history\n" in english
    assert "    Follow up on effectiveness in future sessions\n" in english
    assert english.endswith("5. Always prioritize emotional validation before technical solutions")
    assert "(①, ②, ③)" in PROMPTS["hindi"].style


def test_constraints_carry_no_bullet_markers():
    for template in PROMPTS.values():
        for line in template.constraints.split("\n"):
            assert not line.lstrip().startswith(("-", "*", "•"))
