from interview_prompts.scorer import basic_score_evaluation


def test_empty_answer():
    result = basic_score_evaluation("")
    assert result.score == 0
    assert result.strengths == []
    assert result.weaknesses == ["Answer lacks depth or structure"]
    assert result.recommendations == ["Add trade-offs", "Add edge cases", "Be more structured"]


def test_length_component_is_capped():
    assert basic_score_evaluation("x" * 5000).score == 3


def test_length_rounds_half_up():
    assert basic_score_evaluation("x" * 100).score == 1


def test_bonuses_are_case_insensitive():
    result = basic_score_evaluation("The TRADE-OFF here: lookup is O(1).")
    assert result.score == 4
    assert result.strengths == ["Discussed trade-offs", "Mentioned complexity analysis"]


def test_strong_answer():
    result = basic_score_evaluation("x" * 1000 + " trade-off, runs in O(n log n)")
    assert result.score == 7
    assert result.weaknesses == []
    assert result.recommendations == ["Improve clarity and communication polish"]
    assert result.to_dict()["score"] == 7
