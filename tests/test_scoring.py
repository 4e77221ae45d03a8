import pytest

from volition_engine.scoring import StressTestAnswer, calculate_commitment_score


def answers(*scores):
    return [StressTestAnswer(index, score) for index, score in enumerate(scores)]


def test_high_drive_proceeds():
    result = calculate_commitment_score(answers(3, 3, 3, 4, 4, 4))
    assert result.pain_score == 3.0
    assert result.drive_score == 4.0
    assert result.score == 72.0
    assert result.decision == "PROCEED"


def test_low_commitment_rejects():
    result = calculate_commitment_score(answers(2, 2, 2, 2, 2, 3))
    assert result.score == pytest.approx(44.0)
    assert result.decision == "REJECT"


def test_answer_order_does_not_matter():
    shuffled = list(reversed(answers(1, 2, 3, 5, 5, 5)))
    assert calculate_commitment_score(shuffled) == calculate_commitment_score(answers(1, 2, 3, 5, 5, 5))


def test_custom_threshold():
    assert calculate_commitment_score(answers(3, 3, 3, 4, 4, 4), threshold=80).decision == "REJECT"


@pytest.mark.parametrize(
    "bad",
    [
        answers(3, 3, 3, 3, 3),
        [StressTestAnswer(0, 3)] * 6,
        answers(3, 3, 3, 3, 3, 6),
    ],
)
def test_invalid_answers_raise(bad):
    with pytest.raises(ValueError):
        calculate_commitment_score(bad)
