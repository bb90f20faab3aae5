from typing import Optional

from src.core.answers.input_validation import sanitize_input, validate_user_answer
from src.core.answers.synonyms import DEFAULT_SYNONYMS, SynonymTable
from src.core.utils.logger import logger


def validate_answer(
    user_answer: Optional[str],
    correct_answer: Optional[str],
    synonyms: SynonymTable = DEFAULT_SYNONYMS,
) -> bool:
    """
    Decide whether a riddle answer matches the canonical answer.

    Checks run in a fixed order and stop at the first hit:
    exact match, exact synonym, substring either way, synonym substring
    either way. Unsafe or empty input is rejected before any matching.

    Parameters:
        user_answer (str): Raw text typed by the user.
        correct_answer (str): Canonical answer of the stop.
        synonyms (SynonymTable): canonical answer -> accepted alternatives.

    Returns:
        bool: True if the answer is accepted. Never raises.
    """
    if not user_answer or not correct_answer:
        return False

    if not validate_user_answer(user_answer):
        logger.info("Rejected unsafe or out-of-range answer input")
        return False

    normalized_user = sanitize_input(user_answer.lower().strip())
    normalized_correct = correct_answer.lower().strip()
    if not normalized_correct:
        return False

    if normalized_user == normalized_correct:
        return True

    alternatives = synonyms.get(normalized_correct, ())
    if normalized_user in alternatives:
        return True

    if normalized_correct in normalized_user or normalized_user in normalized_correct:
        return True

    return any(
        alternative in normalized_user or normalized_user in alternative
        for alternative in alternatives
    )


def get_answer_hint(
    correct_answer: str, synonyms: SynonymTable = DEFAULT_SYNONYMS
) -> str:
    alternatives = synonyms.get(correct_answer.lower().strip(), ())
    if alternatives:
        return f"Synonyms: {', '.join(alternatives[:2])}"
    return ""
