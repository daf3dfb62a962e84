"""Validation utilities for Arte Bíblica form inputs."""

import logging

from artebiblica.core.errors import ArteBiblicaError, EmptyInputError

logger = logging.getLogger(__name__)

EMPTY_PROMPT_MESSAGE = "Por favor, insira uma passagem ou tema bíblico."
MAX_PROMPT_LENGTH = 2000


class ValidationError(ArteBiblicaError):
    """User-friendly validation error.

    The message is intended to be displayed directly to the user, inline
    below the prompt field.
    """

    pass


def is_blank(prompt: str | None) -> bool:
    """Return True if ``prompt`` is None, empty or only whitespace."""
    return not prompt or not prompt.strip()


def validate_prompt(prompt: str | None) -> str:
    """Validate the prompt typed by the user.

    Args:
        prompt: Raw text from the form

    Returns:
        The prompt with surrounding whitespace removed

    Raises:
        EmptyInputError: If the prompt is blank
        ValidationError: If the prompt is too long
    """
    if is_blank(prompt):
        raise EmptyInputError(EMPTY_PROMPT_MESSAGE)

    validate_prompt_content(prompt)
    return prompt.strip()


def validate_prompt_content(prompt: str, max_length: int = MAX_PROMPT_LENGTH) -> None:
    """Validate prompt text content.

    Args:
        prompt: Prompt text to validate
        max_length: Maximum allowed prompt length in characters

    Raises:
        ValidationError: If prompt is too long
    """
    if len(prompt) > max_length:
        logger.warning(f"Rejected prompt of {len(prompt)} characters")
        raise ValidationError(
            f"O texto é muito longo ({len(prompt)} caracteres). O máximo é {max_length}."
        )
