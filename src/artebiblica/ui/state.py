"""Form state for the Arte Bíblica page.

The form is modelled as an immutable :class:`FormState` snapshot.  Every
user action or service outcome is an event, and :func:`reduce` computes the
next snapshot from the current one.  :func:`render` turns a snapshot into the
view model the page displays.  Neither function has side effects; the
caller decides when to talk to the generation service by checking
:func:`should_generate` after a :class:`Submit`.

Typical flow::

    state = FormState()
    state = reduce(state, PromptChanged("Davi e Golias"))
    state = reduce(state, StyleChanged("cute"))
    state = reduce(state, Submit())
    if should_generate(state):
        try:
            image = service.generate_data_uri(state.prompt, state.style)
            state = reduce(state, GenerationSucceeded(image))
        except GenerationError as e:
            state = reduce(state, GenerationFailed(str(e)))
    view = render(state)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Union

from artebiblica.api.prompt_builder import DEFAULT_STYLE, DrawingStyle, resolve_style
from artebiblica.core.generation import GENERATION_FAILED_MESSAGE
from artebiblica.ui.validation import EMPTY_PROMPT_MESSAGE, is_blank

logger = logging.getLogger(__name__)

GENERATE_LABEL = "✨ Gerar Desenho"
LOADING_LABEL = "Gerando Imagem..."


@dataclass(frozen=True)
class FormState:
    """Snapshot of the form.

    Attributes:
        prompt: Text typed by the user.
        style: Selected drawing style.
        is_loading: True while a generation request is in flight.
        image_data_uri: Last generated image, if any.
        error: Inline message to show, if any.
    """

    prompt: str = ""
    style: DrawingStyle = DEFAULT_STYLE
    is_loading: bool = False
    image_data_uri: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class PromptChanged:
    prompt: str


@dataclass(frozen=True)
class StyleChanged:
    style: DrawingStyle | str


@dataclass(frozen=True)
class Submit:
    pass


@dataclass(frozen=True)
class GenerationSucceeded:
    image_data_uri: str


@dataclass(frozen=True)
class GenerationFailed:
    message: str = GENERATION_FAILED_MESSAGE


FormEvent = Union[PromptChanged, StyleChanged, Submit, GenerationSucceeded, GenerationFailed]


def reduce(state: FormState, event: FormEvent) -> FormState:
    """Return the snapshot that follows ``state`` after ``event``.

    Edits and submissions are ignored while a generation is in flight, the
    same way the form disables its inputs.

    Args:
        state: Current snapshot.
        event: What happened.

    Returns:
        The next snapshot.  ``state`` itself is never modified.

    Raises:
        TypeError: If ``event`` is not a known form event.
    """
    if isinstance(event, PromptChanged):
        if state.is_loading:
            return state
        return replace(state, prompt=event.prompt)

    if isinstance(event, StyleChanged):
        if state.is_loading:
            return state
        return replace(state, style=resolve_style(event.style))

    if isinstance(event, Submit):
        if state.is_loading:
            return state
        if is_blank(state.prompt):
            return replace(state, error=EMPTY_PROMPT_MESSAGE)
        return replace(state, is_loading=True, error=None, image_data_uri=None)

    if isinstance(event, GenerationSucceeded):
        return replace(state, is_loading=False, image_data_uri=event.image_data_uri, error=None)

    if isinstance(event, GenerationFailed):
        # The detailed cause is logged by the service; the user sees a retry hint.
        return replace(
            state,
            is_loading=False,
            image_data_uri=None,
            error=event.message or GENERATION_FAILED_MESSAGE,
        )

    raise TypeError(f"Unknown form event: {event!r}")


def should_generate(state: FormState) -> bool:
    """True when the snapshot is waiting for a generation result."""
    return state.is_loading


def render(state: FormState) -> dict:
    """Build the view model for ``state``.

    Returns:
        Dictionary with the prompt, selected style, button label, whether the
        inputs are disabled, the inline message, the image, and whether the
        print/share actions are available.
    """
    has_image = state.image_data_uri is not None and not state.is_loading
    return {
        "prompt": state.prompt,
        "style": state.style.value,
        "is_loading": state.is_loading,
        "button_label": LOADING_LABEL if state.is_loading else GENERATE_LABEL,
        "inputs_disabled": state.is_loading,
        "error": state.error,
        "image_data_uri": state.image_data_uri if has_image else None,
        "show_actions": has_image,
    }
