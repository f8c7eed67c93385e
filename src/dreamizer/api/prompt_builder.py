"""Dream prompt template compilation.

A prompt template is plain text containing a single ``{{DREAM}}``
placeholder.  The user's dream phrase is substituted into it to produce the
instruction sent to the image-edit model.

Template Presets
----------------
``medium-shot`` (default)::

    Medium shot of this character {{DREAM}}

``identity-cinematic``::

    Cinematic portrait of this EXACT SAME PERSON {{DREAM}}.
    CRITICAL: ... identity-preserving edit ...
    Dramatic cinematic lighting, photorealistic, epic movie poster quality.

The browser may also send its own template.  A blank or missing template
falls back to the default.  Every placeholder is replaced; a
template without a placeholder is sent as-is.

Usage
-----
::

    prompt = craft_prompt("winning an Olympic medal")
    # "Medium shot of this character winning an Olympic medal"
"""

from __future__ import annotations

DREAM_PLACEHOLDER = "{{DREAM}}"

DEFAULT_PROMPT_TEMPLATE = f"Medium shot of this character {DREAM_PLACEHOLDER}"

# ---------------------------------------------------------------------------
# Identity-preserving template.  Models drift toward a generic face when the
# scene description dominates; the repeated identity constraints keep the
# subject recognisable.
# ---------------------------------------------------------------------------

_IDENTITY_CINEMATIC_TEMPLATE = (
    f"Cinematic portrait of this EXACT SAME PERSON {DREAM_PLACEHOLDER}.\n"
    "CRITICAL: The person in the output MUST be the SAME INDIVIDUAL as in the input image - "
    "same face structure, same nose, same eyes, same skin tone, same hair color and style. "
    "This is an identity-preserving edit.\n"
    "Show the person from chest/shoulders up, naturally integrated into the dream scene.\n"
    "The face should be clearly recognizable and well-lit, taking about 25-30% of the frame.\n"
    f'Create a balanced composition where both the person AND the "{DREAM_PLACEHOLDER}" '
    "environment are equally important.\n"
    "The person should appear to be genuinely IN the scene, not just pasted on top.\n"
    "The expression can be different (showing wonder, joy, achievement) but the IDENTITY must "
    "remain 100% consistent - it must be unmistakably the same human being.\n"
    "Preserve: exact facial bone structure, eye shape and color, nose shape, lip shape, skin "
    "complexion, hair texture and color, any distinctive features like moles or freckles.\n"
    "Dramatic cinematic lighting, photorealistic, epic movie poster quality. 8k, sharp details."
)

PROMPT_TEMPLATES: dict[str, dict[str, str]] = {
    "medium-shot": {
        "label": "Medium shot",
        "value": DEFAULT_PROMPT_TEMPLATE,
    },
    "identity-cinematic": {
        "label": "Identity-preserving cinematic portrait",
        "value": _IDENTITY_CINEMATIC_TEMPLATE,
    },
}


def craft_prompt(dream: str, template: str | None = None) -> str:
    """Substitute the dream phrase into a prompt template.

    Args:
        dream: The user's dream, e.g. ``"flying through the clouds"``.
            Surrounding whitespace is removed.
        template: Template text containing ``{{DREAM}}``.  ``None`` or a
            blank string selects :data:`DEFAULT_PROMPT_TEMPLATE`.

    Returns:
        The compiled prompt.
    """
    prompt_template = template if template and template.strip() else DEFAULT_PROMPT_TEMPLATE
    return prompt_template.replace(DREAM_PLACEHOLDER, dream.strip())


def basic_prompt(dream: str) -> str:
    """Return the default-template prompt for *dream*."""
    return craft_prompt(dream)


def list_templates() -> list[dict[str, str]]:
    """Return the template presets in the shape served by ``/api/config``."""
    return [{"id": key, **preset} for key, preset in PROMPT_TEMPLATES.items()]
