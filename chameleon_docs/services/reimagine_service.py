"""Reimagine: rewrite page content at a reading level through a hosted model.

Stateless. The prompt is built from one of the level instructions (or a
custom instruction) and sent to the configured LiteLLM model with
``stream=True``; text deltas are relayed to the caller as they arrive.
"""

import logging
from typing import Any, Iterator, Optional

from ..core.config import settings
from ..exceptions import UpstreamError, ValidationError

logger = logging.getLogger(__name__)

_FORMAT_RULES = (
    "Keep the formatting (Markdown) clean.\n"
    "Only return the modified text, no explanations."
)

LEVEL_INSTRUCTIONS = {
    "technical": (
        "You are a senior principal engineer.\n"
        "Rewrite the following documentation to be highly technical and rigorous.\n"
        "Focus on precise terminology, implementation specifics, and edge cases.\n"
        "Maintain professional tone. No analogies or simplified explanations.\n"
        + _FORMAT_RULES
    ),
    "standard": (
        "You are a documentation editor.\n"
        "Make minimal rephrasing to the following documentation for improved clarity.\n"
        "Preserve the original meaning and technical accuracy.\n"
        "Only fix grammar issues or slightly awkward phrasing.\n"
        "Maintain professional tone.\n"
        + _FORMAT_RULES
    ),
    "simplified": (
        "You are a technical writer.\n"
        "Rewrite the following documentation with clearer, more accessible language.\n"
        "Reduce jargon where possible without losing accuracy.\n"
        "Keep explanations direct and professional.\n"
        "Maintain the same information depth but improve readability.\n"
        + _FORMAT_RULES
    ),
    "beginner": (
        "You are a technical educator.\n"
        "Rewrite the following documentation for someone with basic technical knowledge.\n"
        "Explain concepts clearly without assuming prior expertise.\n"
        "Break down complex ideas into simpler components.\n"
        "Maintain a professional and direct tone.\n"
        + _FORMAT_RULES
    ),
    "noob": (
        "You are a patient technical educator writing for complete beginners.\n"
        "Rewrite the following documentation to be extremely accessible.\n"
        "Assume no prior technical knowledge.\n"
        "Use simple language and explain every concept from first principles.\n"
        "Break complex ideas into small, digestible steps.\n"
        "Maintain a professional and clear tone.\n"
        + _FORMAT_RULES
    ),
}

CUSTOM_INSTRUCTION_TEMPLATE = (
    "You are an expert editor and writing assistant.\n"
    "Apply the following instruction to the given text.\n"
    "Keep the same general format (Markdown if present).\n"
    "Only return the modified text, no explanations or extra content.\n"
    "\n"
    "Instruction: {prompt}"
)


def validate_content(content: Any, max_length: Optional[int] = None) -> str:
    """Return *content* if it is a non-empty string within the size limit."""
    if not content or not isinstance(content, str):
        raise ValidationError("Content is required", field="content")
    limit = settings.reimagine_max_content_length if max_length is None else max_length
    if len(content) > limit:
        raise ValidationError("Content too large", field="content")
    return content


def select_instruction(
    mode: Optional[str] = None,
    prompt: Optional[str] = None,
    simplification_level: Optional[str] = None,
) -> str:
    """Pick the instruction for a request.

    Custom mode with a prompt wins, then a known level, then ``simple``
    mode (simplified); anything else gets the technical instruction.
    """
    if mode == "custom" and prompt:
        return CUSTOM_INSTRUCTION_TEMPLATE.format(prompt=prompt)
    if simplification_level and simplification_level in LEVEL_INSTRUCTIONS:
        return LEVEL_INSTRUCTIONS[simplification_level]
    if mode == "simple":
        return LEVEL_INSTRUCTIONS["simplified"]
    return LEVEL_INSTRUCTIONS["technical"]


def build_prompt(instruction: str, content: str) -> str:
    return f"{instruction}\n\n---\n\nText to modify:\n{content}"


def _chunk_text(chunk: Any) -> str:
    """Text delta of one streamed LiteLLM chunk ("" for role/finish chunks)."""
    try:
        return chunk.choices[0].delta.content or ""
    except (AttributeError, IndexError):
        return ""


def _completion_stream(prompt: str) -> Iterator[Any]:
    if not settings.is_reimagine_configured():
        raise UpstreamError("Reimagine model is not configured")

    import litellm

    completion_kwargs: dict = {
        "model": settings.reimagine_model,
        "messages": [{"role": "user", "content": prompt}],
        "stream": True,
        "timeout": settings.reimagine_timeout,
    }
    if settings.reimagine_api_key:
        completion_kwargs["api_key"] = settings.reimagine_api_key
    if settings.reimagine_api_base:
        completion_kwargs["api_base"] = settings.reimagine_api_base

    return iter(litellm.completion(**completion_kwargs))


def open_rewrite_stream(prompt: str) -> Iterator[str]:
    """Start the upstream stream and return an iterator of text deltas.

    The first non-empty delta is fetched before returning, so a failure to
    reach the model raises UpstreamError here, while the caller can still
    send an error status. A failure after that point is logged and
    re-raised from the iterator, which aborts the response body so the
    client sees a broken stream rather than a short rewrite.
    """
    try:
        chunks = _completion_stream(prompt)
        first = ""
        for chunk in chunks:
            first = _chunk_text(chunk)
            if first:
                break
    except UpstreamError:
        logger.warning("Reimagine requested but no model is configured")
        raise
    except Exception as e:
        logger.exception("Reimagine upstream request failed")
        raise UpstreamError(original_error=e)

    def relay() -> Iterator[str]:
        if first:
            yield first
        try:
            for chunk in chunks:
                text = _chunk_text(chunk)
                if text:
                    yield text
        except Exception:
            logger.exception("Reimagine stream interrupted")
            raise

    return relay()


def rewrite(
    content: Any,
    mode: Optional[str] = None,
    prompt: Optional[str] = None,
    simplification_level: Optional[str] = None,
) -> Iterator[str]:
    """Validate, build the prompt and open the stream for one rewrite request."""
    text = validate_content(content)
    instruction = select_instruction(mode, prompt, simplification_level)
    logger.info(
        "Reimagine request",
        extra={"mode": mode or "", "level": simplification_level or "", "chars": len(text)},
    )
    return open_rewrite_stream(build_prompt(instruction, text))
