"""Reply drafting: variant definitions, prompt building, and the active session."""

from __future__ import annotations

import logging

from assistkit.config import get_settings
from assistkit.errors import AIUnavailableError, GenerationError, ReplyNotReadyError
from assistkit.models.variant import GenerationSlot, SlotStatus, VariantSpec
from assistkit.services.claude_client import get_claude_client
from assistkit.services.clipboard import copy_text
from assistkit.services.coordinator import GenerateFn, VariantCoordinator
from assistkit.services.notifier import get_notifier

logger = logging.getLogger(__name__)

REPLY_VARIANTS: tuple[VariantSpec, ...] = (
    VariantSpec(
        id="short",
        title="Short",
        description="Concise and focused reply",
        expected_length="~1 lines",
        prompt_modifier=(
            "- Concise and focused reply (keep to about 1 line)\n"
            "- Express core response concisely"
        ),
    ),
    VariantSpec(
        id="medium",
        title="Medium",
        description="Reply with moderate detail",
        expected_length="~2-3 lines",
        prompt_modifier=(
            "- Reply with moderate detail (keep to about 2-3 lines)\n"
            "- Address key points from the original text\n"
            "- Include reasons or additional explanations as needed"
        ),
    ),
    VariantSpec(
        id="long",
        title="Long",
        description="Detailed and polite reply",
        expected_length="~5-7 lines",
        prompt_modifier=(
            "- Detailed and polite reply (keep to about 5-7 lines)\n"
            "- Express detailed views or opinions on the original text\n"
            "- Include specific examples and detailed explanations for comprehensive content\n"
            "- Use more polite and considerate expressions"
        ),
    ),
)

GENERAL_MODIFIER = "- General and appropriate reply"

# Low creativity keeps the three lengths consistent with each other.
REPLY_TEMPERATURE = 0.2

_session: VariantCoordinator | None = None


def build_reply_prompt(original_text: str, modifier: str) -> str:
    """Build the reply prompt for one variant."""
    return f"""Please generate an appropriate reply to the following text.

Original text:
{original_text}

Requirements:
- Reply in the same language as the selected text
- Choose appropriate level of formality based on context
- Generate natural and readable reply text
- Choose appropriate reply style based on text content and context
{modifier.strip() or GENERAL_MODIFIER}

Respond with the reply text only."""


async def generate_reply(original_text: str, modifier: str) -> str:
    """Generate one reply with Claude."""
    claude = get_claude_client()
    if not claude:
        raise AIUnavailableError("Cannot access the AI service. Set ANTHROPIC_API_KEY.")

    prompt = build_reply_prompt(original_text, modifier)
    try:
        reply = await claude.ask(prompt, temperature=REPLY_TEMPERATURE)
    except Exception as e:
        raise GenerationError("Failed to generate AI reply.") from e
    if not reply:
        raise GenerationError("The AI service returned an empty reply.")
    return reply


def _notify_settled(spec: VariantSpec, slot: GenerationSlot) -> None:
    notifier = get_notifier()
    if slot.error is not None:
        notifier.failure("Generation Error", slot.error)
    else:
        notifier.success("Reply Generated", f"{spec.title} reply completed")


def start_session(text: str, generate: GenerateFn = generate_reply) -> VariantCoordinator:
    """Replace the active session with one for ``text`` and start all variants."""
    global _session
    if _session is not None:
        _session.close()

    _session = VariantCoordinator(
        text,
        REPLY_VARIANTS,
        generate,
        timeout=get_settings().generation_timeout,
        on_settled=_notify_settled,
    )
    started = _session.start_all()
    logger.info(f"Reply session started for {len(text)} characters ({', '.join(started)})")
    return _session


def get_session() -> VariantCoordinator | None:
    return _session


def close_session() -> None:
    global _session
    if _session is not None:
        _session.close()
    _session = None


def copy_reply(session: VariantCoordinator, variant_id: str) -> str:
    """Copy a finished reply to the clipboard and return it."""
    spec = session.spec(variant_id)
    slot = session.slot(variant_id)
    if slot.status != SlotStatus.DONE or slot.result is None:
        raise ReplyNotReadyError(f"{spec.title} reply is not ready ({slot.status.value})")

    copy_text(slot.result)
    get_notifier().success(f"{spec.title} reply copied")
    return slot.result


def copy_original(session: VariantCoordinator) -> str:
    """Copy the text being replied to back to the clipboard."""
    copy_text(session.source_text)
    get_notifier().success("Original text copied")
    return session.source_text
