import logging
from typing import Sequence

from plantcare.errors import InputFailure
from plantcare.models import ChatPersona, ChatTurn, TargetLanguage
from plantcare.services.gateway import AIGateway
from plantcare.services.prompts import CHAT_INSTRUCTIONS, translation_prompt

logger = logging.getLogger(__name__)


async def chat(gateway: AIGateway, persona: ChatPersona, history: Sequence[ChatTurn], message: str) -> str:
    """Send one chat turn to ``persona``.

    Stateless: every call starts a fresh request carrying the persona
    instruction plus the full transcript the caller passes in. Nothing is
    stored here; the caller owns the history.
    """
    message = (message or "").strip()
    if not message:
        raise InputFailure("Please type a message.")

    logger.info(f"Chat turn for {persona.value} ({len(history)} prior turns)")
    return await gateway.chat(CHAT_INSTRUCTIONS[persona], list(history), message)


async def chat_with_botanist(gateway: AIGateway, history: Sequence[ChatTurn], message: str) -> str:
    return await chat(gateway, ChatPersona.BOTANIST, history, message)


async def chat_with_garden_master(gateway: AIGateway, history: Sequence[ChatTurn], message: str) -> str:
    return await chat(gateway, ChatPersona.GARDEN_MASTER, history, message)


async def chat_with_soil_expert(gateway: AIGateway, history: Sequence[ChatTurn], message: str) -> str:
    return await chat(gateway, ChatPersona.SOIL_EXPERT, history, message)


async def translate_text(gateway: AIGateway, text: str, target_language: TargetLanguage) -> str:
    """Translate assistant text, keeping its markdown formatting."""
    if not (text or "").strip():
        raise InputFailure("There is no text to translate.")

    logger.info(f"Translating {len(text)} chars into {target_language.value}")
    reply = await gateway.generate(translation_prompt(text, target_language))
    return reply.text
