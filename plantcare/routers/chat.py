from typing import List

from fastapi import APIRouter, Depends, Request
from pydantic import Field

from plantcare.config import RATE_LIMIT
from plantcare.dependencies import get_gateway, limiter
from plantcare.models import ChatPersona, ChatTurn, TargetLanguage, WireModel
from plantcare.services import chat as chat_service
from plantcare.services.gateway import AIGateway

router = APIRouter(prefix="/api")


class ChatRequest(WireModel):
    history: List[ChatTurn] = Field(default_factory=list)
    message: str


class TranslateRequest(WireModel):
    text: str
    target_language: TargetLanguage


@router.post("/chat/{persona}")
@limiter.limit(RATE_LIMIT)
async def chat(
    request: Request,
    persona: ChatPersona,
    body: ChatRequest,
    gateway: AIGateway = Depends(get_gateway),
):
    reply = await chat_service.chat(gateway, persona, body.history, body.message)
    return {"reply": reply}


@router.post("/translate")
@limiter.limit(RATE_LIMIT)
async def translate(
    request: Request,
    body: TranslateRequest,
    gateway: AIGateway = Depends(get_gateway),
):
    translation = await chat_service.translate_text(gateway, body.text, body.target_language)
    return {"translation": translation}
