"""Text-to-speech proxy that streams ElevenLabs audio to the browser."""
from __future__ import annotations

import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.background import BackgroundTask

from ..config import get_config
from ..schemas import TTSRequest

LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["tts"])

ELEVEN_LABS_URL = "https://api.elevenlabs.io/v1/text-to-speech/{voice_id}"
TTS_MODEL_ID = "eleven_multilingual_v2"
VOICE_SETTINGS = {"stability": 0.5, "similarity_boost": 0.8}


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def _failure() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Failed to synthesize speech"},
    )


@router.post("/tts")
async def synthesize_speech(
    payload: Optional[TTSRequest] = None,
    http_client: httpx.AsyncClient = Depends(get_http_client),
):
    payload = payload or TTSRequest()
    if not payload.text:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Text is required"})

    config = get_config()
    if not config.ELEVEN_LABS_API_KEY:
        LOGGER.error("TTS error: ELEVEN_LABS_API_KEY is not configured")
        return _failure()

    upstream_request = http_client.build_request(
        "POST",
        ELEVEN_LABS_URL.format(voice_id=config.ELEVEN_LABS_VOICE_ID),
        headers={
            "xi-api-key": config.ELEVEN_LABS_API_KEY,
            "Content-Type": "application/json",
            "Accept": "audio/mpeg",
        },
        json={"text": payload.text, "model_id": TTS_MODEL_ID, "voice_settings": VOICE_SETTINGS},
    )
    try:
        upstream = await http_client.send(upstream_request, stream=True)
    except httpx.HTTPError as exc:
        LOGGER.error("TTS error: %s", exc)
        return _failure()

    if upstream.status_code >= 400:
        body = await upstream.aread()
        await upstream.aclose()
        LOGGER.error("TTS error: ElevenLabs returned %s: %s", upstream.status_code, body[:500])
        return _failure()

    return StreamingResponse(
        upstream.aiter_bytes(),
        media_type="audio/mpeg",
        background=BackgroundTask(upstream.aclose),
    )
