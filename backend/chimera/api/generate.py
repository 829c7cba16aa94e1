"""
Generation API endpoint - Relays a prompt to the model and returns its text
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from chimera.errors import GenerationError, ModelClientError
from chimera.llm.client import LLMClient, is_api_key_configured
from chimera.models.game import GenerateRequest, GenerateResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def get_llm_client() -> LLMClient:
    return LLMClient()


@router.post("/generate", response_model=GenerateResponse)
async def generate(request: GenerateRequest, llm: LLMClient = Depends(get_llm_client)):
    """Send the prompt to the model and return the generated text"""
    if not request.prompt or not request.prompt.strip():
        raise HTTPException(status_code=400, detail="Prompt is required")

    if not is_api_key_configured():
        logger.error("Generation requested but no API key is configured")
        raise HTTPException(status_code=500, detail="API key not configured on server")

    try:
        text = await llm.complete(request.prompt)
    except ModelClientError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail={"message": "Error from model API", "details": e.details},
        )
    except GenerationError as e:
        logger.error(f"Model returned no text: {e}")
        raise HTTPException(status_code=500, detail=e.message)
    except Exception as e:
        logger.exception("Internal Server Error")
        raise HTTPException(
            status_code=500,
            detail={"message": "Internal Server Error", "details": str(e)},
        )

    if not text:
        raise HTTPException(status_code=500, detail="Model did not return any text.")

    return GenerateResponse(text=text)
