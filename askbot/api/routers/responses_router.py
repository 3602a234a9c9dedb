"""Chat feedback templates."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from askbot.api.dependencies import get_tag_service, require_login
from askbot.api.services import TagService

router = APIRouter(
    prefix="/responses", tags=["responses"], dependencies=[Depends(require_login)]
)


class ResponseMessages(BaseModel):
    success: str = ""
    failure: str = ""


@router.get("", response_model=ResponseMessages)
async def get_responses(service: TagService = Depends(get_tag_service)) -> ResponseMessages:
    success, failure = service.get_responses()
    return ResponseMessages(success=success, failure=failure)


@router.put("", response_model=ResponseMessages)
async def set_responses(
    body: ResponseMessages, service: TagService = Depends(get_tag_service)
) -> ResponseMessages:
    success, failure = service.set_responses(body.success, body.failure)
    return ResponseMessages(success=success, failure=failure)
