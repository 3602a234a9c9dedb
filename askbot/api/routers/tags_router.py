"""Tag configuration routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from askbot.api.dependencies import get_tag_service, require_login
from askbot.api.services import TagNotFoundError, TagService
from askbot.shared.models.config import CHANNEL, Tag

router = APIRouter(prefix="/tags", tags=["tags"], dependencies=[Depends(require_login)])


class TagBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tag: str
    webhook: str
    description: str = ""
    channel_type: str = Field(default=CHANNEL, alias="type")

    @classmethod
    def from_tag(cls, tag: Tag) -> TagBody:
        return cls(
            tag=tag.tag,
            webhook=tag.webhook,
            description=tag.description,
            channel_type=tag.channel_type,
        )

    def to_tag(self) -> Tag:
        return Tag(
            tag=self.tag,
            webhook=self.webhook,
            description=self.description,
            channel_type=self.channel_type,
        )


@router.get("/list", response_model=list[TagBody])
async def get_tags(service: TagService = Depends(get_tag_service)) -> list[TagBody]:
    return [TagBody.from_tag(t) for t in service.list_tags()]


@router.post("/add", response_model=list[TagBody])
async def add_tag(
    body: TagBody, service: TagService = Depends(get_tag_service)
) -> list[TagBody]:
    return [TagBody.from_tag(t) for t in service.add_tag(body.to_tag())]


@router.put("/{tag_id}", response_model=TagBody)
async def update_tag(
    tag_id: int, body: TagBody, service: TagService = Depends(get_tag_service)
) -> TagBody:
    try:
        return TagBody.from_tag(service.replace_tag(tag_id, body.to_tag()))
    except TagNotFoundError as e:
        raise HTTPException(status_code=404, detail="Tag not found") from e


@router.delete("/{tag_id}", response_model=TagBody)
async def delete_tag(tag_id: int, service: TagService = Depends(get_tag_service)) -> TagBody:
    try:
        return TagBody.from_tag(service.remove_tag(tag_id))
    except TagNotFoundError as e:
        raise HTTPException(status_code=404, detail="Tag not found") from e
