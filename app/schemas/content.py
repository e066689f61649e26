from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Union

from app.utils.path import content_key

class Content(BaseModel):
    """Stored form of a content record, keyed by its path."""
    model_config = ConfigDict(populate_by_name=True)

    template_id: Union[int, str] = Field(alias="templateId")
    title: str = ""
    content: str
    style: str = ""
    script: str = ""

    @field_validator("title", "style", "script", mode="before")
    @classmethod
    def none_as_empty(cls, value: Optional[str]) -> str:
        return "" if value is None else value

class ContentCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    path: str = Field(min_length=1)
    template_id: Union[int, str] = Field(alias="templateId")
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    style: Optional[str] = None
    script: Optional[str] = None

    @field_validator("path")
    @classmethod
    def path_has_key(cls, value: str) -> str:
        if not content_key(value):
            raise ValueError("path must name a page")
        return value

    @field_validator("template_id")
    @classmethod
    def template_id_not_empty(cls, value: Union[int, str]) -> Union[int, str]:
        if isinstance(value, str) and not value:
            raise ValueError("templateId must not be empty")
        return value

    def storage_key(self) -> str:
        return content_key(self.path)

    def to_record(self) -> Content:
        """Normalizes the payload: style and script default to empty strings."""
        return Content(
            template_id=self.template_id,
            title=self.title,
            content=self.content,
            style=self.style or "",
            script=self.script or "",
        )
