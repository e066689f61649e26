from pydantic import BaseModel, Field, field_validator
from typing import Union

class Template(BaseModel):
    """Stored form of a template. Only the structure is persisted."""
    structure: str = Field(min_length=1)

class TemplateCreate(BaseModel):
    id: Union[int, str]  # Stored under str(id)
    structure: str = Field(min_length=1)

    @field_validator("id")
    @classmethod
    def id_not_empty(cls, value: Union[int, str]) -> Union[int, str]:
        if isinstance(value, str) and not value:
            raise ValueError("id must not be empty")
        return value

    def storage_key(self) -> str:
        return str(self.id)

    def to_record(self) -> Template:
        return Template(structure=self.structure)
