# inzozi/application/dtos/base_dto.py

from pydantic import BaseModel, ConfigDict


class CustomBaseModel(BaseModel):
    """Base for every DTO: reads ORM attributes and accepts field names or aliases."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
