from typing import Optional
from pydantic import BaseModel, Field, ValidationError
from recovery_models.schemas import ExperienceLevel

class SettingsSchema(BaseModel):
    user_level: ExperienceLevel = ExperienceLevel.INTERMEDIATE
    base_rest_interval: float = Field(48.0, ge=12, le=72)
    forecast_days: int = Field(7, ge=1, le=28)
    log_level: str = "INFO"
    log_file: Optional[str] = None

def validate_settings(data: dict) -> SettingsSchema:
    try:
        return SettingsSchema(**data)
    except ValidationError as e:
        raise ValueError(str(e))
