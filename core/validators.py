"""
Data validators using Pydantic
"""
from pathlib import Path
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from domain.enums import LogLevel
from domain.value_objects import SystemProperty, TaskName


class StartParameterValidator(BaseModel):
    """Start parameter validator"""
    task_names: List[str] = Field(default_factory=list)
    excluded_task_names: List[str] = Field(default_factory=list)
    project_dir: Optional[Path] = None
    gradle_user_home: Path
    log_level: LogLevel = LogLevel.LIFECYCLE
    system_properties: Dict[str, str] = Field(default_factory=dict)
    offline: bool = False
    rerun_tasks: bool = False

    @field_validator('task_names', 'excluded_task_names')
    @classmethod
    def validate_task_names(cls, v):
        return [TaskName(name).value for name in v]

    @field_validator('system_properties')
    @classmethod
    def validate_system_properties(cls, v):
        for name, value in v.items():
            SystemProperty(name, value)
        return v

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        if isinstance(v, str):
            return LogLevel.parse(v)
        return v


class CacheSettingsValidator(BaseModel):
    """Cache settings validator"""
    cache_dir: Path
    properties: Dict[str, str] = Field(default_factory=dict)

    @field_validator('cache_dir')
    @classmethod
    def validate_cache_dir(cls, v):
        if not str(v).strip() or str(v) == '.':
            raise ValueError('Cache directory cannot be empty')
        return v
