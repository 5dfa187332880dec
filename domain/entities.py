"""
Domain entities
"""
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, List, Optional

from .enums import LogLevel


@dataclass
class StartParameter:
    """Parameters a build is started with"""
    task_names: List[str] = field(default_factory=list)
    excluded_task_names: List[str] = field(default_factory=list)
    project_dir: Optional[Path] = None
    gradle_user_home: Path = field(default_factory=lambda: Path.home() / ".gradle")
    log_level: LogLevel = LogLevel.LIFECYCLE
    system_properties: Dict[str, str] = field(default_factory=dict)
    offline: bool = False
    rerun_tasks: bool = False

    @property
    def current_dir(self) -> Path:
        """Directory the build runs in"""
        return self.project_dir if self.project_dir is not None else Path.cwd()

    def cache_dir(self, name: str) -> Path:
        """Cache directory under the user home"""
        return self.gradle_user_home / name

    def new_instance(self) -> "StartParameter":
        """Copy with independent collections"""
        return replace(
            self,
            task_names=list(self.task_names),
            excluded_task_names=list(self.excluded_task_names),
            system_properties=dict(self.system_properties),
        )
