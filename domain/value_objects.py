"""
Value Objects for domain modeling
"""
from dataclasses import dataclass
import re


_PROPERTY_NAME = re.compile(r'^[A-Za-z_][A-Za-z0-9_.\-]*$')


@dataclass(frozen=True)
class SystemProperty:
    """System property passed on the command line"""
    name: str
    value: str

    def __post_init__(self):
        if not isinstance(self.name, str) or not _PROPERTY_NAME.match(self.name):
            raise ValueError(f"Invalid system property name: {self.name!r}")

    @classmethod
    def parse(cls, raw: str) -> "SystemProperty":
        """Parse ``name=value``; a bare name gets an empty value"""
        name, _, value = raw.partition('=')
        return cls(name.strip(), value)


@dataclass(frozen=True)
class TaskName:
    """Task selector value object"""
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise ValueError("Task name must be a string")
        if not self.value.strip():
            raise ValueError("Task name cannot be empty")
        if any(ch.isspace() for ch in self.value):
            raise ValueError(f"Task name cannot contain whitespace: {self.value!r}")
