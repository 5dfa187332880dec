"""
Tests for the domain model
"""
import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from core.validators import CacheSettingsValidator, StartParameterValidator
from domain.entities import StartParameter
from domain.enums import LIFECYCLE, LogLevel
from domain.value_objects import SystemProperty, TaskName


class TestValueObjects:
    """Tests for value objects"""

    def test_system_property_parse(self):
        """Test name=value parsing"""
        prop = SystemProperty.parse("org.example.mode=fast=true")
        assert prop.name == "org.example.mode"
        assert prop.value == "fast=true"

        # bare name
        assert SystemProperty.parse("flag") == SystemProperty("flag", "")

    def test_system_property_name_validation(self):
        """Test invalid property names"""
        with pytest.raises(ValueError):
            SystemProperty("", "x")
        with pytest.raises(ValueError):
            SystemProperty("has space", "x")

    def test_task_name_validation(self):
        """Test task name rules"""
        assert TaskName(":app:build").value == ":app:build"

        with pytest.raises(ValueError):
            TaskName("  ")
        with pytest.raises(ValueError):
            TaskName("two words")


class TestEnums:
    """Tests for enums"""

    def test_log_level_parse(self):
        """Test case-insensitive parsing"""
        assert LogLevel.parse("INFO") is LogLevel.INFO
        assert LogLevel.parse(" quiet ") is LogLevel.QUIET

        with pytest.raises(ValueError):
            LogLevel.parse("verbose")

    def test_python_levels_are_ordered(self):
        """Test mapping to logging levels"""
        assert LogLevel.DEBUG.python_level == logging.DEBUG
        assert logging.INFO < LogLevel.LIFECYCLE.python_level == LIFECYCLE < logging.WARNING
        assert LogLevel.QUIET.python_level == logging.ERROR


class TestStartParameter:
    """Tests for StartParameter"""

    def test_defaults(self):
        """Test default values"""
        parameter = StartParameter()
        assert parameter.task_names == []
        assert parameter.log_level is LogLevel.LIFECYCLE
        assert parameter.current_dir == Path.cwd()

    def test_cache_dir(self, tmp_path):
        """Test cache directories live under the user home"""
        parameter = StartParameter(gradle_user_home=tmp_path, project_dir=tmp_path / "p")
        assert parameter.cache_dir("caches") == tmp_path / "caches"
        assert parameter.current_dir == tmp_path / "p"

    def test_new_instance_is_independent(self):
        """Test copies do not share collections"""
        original = StartParameter(task_names=["build"], system_properties={"a": "1"})
        copy = original.new_instance()

        copy.task_names.append("test")
        copy.system_properties["b"] = "2"

        assert original.task_names == ["build"]
        assert original.system_properties == {"a": "1"}
        assert copy == StartParameter(task_names=["build", "test"], system_properties={"a": "1", "b": "2"})


class TestValidators:
    """Tests for validators"""

    def test_start_parameter_validator(self, tmp_path):
        """Test valid start parameters"""
        validated = StartParameterValidator(
            task_names=["build"],
            gradle_user_home=str(tmp_path),
            log_level="DEBUG",
        )
        assert validated.gradle_user_home == tmp_path
        assert validated.log_level is LogLevel.DEBUG

    def test_start_parameter_validator_rejects(self, tmp_path):
        """Test invalid start parameters"""
        with pytest.raises(ValidationError):
            StartParameterValidator(task_names=[""], gradle_user_home=tmp_path)
        with pytest.raises(ValidationError):
            StartParameterValidator(gradle_user_home=tmp_path, log_level="loud")
        with pytest.raises(ValidationError):
            StartParameterValidator(gradle_user_home=tmp_path, system_properties={"bad name": "x"})

    def test_cache_settings_validator(self, tmp_path):
        """Test cache settings"""
        settings = CacheSettingsValidator(cache_dir=tmp_path, properties={"v": "1"})
        assert settings.properties == {"v": "1"}

        with pytest.raises(ValidationError):
            CacheSettingsValidator(cache_dir="")
