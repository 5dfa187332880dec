"""
Command-line to start parameter conversion
"""
import argparse
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

import config
from core.exceptions import CommandLineArgumentError
from core.interfaces import StartParameterConverter
from core.validators import StartParameterValidator
from domain.entities import StartParameter
from domain.enums import LogLevel
from domain.value_objects import SystemProperty


class _RaisingArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting"""

    def error(self, message):
        raise CommandLineArgumentError(message)


class DefaultStartParameterConverter(StartParameterConverter):
    """Converts build command-line arguments using argparse"""

    def __init__(self):
        self._parser: Optional[argparse.ArgumentParser] = None

    def _build_parser(self) -> argparse.ArgumentParser:
        parser = _RaisingArgumentParser(prog='build', add_help=False, allow_abbrev=False)
        parser.add_argument('tasks', nargs='*')
        parser.add_argument('-p', '--project-dir', type=Path)
        parser.add_argument('-g', '--gradle-user-home', type=Path)
        parser.add_argument('-x', '--exclude-task', action='append')
        parser.add_argument('-D', '--system-prop', action='append')
        parser.add_argument('--offline', action='store_true')
        parser.add_argument('--rerun-tasks', action='store_true')

        levels = parser.add_mutually_exclusive_group()
        levels.add_argument('-q', '--quiet', dest='log_level', action='store_const', const=LogLevel.QUIET)
        levels.add_argument('-i', '--info', dest='log_level', action='store_const', const=LogLevel.INFO)
        levels.add_argument('-d', '--debug', dest='log_level', action='store_const', const=LogLevel.DEBUG)
        return parser

    @property
    def parser(self) -> argparse.ArgumentParser:
        # built on first use so construction stays free of work
        if self._parser is None:
            self._parser = self._build_parser()
        return self._parser

    def convert(self, args: Sequence[str], start_parameter: Optional[StartParameter] = None) -> StartParameter:
        """Convert arguments, layering them over start_parameter if given"""
        options = self.parser.parse_intermixed_args(list(args))
        base = start_parameter.new_instance() if start_parameter is not None else None

        try:
            properties = dict(base.system_properties) if base else {}
            for raw in options.system_prop or []:
                prop = SystemProperty.parse(raw)
                properties[prop.name] = prop.value

            validated = StartParameterValidator(
                task_names=options.tasks or (base.task_names if base else []),
                excluded_task_names=(base.excluded_task_names if base else []) + (options.exclude_task or []),
                project_dir=options.project_dir or (base.project_dir if base else None),
                gradle_user_home=options.gradle_user_home or (base.gradle_user_home if base else config.GRADLE_USER_HOME),
                log_level=options.log_level or (base.log_level if base else config.DEFAULT_LOG_LEVEL),
                system_properties=properties,
                offline=options.offline or (base.offline if base else False),
                rerun_tasks=options.rerun_tasks or (base.rerun_tasks if base else False),
            )
        except (ValueError, PydanticValidationError) as e:
            raise CommandLineArgumentError(f"Invalid command line: {e}")

        return StartParameter(**validated.model_dump())

    def format_usage(self) -> str:
        return self.parser.format_usage()
