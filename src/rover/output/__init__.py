"""Rendering of command outcomes for humans and machines."""

from .dispatch import Dispatcher, exit_code_for
from .envelope import JSON_VERSION, JsonData, JsonError, JsonOutput
from .human import HumanReport, render_human, render_human_error
from .machine import UnhandledOutputError, render_machine

__all__ = [
    "Dispatcher",
    "exit_code_for",
    "JSON_VERSION",
    "JsonData",
    "JsonError",
    "JsonOutput",
    "HumanReport",
    "render_human",
    "render_human_error",
    "UnhandledOutputError",
    "render_machine",
]
