"""Asynchronous page operations with lifecycle notifications.

This package provides the validator, the notification sinks and the
PageActions orchestrator that ties validation, transport calls and
notifications together.
"""

from .validator import Validator, Rule, DEFAULT_RULES, required_metadata, validate_page
from .sinks import CallbackSink, QueueSink, RecordingSink, LoggingSink, as_sink
from .page_actions import PageActions, error_message

__all__ = [
    'Validator',
    'Rule',
    'DEFAULT_RULES',
    'required_metadata',
    'validate_page',
    'CallbackSink',
    'QueueSink',
    'RecordingSink',
    'LoggingSink',
    'as_sink',
    'PageActions',
    'error_message',
]
