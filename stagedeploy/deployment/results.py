#!/usr/bin/env python3
"""
Deployment states, error kinds and results.

Steps raise DeploymentError; deployers catch it at their boundary and hand a
DeployResult back to the menu, which never stops on a failed deployment.
"""

from dataclasses import dataclass, field
from enum import Enum


class State(Enum):
    AWAITING_SOURCE_NAME = 'awaiting source name'
    VALIDATING = 'validating'
    BACKING_UP = 'backing up'
    REPLACING = 'replacing'
    COPYING = 'copying'
    SETTING_OWNERSHIP = 'setting ownership'
    DONE = 'done'
    FAILED = 'failed'


class ErrorKind(Enum):
    EMPTY_INPUT = 'EmptyInput'
    SOURCE_NOT_FOUND = 'SourceNotFound'
    PERMISSION_DENIED = 'PermissionDenied'
    BACKUP_FAILED = 'BackupFailed'
    EXTRACTION_FAILED = 'ExtractionFailed'
    MOVE_FAILED = 'MoveFailed'
    COPY_FAILED = 'CopyFailed'
    OWNERSHIP_WARNING = 'OwnershipWarning'

    @property
    def fatal(self):
        return self is not ErrorKind.OWNERSHIP_WARNING


class DeploymentError(Exception):
    """Fatal failure of one deployment step."""

    def __init__(self, kind, message, hint=None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.hint = hint


@dataclass(frozen=True)
class StepWarning:
    kind: ErrorKind
    message: str


@dataclass
class DeployResult:
    target: str
    state: State = State.AWAITING_SOURCE_NAME
    error: DeploymentError = None
    failed_state: State = None
    warnings: list = field(default_factory=list)
    source: str = None
    backup: str = None

    @property
    def ok(self):
        return self.state is State.DONE

    @property
    def error_kind(self):
        return self.error.kind if self.error else None

    def advance(self, state):
        self.state = state

    def fail(self, error):
        self.failed_state = self.state
        self.error = error
        self.state = State.FAILED

    def warn(self, kind, message):
        self.warnings.append(StepWarning(kind, message))
