# ruff: noqa: F403, F401
"""Schemas package initialization."""

from .base import *
from .label import *
from .ordering import *
from .project import *
from .task import *
from .transfer import *
