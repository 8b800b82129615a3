# flixcloud/api/__init__.py
from .webhook import api, dispatcher

__all__ = [
    "api",
    "dispatcher",
]
