"""Ambient services shared by the geometry tools: messaging, settings and errors."""

from .channel import *
from .exceptions import *
from .settings import *
