"""Shared slowapi limiter; AI routes are the expensive ones."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from hirely.config import settings

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.DEFAULT_RATE_LIMIT])
