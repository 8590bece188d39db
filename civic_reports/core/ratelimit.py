# File: civic_reports\core\ratelimit.py
# Project: civic-reports-backend
# Auto-added for reference

from slowapi import Limiter
from slowapi.util import get_remote_address

from civic_reports.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)
