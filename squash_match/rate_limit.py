"""
Rate limiting configuration using slowapi.

Three tiers:
  • strict  – 5/min  (coach advice – each call hits the Gemini API)
  • write   – 30/min (booking creation, join/cancel/leave requests, confirmations)
  • default – 60/min (everything else)

The limiter keys on client IP by default.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address, default_limits=["60/minute"])

# Named rate strings for use in @limiter.limit() decorators
STRICT = "5/minute"     # coach advice (external API)
WRITE = "30/minute"     # booking mutations
DEFAULT = "60/minute"   # general API
