"""
Security Module - Client IP resolution and in-memory rate limiting
"""

import threading
import time
from collections import namedtuple
from flask import request


RateLimitResult = namedtuple('RateLimitResult', ['success', 'remaining', 'reset_time'])

# Rate Limiting
RATE_LIMIT_STORE = {}  # {key: {'count': int, 'reset_time': float}}
RATE_LIMIT_SWEEP_INTERVAL = 5 * 60  # Purge expired entries every 5 minutes
_rate_limit_lock = threading.Lock()
_last_sweep = time.time()


def get_client_ip():
    """Get real client IP address (first hop of X-Forwarded-For when proxied)"""
    forwarded = request.headers.get('X-Forwarded-For')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.remote_addr or '127.0.0.1'


def _sweep_expired(now):
    global _last_sweep
    if now - _last_sweep < RATE_LIMIT_SWEEP_INTERVAL:
        return
    for key in [k for k, entry in RATE_LIMIT_STORE.items() if now > entry['reset_time']]:
        del RATE_LIMIT_STORE[key]
    _last_sweep = now


def rate_limit(key, limit, window_seconds):
    """Fixed-window counter for ``key``.

    The first request of a window opens it; every request past ``limit``
    inside the window is refused until ``reset_time`` (epoch seconds).
    """
    now = time.time()
    with _rate_limit_lock:
        _sweep_expired(now)
        entry = RATE_LIMIT_STORE.get(key)

        if entry is None or now > entry['reset_time']:
            reset_time = now + window_seconds
            RATE_LIMIT_STORE[key] = {'count': 1, 'reset_time': reset_time}
            return RateLimitResult(True, limit - 1, reset_time)

        if entry['count'] >= limit:
            return RateLimitResult(False, 0, entry['reset_time'])

        entry['count'] += 1
        return RateLimitResult(True, limit - entry['count'], entry['reset_time'])


def check_rate_limit(endpoint, limit, window_seconds):
    """Rate limit the current request's IP for ``endpoint``"""
    return rate_limit(f"{endpoint}:{get_client_ip()}", limit, window_seconds)


def reset_rate_limits():
    """Forget every counter"""
    with _rate_limit_lock:
        RATE_LIMIT_STORE.clear()


__all__ = [
    'RateLimitResult',
    'get_client_ip',
    'rate_limit',
    'check_rate_limit',
    'reset_rate_limits',
]
