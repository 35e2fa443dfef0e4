"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    def mw(next: Runner) -> Runner

Built-in middleware:
    ArgsMiddleware -- Named positional arguments
    FlagsMiddleware -- Leading flags parsed with argparse
    LoggingMiddleware -- Log each call and its arguments
    PingMiddleware -- Network pre-check with httpx
"""

from clir.middleware.args import ArgSet, ArgsMiddleware
from clir.middleware.flags import FlagsMiddleware
from clir.middleware.logs import LoggingMiddleware
from clir.middleware.network import PingMiddleware
from clir.middleware.protocol import Middleware, compose, middleware

__all__ = [
    "ArgSet",
    "ArgsMiddleware",
    "FlagsMiddleware",
    "LoggingMiddleware",
    "Middleware",
    "PingMiddleware",
    "compose",
    "middleware",
]
