"""Routing — command patterns and the router tree.

Routes are registered during setup and compiled into an immutable
dispatch structure when the router freezes.
"""

from clir.routing.pattern import ROOT, Pattern
from clir.routing.router import FrozenRouter, RouteInfo, Router

__all__ = ["ROOT", "FrozenRouter", "Pattern", "RouteInfo", "Router"]
