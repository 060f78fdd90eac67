"""
Players

- player list with name / gender / hand / age group filters
- player detail with test results
- create / update / delete
"""

from .router import router as players_router
from .service import PlayerService, get_player_service

__all__ = ["players_router", "PlayerService", "get_player_service"]
