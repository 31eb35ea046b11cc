from matchcenter.models.player.base_player import Player, generate_id
from matchcenter.models.player.factory import create_player, parse_player_list

__all__ = [
    "Player",
    "create_player",
    "generate_id",
    "parse_player_list",
]
