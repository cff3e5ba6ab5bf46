"""Game recommendations.

Public game catalogs either need an API key or block browser-style
requests, so this category is served from a fixed sample of popular
multiplayer titles.
"""

from __future__ import annotations

from types import MappingProxyType

from .base import StaticCatalogAdapter

GAMES = (
    {"id": "1", "title": "Fortnite", "genre": "Battle Royale", "year": 2017, "image": "https://cdn2.unrealengine.com/fortnite-og-share-1200x630-d9bd251f1900.jpg", "description": "Battle Royale gratuito con 100 jugadores"},
    {"id": "2", "title": "League of Legends", "genre": "MOBA", "year": 2009, "image": "https://images.contentstack.io/v3/assets/blt731acb42bb3d1659/blt370fa5db9c727e51/5db05fa8347d1c6baa57be25/RiotX_ChampionList_lol.jpg", "description": "MOBA competitivo 5v5"},
    {"id": "3", "title": "Valorant", "genre": "Shooter", "year": 2020, "image": "https://cmsassets.rgpub.io/sanity/images/dsfx7636/news/b0cf8a70ec27dc9d3e53c4f16c66b1e9c97ee57b-3840x2160.jpg", "description": "Shooter táctico 5v5"},
    {"id": "4", "title": "Apex Legends", "genre": "Battle Royale", "year": 2019, "image": "https://cdn1.epicgames.com/offer/1853c37eaf194ee0b3f04410cdf7d26e/EGS_ApexLegends_RespawnEntertainment_S1_2560x1440-6c54e024c2f7a1f67bb3bd2b4e44bf46", "description": "Battle Royale con héroes únicos"},
    {"id": "5", "title": "Overwatch 2", "genre": "Shooter", "year": 2022, "image": "https://images5.alphacoders.com/124/1246442.jpg", "description": "Shooter de héroes 5v5"},
    {"id": "6", "title": "Rocket League", "genre": "Deportes", "year": 2015, "image": "https://cdn2.unrealengine.com/rocketleague-share-1200x630-4e8b8639b21d.jpg", "description": "Fútbol con coches acrobáticos"},
    {"id": "7", "title": "CS:GO", "genre": "Shooter", "year": 2012, "image": "https://cdn.cloudflare.steamstatic.com/steam/apps/730/header.jpg", "description": "Shooter táctico competitivo"},
    {"id": "8", "title": "Warzone", "genre": "Battle Royale", "year": 2020, "image": "https://www.callofduty.com/content/dam/atvi/callofduty/cod-touchui/blog/hero/mwii/MWII-REVEAL-TOUT.jpg", "description": "Battle Royale de Call of Duty"},
)


class GameAdapter(StaticCatalogAdapter):
    category = "games"
    items = GAMES
    rating = 4.5
    additional_info = MappingProxyType({"platform": "PC / Consolas"})
