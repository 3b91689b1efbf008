# data.py

import json
from pathlib import Path
from typing import Dict, List, Union

from errors import StorageError

# Films used to seed the local store on first start.
FILMS: List[Dict] = [
    {
        "id": "1",
        "title": "The Giant Gila Monster",
        "runtime": 108,
        "capacity": 30,
        "showtime": "04:00PM",
        "tickets_sold": 27,
        "description": "A giant lizard terrorizes a rural Texas community "
                       "and a heroic teenager attempts to destroy the creature.",
        "poster": "https://www.gstatic.com/tv/thumb/v22vodart/2157/p2157_v_v8_ab.jpg",
    },
    {
        "id": "2",
        "title": "Manos: The Hands Of Fate",
        "runtime": 118,
        "capacity": 50,
        "showtime": "06:45PM",
        "tickets_sold": 44,
        "description": "A family gets lost on the road and stumbles upon a "
                       "hidden, underground, devil-worshiping cult led by "
                       "the fearsome Master and his servant Torgo.",
        "poster": "https://www.gstatic.com/tv/thumb/v22vodart/47781/p47781_v_v8_ac.jpg",
    },
    {
        "id": "3",
        "title": "Time Chasers",
        "runtime": 93,
        "capacity": 50,
        "showtime": "09:30PM",
        "tickets_sold": 31,
        "description": "An inventor comes into possession of a time machine "
                       "and must keep it out of the hands of a corporation.",
        "poster": "https://www.gstatic.com/tv/thumb/v22vodart/10/p10_v_v8_ab.jpg",
    },
    {
        "id": "4",
        "title": "The Touch Of Satan",
        "runtime": 87,
        "capacity": 40,
        "showtime": "11:00PM",
        "tickets_sold": 40,
        "description": "A young man on a road trip meets a woman with a "
                       "dark family secret on a walnut farm.",
        "poster": "https://www.gstatic.com/tv/thumb/v22vodart/3404/p3404_v_v8_aa.jpg",
    },
    {
        "id": "5",
        "title": "Santa Claus Conquers The Martians",
        "runtime": 81,
        "capacity": 30,
        "showtime": "02:00PM",
        "tickets_sold": 12,
        "description": "The Martians kidnap Santa Claus because there is "
                       "nobody on Mars to give their children presents.",
        "poster": "https://www.gstatic.com/tv/thumb/v22vodart/1581/p1581_v_v8_aa.jpg",
    },
]


def load_films_document(path: Union[str, Path]) -> List[Dict]:
    """
    Reads a static JSON document with films.

    Accepts both the json-server layout ({"films": [...], "tickets": [...]})
    and a bare list of films.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            document = json.load(f)
    except (OSError, ValueError) as e:
        raise StorageError(f"Could not read films document {path}: {e}") from e

    if isinstance(document, dict):
        document = document.get("films", [])
    if not isinstance(document, list):
        raise StorageError(f"Films document {path} has no list of films")
    return document
