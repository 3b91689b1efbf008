# i18n.py

from typing import Dict

LANG_EN: Dict[str, str] = {
    "app_title": "Film Catalog",
    "films_group": "Films",
    "details_group": "Now showing",

    "subtitle": "Pick a film to see its details. Sold out films are greyed.",
    "search_placeholder": "Search films…",
    "reload_button": "Reload",
    "delete_button": "Delete",
    "loading": "Loading…",

    "runtime_label": "Runtime",
    "showtime_label": "Showtime",
    "available_label": "Available tickets",
    "buy_button": "Buy Ticket",
    "sold_out_button": "Sold Out",
    "no_films": "No films available",

    "confirm_title": "Please confirm",
    "ticket_saved": "Ticket stub saved: {path}",

    "lang_en": "EN",
    "lang_bg": "BG",
}

LANG_BG: Dict[str, str] = {
    "app_title": "Каталог на филми",
    "films_group": "Филми",
    "details_group": "На екран",

    "subtitle": "Избери филм за подробности. Разпродадените са в сиво.",
    "search_placeholder": "Търси филм…",
    "reload_button": "Презареди",
    "delete_button": "Изтрий",
    "loading": "Зареждане…",

    "runtime_label": "Продължителност",
    "showtime_label": "Прожекция",
    "available_label": "Свободни билети",
    "buy_button": "Купи билет",
    "sold_out_button": "Разпродадено",
    "no_films": "Няма филми",

    "confirm_title": "Потвърждение",
    "ticket_saved": "Билетът е записан: {path}",

    "lang_en": "EN",
    "lang_bg": "BG",
}

LANGS = {
    "en": LANG_EN,
    "bg": LANG_BG,
}


def get_translations(lang_code: str) -> Dict[str, str]:
    return LANGS.get(lang_code, LANG_EN)
