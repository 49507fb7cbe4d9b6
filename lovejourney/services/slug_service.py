"""
Génération des slugs publics (ex: /love/xYz12_a)
"""

import re
import secrets
import string

SLUG_LENGTH = 7
SLUG_ALPHABET = string.ascii_letters + string.digits + "_-"
SLUG_PATTERN = re.compile(r"[A-Za-z0-9_-]{%d}" % SLUG_LENGTH)


def generate_slug() -> str:
    return "".join(secrets.choice(SLUG_ALPHABET) for _ in range(SLUG_LENGTH))


def is_valid_slug(value) -> bool:
    return isinstance(value, str) and SLUG_PATTERN.fullmatch(value) is not None


def allocate_slug(store, generate=generate_slug) -> str:
    """
    Retourne un slug absent du store au moment du check.

    L'insert reste en course avec d'autres requêtes : l'index unique
    sur love_pages.slug tranche (voir publish_service).
    """
    while True:
        slug = generate()
        if not store.exists_by_slug(slug):
            return slug
