import re


_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """
    Derive a URL-safe slug from a display name.

    "PoE Switches" -> "poe-switches", "  UniFi / Cloud Key+ " -> "unifi-cloud-key".
    Collisions are not resolved here; the unique index on the owning table
    rejects them.
    """
    slug = _NON_ALNUM.sub("-", name.strip().lower())
    return slug.strip("-")
