def content_key(path: str) -> str:
    """
    Maps a public URL path to its storage key.

    Only a single leading slash is removed: "/about" -> "about",
    "//about" -> "/about", "about" -> "about". Reads and writes both go
    through here so a record stored as "/about" renders at /about.
    """
    if path.startswith("/"):
        return path[1:]
    return path
