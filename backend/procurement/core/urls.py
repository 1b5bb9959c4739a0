from urllib.parse import urlencode


def build_absolute_url(base_url: str, path: str, query: dict | None = None) -> str:
    """Join ``path`` onto ``base_url`` and append an encoded query string."""
    if not base_url:
        raise ValueError("base_url is not configured")
    url = base_url.rstrip("/") + "/" + path.lstrip("/")
    if query:
        url = f"{url}?{urlencode(query)}"
    return url
