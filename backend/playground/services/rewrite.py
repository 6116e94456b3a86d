LOCAL_HTTP_URL = "http://127.0.0.1:8899"
LOCAL_WS_URL = "ws://127.0.0.1:8900"


def rewrite_endpoints(code: str, http_url: str, ws_url: str) -> str:
    """Point hardcoded local validator endpoints at the configured ones."""
    return code.replace(LOCAL_HTTP_URL, http_url).replace(LOCAL_WS_URL, ws_url)
