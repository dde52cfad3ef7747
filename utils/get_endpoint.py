from urllib.parse import quote

ANALYTICS_PREFIX = "/tools/analytics"


def get_endpoint(key, **params):
    """Build `/tools/analytics/<key>` with a query string of the present params.

    None, False and empty-string values are left out entirely and True is sent
    as `true`. Parameter names are used verbatim, so pass the backend's own
    spelling (e.g. `**{"available-only": True}`).
    """
    query = []
    for name, value in params.items():
        if value is None or value is False or value == "":
            continue
        if value is True:
            value = "true"
        query.append(f"{name}={quote(str(value), safe='')}")

    path = f"{ANALYTICS_PREFIX}/{key}"
    if query:
        path += "?" + "&".join(query)
    return path
