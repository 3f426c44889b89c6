"""HTTP-related utility helpers."""


def query_flag(request, name):
    """Read a boolean query parameter such as ``?is_active=true``; None when absent."""
    value = request.query_params.get(name)
    if value is None or value == "":
        return None
    return value.lower() in ("1", "true", "yes")


def uploaded_image(request, field="image"):
    """Return the uploaded file for ``field`` when the request is multipart, else None."""
    files = getattr(request, "FILES", None)
    if not files:
        return None
    return files.get(field)
