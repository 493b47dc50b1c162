from urllib.parse import quote


def attachment_disposition(filename: str) -> str:
    """Content-Disposition value that survives non-ASCII filenames"""
    ascii_name = filename.encode("ascii", "ignore").decode("ascii").replace('"', "") or "download"
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"
