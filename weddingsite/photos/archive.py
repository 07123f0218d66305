import io
import zipfile
from collections.abc import Iterable


def build_zip(entries: Iterable[tuple[str, bytes]]) -> bytes:
    """Pack (name, content) pairs into an in-memory zip archive.

    Images are already compressed, so entries are stored as-is.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, mode="w", compression=zipfile.ZIP_STORED) as archive:
        for name, content in entries:
            archive.writestr(name, content)
    return buffer.getvalue()
