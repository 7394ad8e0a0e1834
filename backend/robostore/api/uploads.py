import logging
import shutil
import uuid
from pathlib import Path

from fastapi import UploadFile

from robostore.core.errors import UploadRejectedError

logger = logging.getLogger(__name__)


def _safe_name(filename: str) -> str:
    name = Path(filename).name.replace(" ", "_")
    return f"{uuid.uuid4().hex}-{name}"


def save_upload_files(files: list[UploadFile] | None, upload_dir: Path, max_files: int) -> list[Path]:
    """
    Spool multipart image files into upload_dir and return their paths in order.
    Everything is checked before the first byte is written.
    """
    files = [f for f in files or [] if f.filename]
    if len(files) > max_files:
        raise UploadRejectedError(f"Too many files: at most {max_files} images per request")
    for f in files:
        if not (f.content_type or "").startswith("image/"):
            raise UploadRejectedError("Only image files are allowed")

    upload_dir.mkdir(parents=True, exist_ok=True)
    saved: list[Path] = []
    try:
        for f in files:
            target = upload_dir / _safe_name(f.filename)
            with open(target, "wb") as out:
                shutil.copyfileobj(f.file, out)
            saved.append(target)
    except OSError:
        for path in saved:
            path.unlink(missing_ok=True)
        raise

    logger.debug("Spooled %d upload(s) into %s", len(saved), upload_dir)
    return saved
