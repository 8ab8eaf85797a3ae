"""Static frontend: assets by path, index.html for everything else."""
import logging
from pathlib import Path

from fastapi import APIRouter, Depends, status
from fastapi.responses import FileResponse, JSONResponse

from wealthwise.core.config import Settings
from wealthwise.core.dependencies import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Frontend"])

INDEX_FILE = "index.html"


def resolve_static_file(static_dir: Path, path: str) -> Path:
    """Map a request path onto a file inside ``static_dir``.

    Paths that escape the directory, do not name a file, or cannot be
    represented on the filesystem resolve to the index document.
    """
    root = static_dir.resolve()
    if path:
        try:
            candidate = (root / path).resolve()
            if root in candidate.parents and candidate.is_file():
                return candidate
        except (ValueError, OSError) as e:
            # null bytes, over-long names
            logger.debug("Unservable static path %r: %s", path, e)
    return root / INDEX_FILE


@router.get("/{full_path:path}", include_in_schema=False)
def serve_frontend(full_path: str, settings: Settings = Depends(get_settings)):
    target = resolve_static_file(Path(settings.STATIC_DIR), full_path)
    if not target.is_file():
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"message": "Frontend not found"},
        )
    return FileResponse(target)
