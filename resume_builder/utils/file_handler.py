import logging
import os
import uuid
from pathlib import Path
from typing import Union

import aiofiles

from ..exceptions import ExportError

logger = logging.getLogger(__name__)


async def write_file_atomic(path: Union[str, Path], content: bytes) -> Path:
    """
    Write ``content`` to ``path`` through a temporary sibling file.

    The target only appears once the write has fully succeeded; on failure the
    temporary file is removed and ``ExportError`` is raised.
    """
    path = Path(path)
    tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(tmp_path, "wb") as out_file:
            await out_file.write(content)
        os.replace(tmp_path, path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        logger.error("Failed to write %s: %s", path, e)
        raise ExportError(f"Failed to write {path.name}", {"cause": str(e)}) from e

    logger.info("Wrote %s (%d bytes)", path, len(content))
    return path
