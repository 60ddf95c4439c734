import asyncio
import json
import logging
import os
import tempfile

from radiolib.config import settings

logger = logging.getLogger(__name__)


async def extract_metadata(file_path: str) -> dict:
    """Read the container duration with ffprobe; {} when it cannot be read."""
    cmd = [
        settings.FFPROBE_PATH,
        "-v", "quiet",
        "-print_format", "json",
        "-show_format",
        file_path,
    ]
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError:
        logger.warning("ffprobe not found at %s", settings.FFPROBE_PATH)
        return {}
    stdout, stderr = await proc.communicate()
    if proc.returncode != 0:
        return {}
    try:
        data = json.loads(stdout)
        fmt = data.get("format", {})
        return {"duration": float(fmt.get("duration", 0))}
    except (json.JSONDecodeError, ValueError):
        return {}


async def read_duration(data: bytes, suffix: str = ".mp3") -> int:
    """Duration of an audio blob in whole seconds; 0 when it cannot be read."""
    with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as tmp:
        tmp.write(data)
        tmp_path = tmp.name
    try:
        meta = await extract_metadata(tmp_path)
    finally:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
    return round(meta.get("duration", 0))
