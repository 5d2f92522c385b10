"""
Local file store for uploaded documents and product images

Files are saved under generated names (epoch milliseconds, a short random
segment and the sanitized original name) and referenced by their public path, e.g.
/uploads/1718000000000-3f9a1c2e-wheat.jpg.
"""

import logging
import re
import time
import uuid
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/uploads"


def safe_filename(original_name: str) -> str:
    """Strip directory parts and replace whitespace with underscores."""
    name = Path(original_name or "").name
    name = re.sub(r"\s+", "_", name.strip())
    return name or "file"


class FileStore:
    """Stores uploads on disk and maps them to public references."""

    def __init__(self, root: Path, public_prefix: str = PUBLIC_PREFIX):
        self.root = Path(root)
        self.public_prefix = public_prefix.rstrip("/")

    def ensure_root(self):
        self.root.mkdir(parents=True, exist_ok=True)

    def save(self, content: bytes, original_name: str) -> str:
        """
        Save file bytes under a generated name.

        Args:
            content: File content
            original_name: Client-provided file name

        Returns:
            Public reference (/uploads/<generated name>)
        """
        self.ensure_root()
        # Random segment keeps same-name uploads in the same millisecond apart
        filename = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{safe_filename(original_name)}"
        target = self.root / filename
        target.write_bytes(content)
        logger.info(f"Stored upload {filename} ({len(content)} bytes)")
        return self.public_ref(filename)

    def public_ref(self, filename: str) -> str:
        return f"{self.public_prefix}/{Path(filename).name}"

    def path_for(self, ref: Optional[str]) -> Optional[Path]:
        """Resolve a public reference back to a path inside the store."""
        if not ref:
            return None
        return self.root / Path(ref).name

    def remove(self, ref: Optional[str]) -> bool:
        """Delete a stored file by reference. Returns True if a file was removed."""
        path = self.path_for(ref)
        if path is None or not path.exists():
            return False
        path.unlink()
        logger.info(f"Removed stored file {path.name}")
        return True
