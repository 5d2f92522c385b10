"""
Multipart upload handling for the farmer routes
"""

import logging
from typing import Dict, List, Optional

from fastapi import UploadFile

from storage.file_store import FileStore

logger = logging.getLogger(__name__)


class UploadBatch:
    """
    Files saved while handling one request.

    If the request is rejected, discard() removes everything saved so far so
    no orphaned uploads are left behind.
    """

    def __init__(self, files: FileStore):
        self.files = files
        self.refs: List[str] = []

    async def save(self, upload: Optional[UploadFile]) -> Optional[str]:
        # Browsers send an empty part with no filename for untouched inputs
        if upload is None or not upload.filename:
            return None
        content = await upload.read()
        ref = self.files.save(content, upload.filename)
        self.refs.append(ref)
        return ref

    async def save_all(self, uploads: Dict[str, Optional[UploadFile]]) -> Dict[str, str]:
        saved = {}
        for field, upload in uploads.items():
            ref = await self.save(upload)
            if ref:
                saved[field] = ref
        return saved

    def discard(self):
        for ref in self.refs:
            self.files.remove(ref)
        if self.refs:
            logger.info(f"Discarded {len(self.refs)} upload(s) from rejected request")
        self.refs = []
