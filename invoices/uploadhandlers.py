"""Upload handler that aborts an invoice document transfer once it passes the size limit."""

import logging

from django.conf import settings
from django.core.files.uploadhandler import FileUploadHandler, StopUpload

logger = logging.getLogger(__name__)


class MaxSizeUploadHandler(FileUploadHandler):
    """Counts bytes per file and stops the upload past ``max_size``.

    Sits in front of Django's default handlers, so nothing beyond the limit
    is buffered in memory or spooled to a temp file. After parsing, check
    :attr:`exceeded`; the truncated file is left out of ``request.FILES``.
    """

    def __init__(self, request=None, max_size=None):
        super().__init__(request)
        self.max_size = max_size or settings.INVOICE_DOCUMENT_MAX_SIZE
        self.received = 0
        self.exceeded = False

    def new_file(self, *args, **kwargs):
        super().new_file(*args, **kwargs)
        self.received = 0

    def receive_data_chunk(self, raw_data, start):
        self.received += len(raw_data)
        if self.received > self.max_size:
            self.exceeded = True
            logger.warning('Upload %r stopped after %s bytes (limit %s)', self.file_name, self.received, self.max_size)
            raise StopUpload(connection_reset=True)
        return raw_data

    def file_complete(self, file_size):
        return None
