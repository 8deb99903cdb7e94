from merechat.infrastructure.storage.local_attachment_storage import LocalAttachmentStorage

__all__ = ["LocalAttachmentStorage"]
