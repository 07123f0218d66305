PUBLIC_PHOTOS_URL = "/api/photos"
UPLOAD_PHOTO_URL = "/api/photos/upload"

ADMIN_PHOTOS_URL = "/api/admin/photos"
ADMIN_PENDING_PHOTOS_URL = "/api/admin/photos/pending"
APPROVE_PHOTO_URL = "/api/admin/photos/{photo_id}/approve"
REJECT_PHOTO_URL = "/api/admin/photos/{photo_id}/reject"
DELETE_PHOTO_URL = "/api/admin/photos/{photo_id}"
BULK_APPROVE_PHOTOS_URL = "/api/admin/photos/bulk-approve"
BULK_DELETE_PHOTOS_URL = "/api/admin/photos/bulk-delete"
DOWNLOAD_PHOTOS_ZIP_URL = "/api/admin/photos/download-zip"
AUTO_APPROVE_SETTING_URL = "/api/admin/settings/auto-approve"
