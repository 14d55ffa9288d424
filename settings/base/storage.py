from .base import BASE_DIR, config

MEDIA_ROOT = config("MEDIA_ROOT", default=str(BASE_DIR / "media"))

# Storages spreadsheets can be imported from; the alias is the import "disk"
STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
    },
    "staticfiles": {
        "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
    },
}

# Remote disk, requires the "s3" extra (django-storages)
IMPORT_S3_BUCKET_NAME = config("IMPORT_S3_BUCKET_NAME", default="")
if IMPORT_S3_BUCKET_NAME:
    STORAGES["s3"] = {
        "BACKEND": "storages.backends.s3boto3.S3Boto3Storage",
        "OPTIONS": {
            "bucket_name": IMPORT_S3_BUCKET_NAME,
            "default_acl": "private",
            "location": config("IMPORT_S3_LOCATION", default="imports"),
        },
    }
