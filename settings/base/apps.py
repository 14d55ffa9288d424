DJANGO_APPs = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
]

INTERNAL_APPS = [
    "spreadsheet_import",
]

INSTALLED_APPS = DJANGO_APPs + INTERNAL_APPS
