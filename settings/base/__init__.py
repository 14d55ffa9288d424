# ruff: noqa

from .base import *
from .apps import *
from .database import *
from .internationalization import *
from .logging import *
from .middleware import *
from .storage import *
from .spreadsheet_import import *
