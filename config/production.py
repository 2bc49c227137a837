import os

from .config import *  # noqa: F401,F403
from .config import db_config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config()

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
SCAN_MAX_WORKERS = int(os.getenv("SCAN_MAX_WORKERS", "4"))
